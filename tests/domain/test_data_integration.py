from __future__ import annotations

from itertools import pairwise
from typing import TYPE_CHECKING

import pytest

from spanstore.adapters.csv_source import CsvRecordSource
from spanstore.adapters.memory import InMemoryTemporalRecordRepository
from spanstore.domain.data_integration import load_records
from spanstore.domain.model import LoadErrorKind
from tests.helpers.records import (
    FailingRecordSource,
    FakeRecordSource,
    csv_lines,
    make_record,
    non_overlapping_rows,
    rows,
    timeline,
)

if TYPE_CHECKING:
    from pathlib import Path


def _assert_timelines_valid(store: InMemoryTemporalRecordRepository) -> None:
    for key in store.keys():
        records = store.records_for(key)
        for record in records:
            assert record.end is None or record.start <= record.end
        for earlier, later in pairwise(records):
            assert earlier.end is not None
            assert earlier.end < later.start


def test_exact_start_with_bounded_end_over_open_record(
    store: InMemoryTemporalRecordRepository,
) -> None:
    store.add(make_record("A", "2023-01-01", None, 10))

    result = load_records(
        source=FakeRecordSource(csv_lines("01-01-2023,12-31-2023,false,A,20")),
        store=store,
    )

    assert result.ok
    assert timeline(store, "A")[0] == ("2023-01-01", "2023-12-31", 20)
    assert timeline(store, "A")[1:] == [("2024-01-01", None, 10)]


def test_exact_start_with_open_end_updates_existing(
    store: InMemoryTemporalRecordRepository,
) -> None:
    store.add(make_record("A", "2023-01-01", "2023-06-30", 10))

    load_records(source=FakeRecordSource(csv_lines("01-01-2023,,false,A,20")), store=store)

    assert timeline(store, "A") == [("2023-01-01", None, 20)]


def test_truncates_open_record_around_bounded_insert(
    store: InMemoryTemporalRecordRepository,
) -> None:
    store.add(make_record("B", "2023-01-01", None, 5))

    load_records(
        source=FakeRecordSource(csv_lines("06-01-2023,06-30-2023,false,B,15")),
        store=store,
    )

    assert rows(store) == [
        "01-01-2023,05-31-2023,false,B,5",
        "06-01-2023,06-30-2023,false,B,15",
    ]


def test_conflicting_rows_in_one_load_are_dropped(
    store: InMemoryTemporalRecordRepository,
) -> None:
    result = load_records(
        source=FakeRecordSource(
            csv_lines(
                "01-01-2023,06-30-2023,false,C,1",
                "03-01-2023,12-31-2023,false,C,2",
            )
        ),
        store=store,
    )

    assert [error.kind for error in result.errors] == [LoadErrorKind.KEY_CONFLICT]
    assert result.errors[0].message == "Date overlap for key C: 03-01-2023,12-31-2023,false,C,2"
    assert store.records_for("C") == []
    assert store.is_empty


def test_row_with_wrong_field_count_is_recorded(
    store: InMemoryTemporalRecordRepository,
) -> None:
    result = load_records(
        source=FakeRecordSource(csv_lines("01-01-2023,,false,D")),
        store=store,
    )

    assert [error.kind for error in result.errors] == [LoadErrorKind.MALFORMED_ROW]
    assert result.errors[0].message == "Invalid row format: 01-01-2023,,false,D"
    assert store.is_empty
    assert result.read == 1
    assert result.accepted == 0


def test_flush_order_with_three_keys(store: InMemoryTemporalRecordRepository) -> None:
    result = load_records(
        source=FakeRecordSource(
            csv_lines(
                "01-01-2023,,false,A,1",
                "01-01-2023,,false,B,2",
                "01-01-2023,,false,C,3",
            )
        ),
        store=store,
        batch_size=2,
    )

    assert result.flushes == 2
    assert result.applied == 3
    assert [record.key for record in store.snapshot()] == ["A", "B", "C"]


def test_parse_errors_do_not_stop_the_load(store: InMemoryTemporalRecordRepository) -> None:
    result = load_records(
        source=FakeRecordSource(
            csv_lines(
                "13-45-2023,,false,A,1",
                "01-01-2023,,false,A,not-a-number",
                "01-01-2023,,maybe,A,1",
                "01-01-2023,,false,A,7",
            )
        ),
        store=store,
    )

    assert [error.kind for error in result.errors] == [LoadErrorKind.PARSE_ERROR] * 3
    assert timeline(store, "A") == [("2023-01-01", None, 7)]
    assert result.read == 4
    assert result.accepted == 1


def test_io_failure_keeps_committed_flushes(store: InMemoryTemporalRecordRepository) -> None:
    source = FailingRecordSource(
        csv_lines(
            "01-01-2023,,false,A,1",
            "01-01-2023,,false,B,2",
            "01-01-2023,,false,C,3",
        )
    )

    result = load_records(source=source, store=store, batch_size=2)

    assert result.io_error == "Error reading file: device not ready"
    assert result.errors[-1].kind is LoadErrorKind.IO_FAILURE
    assert not result.ok
    assert [record.key for record in store.snapshot()] == ["A", "B"]


def test_missing_file_is_reported_not_raised(
    store: InMemoryTemporalRecordRepository, tmp_path: Path
) -> None:
    result = load_records(source=CsvRecordSource(tmp_path / "absent.csv"), store=store)

    assert result.io_error is not None
    assert result.io_error.startswith("Error reading file:")
    assert result.read == 0


def test_exact_replay_only_updates_values(store: InMemoryTemporalRecordRepository) -> None:
    keys = ("A", "B", "C")
    load_records(source=FakeRecordSource(csv_lines(*non_overlapping_rows(keys))), store=store)
    counts = {key: len(store.records_for(key)) for key in keys}

    replay = [line.rsplit(",", 1)[0] + ",99" for line in non_overlapping_rows(keys)]
    result = load_records(source=FakeRecordSource(csv_lines(*replay)), store=store)

    assert result.ok
    assert {key: len(store.records_for(key)) for key in keys} == counts
    assert {record.value for record in store.snapshot()} == {99}


def _seeded_store() -> InMemoryTemporalRecordRepository:
    return InMemoryTemporalRecordRepository(
        [
            make_record("A", "2023-01-01", None, 0),
            make_record("B", "2023-01-01", "2023-12-31", 0),
            make_record("C", "2023-06-01", None, 0),
        ]
    )


@pytest.mark.parametrize("batch_size", [1, 2, 3, 10])
def test_batch_size_does_not_change_outcome(batch_size: int) -> None:
    lines = csv_lines(
        "03-01-2023,03-31-2023,false,A,1",
        "06-01-2023,,false,B,1",
        "06-01-2023,,false,A,2",
        "01-01-2023,01-31-2023,false,C,1",
        "01-01-2023,03-31-2023,false,B,2",
        "06-01-2023,06-30-2023,false,C,2",
    )
    reference = _seeded_store()
    load_records(source=FakeRecordSource(lines), store=reference, batch_size=len(lines))

    store = _seeded_store()
    load_records(source=FakeRecordSource(lines), store=store, batch_size=batch_size)

    assert rows(store) == rows(reference)
    assert timeline(store, "B") == [
        ("2023-01-01", "2023-03-31", 2),
        ("2023-04-01", "2023-05-31", 0),
        ("2023-06-01", None, 1),
    ]
    _assert_timelines_valid(store)


def test_timelines_stay_ordered_and_disjoint_after_mixed_loads(
    store: InMemoryTemporalRecordRepository,
) -> None:
    load_records(
        source=FakeRecordSource(
            csv_lines(
                "01-01-2023,,false,K,1",
                "01-01-2023,12-31-2023,false,L,1",
            )
        ),
        store=store,
    )
    load_records(
        source=FakeRecordSource(
            csv_lines(
                "03-01-2023,04-30-2023,false,K,2",
                "06-01-2023,,false,L,2",
                "01-01-2022,02-15-2023,false,K,3",
                "02-01-2023,02-28-2023,false,L,3",
            )
        ),
        store=store,
        batch_size=1,
    )

    _assert_timelines_valid(store)
    open_ended = [record for record in store.snapshot() if record.end is None]
    assert {record.key for record in open_ended} == {"L"}


def test_undecodable_file_is_reported_not_raised(tmp_path: Path) -> None:
    path = tmp_path / "records.csv"
    path.write_bytes(b"h\n01-01-2023,,false,A,1\n01-01-2023,,false,B,\xff\n")
    store = InMemoryTemporalRecordRepository([make_record("Z", "2022-01-01", None, 4)])

    result = load_records(source=CsvRecordSource(path), store=store)

    assert result.io_error is not None
    assert result.io_error.startswith("Error reading file:")
    assert result.errors[-1].kind is LoadErrorKind.IO_FAILURE
    assert rows(store) == ["01-01-2022,,false,Z,4"]


def test_tombstone_row_truncates_like_any_other(store: InMemoryTemporalRecordRepository) -> None:
    store.add(make_record("B", "2023-01-01", None, 5))

    result = load_records(
        source=FakeRecordSource(csv_lines("06-01-2023,06-30-2023,true,B,15")),
        store=store,
    )

    assert result.ok
    assert rows(store) == [
        "01-01-2023,05-31-2023,false,B,5",
        "06-01-2023,06-30-2023,true,B,15",
    ]


def test_tombstone_row_for_new_key_is_inserted(store: InMemoryTemporalRecordRepository) -> None:
    load_records(source=FakeRecordSource(csv_lines("01-01-2023,,TRUE,N,3")), store=store)

    assert rows(store) == ["01-01-2023,,true,N,3"]


@pytest.mark.parametrize(("existing_flag", "incoming"), [(True, "false"), (False, "true")])
def test_exact_start_update_keeps_existing_tombstone(
    store: InMemoryTemporalRecordRepository, existing_flag: bool, incoming: str
) -> None:
    store.add(make_record("A", "2023-01-01", "2023-06-30", 10, tombstone=existing_flag))

    load_records(
        source=FakeRecordSource(csv_lines(f"01-01-2023,,{incoming},A,20")), store=store
    )

    flag = "true" if existing_flag else "false"
    assert rows(store) == [f"01-01-2023,,{flag},A,20"]
