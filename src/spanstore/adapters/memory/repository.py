"""In-memory repository for temporal records."""

from __future__ import annotations

from operator import attrgetter
from typing import TYPE_CHECKING

from spanstore.domain.ports.persistence import TemporalRecordRepository

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from spanstore.domain.model import TemporalRecord

_by_start = attrgetter("start")


class InMemoryTemporalRecordRepository(TemporalRecordRepository):
    """Dictionary of per-key record lists.

    Lists are kept in insertion order between ``reorder`` calls, matching how the
    reconciliation pipeline appends and then re-sorts after each flush.
    """

    def __init__(self, records: Iterable[TemporalRecord] = ()) -> None:
        self._timelines: dict[str, list[TemporalRecord]] = {}
        for record in records:
            self.add(record)
        self.reorder()

    def records_for(self, key: str) -> list[TemporalRecord]:
        return sorted(self._timelines.get(key, ()), key=_by_start)

    def add(self, record: TemporalRecord) -> None:
        self._timelines.setdefault(record.key, []).append(record)

    def remove(self, record: TemporalRecord) -> None:
        timeline = self._timelines.get(record.key)
        if timeline is None:
            return
        for index, candidate in enumerate(timeline):
            if candidate is record:
                del timeline[index]
                break
        if not timeline:
            del self._timelines[record.key]

    def reorder(self) -> None:
        self._timelines = {
            key: sorted(self._timelines[key], key=_by_start) for key in sorted(self._timelines)
        }

    def snapshot(self) -> tuple[TemporalRecord, ...]:
        return tuple(
            sorted(
                (record for timeline in self._timelines.values() for record in timeline),
                key=lambda record: record.sort_key(),
            )
        )

    def keys(self) -> Iterator[str]:
        return iter(sorted(self._timelines))

    def __len__(self) -> int:
        return sum(len(timeline) for timeline in self._timelines.values())

    @property
    def is_empty(self) -> bool:
        return not self._timelines
