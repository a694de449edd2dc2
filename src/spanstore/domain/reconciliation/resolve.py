"""Overlap resolution for a single incoming record.

Responsibilities of this stage:
- detect an existing record starting on the same day and update it in place
- otherwise classify every overlapping existing record as contained, starting
  earlier, or extending past the new record, and trim or remove it accordingly
- insert the new record once its overlaps have been cleared

An existing record that both starts before and ends after a bounded new record
is only cut back on its earlier side; the coverage after the new record's end
is dropped rather than split into a second record.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from spanstore.domain.intervals import day_after, day_before

from .contracts import Resolution

if TYPE_CHECKING:
    from collections.abc import Sequence

    from spanstore.domain.model import TemporalRecord
    from spanstore.domain.ports.persistence import TemporalRecordRepository


log = getLogger(__name__)


def is_contained(existing: TemporalRecord, new_record: TemporalRecord) -> bool:
    """Return whether ``existing`` lies entirely within ``new_record``'s span."""

    if existing.start < new_record.start:
        return False
    if new_record.end is None:
        return True
    return existing.end is not None and existing.end <= new_record.end


def resolve_record(
    new_record: TemporalRecord,
    existing: Sequence[TemporalRecord],
    *,
    store: TemporalRecordRepository,
) -> Resolution:
    """Integrate ``new_record`` against ``existing`` records of the same key.

    ``existing`` is the key's timeline as it stood when the flush began; the
    records in it are edited in place and removals go through ``store``.
    ``new_record`` itself is never modified; on ``REPLACED`` a copy is added.
    """

    overlapping: list[TemporalRecord] = []
    for candidate in existing:
        if candidate.start == new_record.start and candidate.key == new_record.key:
            if new_record.end is None or new_record.end == candidate.end:
                log.debug(
                    "Updating %s from %s in place: end=%s, value=%s",
                    candidate.key,
                    candidate.start,
                    new_record.end,
                    new_record.value,
                )
                candidate.end = new_record.end
                candidate.value = new_record.value
                return Resolution.UPDATED
        if candidate.overlaps(new_record):
            overlapping.append(candidate)

    if not overlapping:
        return Resolution.UNMATCHED

    for candidate in overlapping:
        if is_contained(candidate, new_record):
            log.debug("Removing %s from %s, superseded", candidate.key, candidate.start)
            store.remove(candidate)
        elif candidate.start < new_record.start:
            candidate.end = day_before(new_record.start)
            log.debug(
                "Truncated %s from %s to end %s", candidate.key, candidate.start, candidate.end
            )
        elif new_record.end is not None:
            # an open-ended new record contains every overlap starting at or after it
            candidate.start = day_after(new_record.end)
            log.debug("Moved start of %s to %s", candidate.key, candidate.start)

    store.add(new_record.copy())
    return Resolution.REPLACED
