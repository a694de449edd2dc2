"""Pending-batch bookkeeping for one load operation."""

from __future__ import annotations

from dataclasses import dataclass, field
from operator import attrgetter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spanstore.domain.model import TemporalRecord

_by_start = attrgetter("start")


@dataclass(slots=True)
class PendingBatch:
    """Records waiting to be applied, grouped by key.

    ``poisoned`` outlives individual flushes: a key whose incoming records
    conflicted stays excluded until the load ends.
    """

    groups: dict[str, list[TemporalRecord]] = field(default_factory=dict)
    poisoned: set[str] = field(default_factory=set)

    def __contains__(self, key: object) -> bool:
        return key in self.groups

    def __len__(self) -> int:
        return len(self.groups)

    def group(self, key: str) -> list[TemporalRecord]:
        """Return the pending list for ``key``, starting an empty one if needed."""

        return self.groups.setdefault(key, [])

    def first_conflict(self, record: TemporalRecord) -> TemporalRecord | None:
        """Return a pending record of the same key overlapping ``record``, if any."""

        for pending in self.groups.get(record.key, ()):
            if pending.overlaps(record):
                return pending
        return None

    def append(self, record: TemporalRecord) -> None:
        group = self.group(record.key)
        group.append(record)
        group.sort(key=_by_start)

    def poison(self, key: str) -> None:
        self.poisoned.add(key)

    def is_poisoned(self, key: str) -> bool:
        return key in self.poisoned

    def drain(self) -> dict[str, list[TemporalRecord]]:
        """Return the applicable groups and clear the pending map.

        Groups of poisoned keys are dropped.
        """

        ready = {
            key: group
            for key, group in self.groups.items()
            if key not in self.poisoned and group
        }
        self.groups = {}
        return ready
