"""Ports for holding temporal records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator

    from spanstore.domain.model import TemporalRecord


@runtime_checkable
class TemporalRecordRepository(Protocol):
    """Authoritative per-key timelines of temporal records."""

    def records_for(self, key: str) -> list[TemporalRecord]:
        """Return the records for ``key`` ordered by start date."""
        ...

    def add(self, record: TemporalRecord) -> None: ...

    def remove(self, record: TemporalRecord) -> None: ...

    def reorder(self) -> None:
        """Restore canonical ordering (key, then start date)."""
        ...

    def snapshot(self) -> tuple[TemporalRecord, ...]:
        """Return every record ordered by key, then start date."""
        ...

    def keys(self) -> Iterator[str]: ...

    def __len__(self) -> int: ...

    @property
    def is_empty(self) -> bool: ...
