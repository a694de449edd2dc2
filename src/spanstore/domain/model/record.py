"""Temporal record entity."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Final

from spanstore.domain.intervals import overlaps

if TYPE_CHECKING:
    from datetime import date

DATE_FORMAT: Final[str] = "%m-%d-%Y"


def format_date(value: date | None) -> str:
    """Render ``value`` as ``MM-DD-YYYY``; an absent date renders as an empty string."""

    if value is None:
        return ""
    return value.strftime(DATE_FORMAT)


@dataclass(eq=False, slots=True, kw_only=True)
class TemporalRecord:
    """A value valid for ``key`` from ``start`` through ``end`` (inclusive).

    Records are owned by the store and edited in place during reconciliation,
    so equality is identity. ``tombstone`` is carried along but not interpreted.
    """

    key: str
    start: date
    end: date | None = None
    value: int
    tombstone: bool = False

    def overlaps(self, other: TemporalRecord) -> bool:
        return overlaps(self.start, self.end, other.start, other.end)

    def copy(self) -> TemporalRecord:
        return replace(self)

    def to_row(self) -> str:
        """Render the record as a ``start,end,delete,key,value`` line."""

        tombstone = "true" if self.tombstone else "false"
        start, end = format_date(self.start), format_date(self.end)
        return f"{start},{end},{tombstone},{self.key},{self.value}"

    def sort_key(self) -> tuple[str, date]:
        return (self.key, self.start)
