"""Shared reconciliation contract components."""

from __future__ import annotations

from enum import StrEnum


class Resolution(StrEnum):
    """Outcome of integrating one new record into its key's timeline."""

    UPDATED = "updated"
    """An existing record with the same start absorbed the new end and value."""

    REPLACED = "replaced"
    """Overlapping records were truncated or removed and the new record inserted."""

    UNMATCHED = "unmatched"
    """Nothing matched or overlapped; the caller must add the record."""

    @property
    def handled(self) -> bool:
        return self is not Resolution.UNMATCHED
