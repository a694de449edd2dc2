"""Calendar-day interval arithmetic for temporal records.

Intervals are closed on both sides. An absent end (``None``) means the
interval is unbounded towards the future.
"""

from __future__ import annotations

from datetime import date, timedelta

_ONE_DAY = timedelta(days=1)


def overlaps(start1: date, end1: date | None, start2: date, end2: date | None) -> bool:
    """Return ``True`` when the closed intervals ``[start1, end1]`` and ``[start2, end2]`` meet.

    Both ends absent always overlap; the check is symmetric in its two intervals.
    """

    return (end1 is None or start2 <= end1) and (end2 is None or start1 <= end2)


def day_before(value: date) -> date:
    return value - _ONE_DAY


def day_after(value: date) -> date:
    return value + _ONE_DAY


__all__ = ["day_after", "day_before", "overlaps"]
