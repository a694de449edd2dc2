"""Public domain model surface."""

from __future__ import annotations

from spanstore.domain.model.errors import LoadError, LoadErrorKind
from spanstore.domain.model.record import DATE_FORMAT, TemporalRecord, format_date

__all__ = [
    "DATE_FORMAT",
    "LoadError",
    "LoadErrorKind",
    "TemporalRecord",
    "format_date",
]
