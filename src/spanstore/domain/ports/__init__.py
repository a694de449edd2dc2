"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import RecordSource, SourceEntry
from .persistence import TemporalRecordRepository

__all__ = [
    "RecordSource",
    "SourceEntry",
    "TemporalRecordRepository",
]
