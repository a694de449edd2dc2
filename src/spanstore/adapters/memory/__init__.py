"""In-memory persistence adapter."""

from __future__ import annotations

from .repository import InMemoryTemporalRecordRepository

__all__ = ["InMemoryTemporalRecordRepository"]
