"""Batched ingestion of temporal records.

Incoming records are grouped per key in a ``PendingBatch``; the
``BatchIngestionPipeline`` validates each group and hands it to the overlap
resolver whenever the distinct-key threshold is reached.
"""

from __future__ import annotations

from .batching import DEFAULT_BATCH_SIZE, BatchIngestionPipeline
from .state import PendingBatch

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "BatchIngestionPipeline",
    "PendingBatch",
]
