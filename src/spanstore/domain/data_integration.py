"""Application services for loading temporal records."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from spanstore.domain.ingest_pipeline import DEFAULT_BATCH_SIZE, BatchIngestionPipeline
from spanstore.domain.model import LoadError, LoadErrorKind
from spanstore.domain.ports.fetching import ParsedRow

if TYPE_CHECKING:
    from spanstore.domain.ports.fetching import RecordSource
    from spanstore.domain.ports.persistence import TemporalRecordRepository


log = getLogger(__name__)


@dataclass(slots=True)
class LoadResult:
    """Outcome of one load operation."""

    read: int
    accepted: int
    applied: int
    flushes: int
    errors: tuple[LoadError, ...]
    io_error: str | None = None

    @property
    def ok(self) -> bool:
        return self.io_error is None and not self.errors


def load_records(
    *,
    source: RecordSource,
    store: TemporalRecordRepository,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> LoadResult:
    """Reconcile every row of ``source`` into ``store``.

    Row-level problems are collected and never stop the load. A read failure
    aborts it: groups flushed before the failure stay in ``store``, anything
    still pending is discarded.
    """

    pipeline = BatchIngestionPipeline(store, batch_size=batch_size)
    read = 0
    accepted = 0
    io_error: str | None = None

    try:
        for entry in source():
            read += 1
            if isinstance(entry, ParsedRow):
                if pipeline.submit(entry.record, line=entry.line):
                    accepted += 1
            else:
                pipeline.record_error(entry.error)
        pipeline.finish()
    except (OSError, UnicodeDecodeError) as exc:
        io_error = f"Error reading file: {exc}"
        pipeline.discard_pending()
        pipeline.record_error(LoadError(kind=LoadErrorKind.IO_FAILURE, message=io_error))

    log.debug(
        "Load finished: read=%s, accepted=%s, errors=%s", read, accepted, len(pipeline.errors)
    )
    return LoadResult(
        read=read,
        accepted=accepted,
        applied=pipeline.applied,
        flushes=pipeline.flushes,
        errors=pipeline.errors,
        io_error=io_error,
    )
