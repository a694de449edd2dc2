"""Key-grouped batching in front of the overlap resolver."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from spanstore.domain.model import LoadError, LoadErrorKind
from spanstore.domain.reconciliation import resolve_record

from .state import PendingBatch

if TYPE_CHECKING:
    from spanstore.domain.model import TemporalRecord
    from spanstore.domain.ports.persistence import TemporalRecordRepository

DEFAULT_BATCH_SIZE = 2

log = getLogger(__name__)


class BatchIngestionPipeline:
    """Buffer incoming records by key and apply them to ``store`` in groups.

    A group of ``batch_size`` distinct keys is flushed when a record for a key
    outside the group arrives. Records of one key that overlap each other
    poison that key for the remainder of the load: the conflicting record and
    everything still pending or yet to arrive for the key are dropped.

    One instance serves one load operation.
    """

    def __init__(
        self,
        store: TemporalRecordRepository,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"Batch size must be positive, got {batch_size}")
        self.store = store
        self.batch_size = batch_size
        self.pending = PendingBatch()
        self._errors: list[LoadError] = []
        self.flushes = 0
        self.applied = 0

    @property
    def errors(self) -> tuple[LoadError, ...]:
        return tuple(self._errors)

    @property
    def poisoned_keys(self) -> frozenset[str]:
        return frozenset(self.pending.poisoned)

    @property
    def pending_keys(self) -> tuple[str, ...]:
        return tuple(self.pending.groups)

    def record_error(self, error: LoadError) -> None:
        log.warning("%s", error.message)
        self._errors.append(error)

    def submit(self, record: TemporalRecord, *, line: str) -> bool:
        """Queue ``record`` read from ``line``; return whether it was accepted."""

        key = record.key
        if self.pending.is_poisoned(key):
            return False

        if len(self.pending) == self.batch_size and key not in self.pending:
            self.flush()

        if self.pending.first_conflict(record) is not None:
            self.record_error(
                LoadError(
                    kind=LoadErrorKind.KEY_CONFLICT,
                    message=f"Date overlap for key {key}: {line}",
                    line=line,
                )
            )
            self.pending.poison(key)
            return False

        self.pending.append(record)
        return True

    def flush(self) -> None:
        """Apply every non-poisoned pending group to the store."""

        self._flush("Processing batch for keys: %s")

    def finish(self) -> None:
        """Flush whatever is still pending at the end of the input."""

        self._flush("Processing final batch for keys: %s")

    def _flush(self, message: str) -> None:
        if not len(self.pending):
            return
        log.info(message, list(self.pending.groups))
        ready = self.pending.drain()
        for key, records in ready.items():
            existing = self.store.records_for(key)
            for record in records:
                outcome = resolve_record(record, existing, store=self.store)
                if not outcome.handled:
                    self.store.add(record)
                self.applied += 1
        self.store.reorder()
        self.flushes += 1

    def discard_pending(self) -> None:
        """Drop pending groups without applying them."""

        self.pending.groups.clear()
