"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from spanstore.adapters.csv_source import build_csv_source
from spanstore.adapters.memory import InMemoryTemporalRecordRepository
from spanstore.config import get_ingest_config
from spanstore.domain.data_integration import LoadResult, load_records

if TYPE_CHECKING:
    from pathlib import Path

    from spanstore.config import IngestConfig
    from spanstore.domain.ports.fetching import RecordSource
    from spanstore.domain.ports.persistence import TemporalRecordRepository


log = getLogger(__name__)


def create_store() -> InMemoryTemporalRecordRepository:
    return InMemoryTemporalRecordRepository()


def load_file(
    store: TemporalRecordRepository,
    *,
    path: str | Path | None = None,
    source: RecordSource | None = None,
    config: IngestConfig | None = None,
) -> LoadResult:
    """Load one CSV file into ``store`` using the configured batch size."""

    effective_config = (config or get_ingest_config()).with_overrides(source_path=path)
    effective_source = source or build_csv_source(effective_config.require_source_path())
    log.info(
        "Starting load: source=%s, batch_size=%s",
        effective_config.source_path,
        effective_config.batch_size,
    )

    result = load_records(
        source=effective_source,
        store=store,
        batch_size=effective_config.batch_size,
    )

    log.info(
        f"Finished load: read={result.read}, accepted={result.accepted}, "
        f"applied={result.applied}, flushes={result.flushes}, errors={len(result.errors)}, "
        f"stored={len(store)}"
    )

    return result
