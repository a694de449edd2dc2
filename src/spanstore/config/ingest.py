"""Load-operation configuration values."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from .env import optional_env_var, positive_int_env_var, require_env_vars
from .errors import ConfigurationError

DEFAULT_BATCH_SIZE = 2
BATCH_SIZE_ENV = "SPANSTORE_BATCH_SIZE"
SOURCE_PATH_ENV = "SPANSTORE_SOURCE_PATH"


@dataclass(frozen=True, slots=True)
class IngestConfig:
    """Settings for reading and batching records.

    ``batch_size`` is the number of distinct keys buffered before a flush.
    """

    batch_size: int = DEFAULT_BATCH_SIZE
    source_path: Path | None = None

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ConfigurationError(f"Batch size must be positive, got {self.batch_size}")

    def with_overrides(
        self,
        *,
        batch_size: int | None = None,
        source_path: str | Path | None = None,
    ) -> IngestConfig:
        """Return a copy with any provided values replaced."""

        return replace(
            self,
            batch_size=self.batch_size if batch_size is None else batch_size,
            source_path=self.source_path if source_path is None else Path(source_path),
        )

    def require_source_path(self) -> Path:
        if self.source_path is not None:
            return self.source_path
        return Path(require_env_vars((SOURCE_PATH_ENV,))[SOURCE_PATH_ENV])


def get_ingest_config() -> IngestConfig:
    source = optional_env_var(SOURCE_PATH_ENV)
    return IngestConfig(
        batch_size=positive_int_env_var(BATCH_SIZE_ENV, default=DEFAULT_BATCH_SIZE),
        source_path=Path(source).expanduser() if source else None,
    )
