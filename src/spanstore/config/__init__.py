"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, positive_int_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .ingest import (
    BATCH_SIZE_ENV,
    DEFAULT_BATCH_SIZE,
    SOURCE_PATH_ENV,
    IngestConfig,
    get_ingest_config,
)
from .logging import configure_logging

__all__ = [
    "BATCH_SIZE_ENV",
    "DEFAULT_BATCH_SIZE",
    "SOURCE_PATH_ENV",
    "ConfigurationError",
    "IngestConfig",
    "MissingConfigurationError",
    "configure_logging",
    "get_ingest_config",
    "optional_env_var",
    "positive_int_env_var",
    "require_env_vars",
]
