from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from spanstore.adapters.memory import InMemoryTemporalRecordRepository
from spanstore.config import BATCH_SIZE_ENV, SOURCE_PATH_ENV

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(BATCH_SIZE_ENV, raising=False)
    monkeypatch.delenv(SOURCE_PATH_ENV, raising=False)


@pytest.fixture
def store() -> InMemoryTemporalRecordRepository:
    return InMemoryTemporalRecordRepository()


@pytest.fixture
def csv_file(tmp_path: Path) -> Callable[..., Path]:
    def factory(*lines: str, name: str = "records.csv") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return factory
