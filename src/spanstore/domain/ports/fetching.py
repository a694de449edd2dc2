"""Ports for reading records from external sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator

    from spanstore.domain.model import LoadError, TemporalRecord


@dataclass(frozen=True, slots=True)
class ParsedRow:
    """A source line that parsed into a record."""

    record: TemporalRecord
    line: str


@dataclass(frozen=True, slots=True)
class RejectedRow:
    """A source line that could not be turned into a record."""

    error: LoadError


SourceEntry: TypeAlias = ParsedRow | RejectedRow


@runtime_checkable
class RecordSource(Protocol):
    """Callable port yielding one entry per data line of a source.

    Implementations raise ``OSError`` from iteration when the source cannot be read.
    """

    def __call__(self) -> Iterator[SourceEntry]: ...


__all__ = ["ParsedRow", "RecordSource", "RejectedRow", "SourceEntry"]
