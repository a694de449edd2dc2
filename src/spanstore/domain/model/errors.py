"""Recorded load errors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class LoadErrorKind(StrEnum):
    MALFORMED_ROW = "malformed_row"
    PARSE_ERROR = "parse_error"
    KEY_CONFLICT = "key_conflict"
    IO_FAILURE = "io_failure"


@dataclass(frozen=True, slots=True)
class LoadError:
    """A non-fatal problem observed while loading records.

    ``line`` holds the offending input line when the error is tied to one.
    """

    kind: LoadErrorKind
    message: str
    line: str | None = None

    def __str__(self) -> str:
        return self.message
