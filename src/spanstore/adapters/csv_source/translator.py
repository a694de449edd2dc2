"""Translate CSV lines into temporal records."""

from __future__ import annotations

from pydantic import ValidationError

from spanstore.domain.model import LoadError, LoadErrorKind, TemporalRecord
from spanstore.domain.ports.fetching import ParsedRow, RejectedRow, SourceEntry

from .schema import FIELD_NAMES, RecordRow


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'row'}: {error['msg']}"
        for error in exc.errors()
    )


def to_record(row: RecordRow) -> TemporalRecord:
    return TemporalRecord(
        key=row.key,
        start=row.start,
        end=row.end,
        value=row.value,
        tombstone=row.delete,
    )


def parse_line(line: str) -> SourceEntry:
    """Parse one data line, returning either the record or the reason it was rejected."""

    fields = line.split(",")
    if len(fields) != len(FIELD_NAMES):
        return RejectedRow(
            LoadError(
                kind=LoadErrorKind.MALFORMED_ROW,
                message=f"Invalid row format: {line}",
                line=line,
            )
        )

    try:
        row = RecordRow.from_fields(fields)
    except ValidationError as exc:
        return RejectedRow(
            LoadError(
                kind=LoadErrorKind.PARSE_ERROR,
                message=f"Error processing row: {line} - {_describe(exc)}",
                line=line,
            )
        )

    return ParsedRow(record=to_record(row), line=line)
