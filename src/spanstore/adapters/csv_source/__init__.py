"""CSV adapter reading temporal records from delimited text files."""

from __future__ import annotations

from .fetcher import CsvRecordSource, build_csv_source, iter_rows
from .schema import FIELD_NAMES, HEADER, RecordRow
from .translator import parse_line, to_record

__all__ = [
    "FIELD_NAMES",
    "HEADER",
    "CsvRecordSource",
    "RecordRow",
    "build_csv_source",
    "iter_rows",
    "parse_line",
    "to_record",
]
