"""File-backed record source."""

from __future__ import annotations

from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from spanstore.domain.ports.fetching import RecordSource

from .translator import parse_line

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from spanstore.domain.ports.fetching import SourceEntry


log = getLogger(__name__)


def iter_rows(lines: Iterable[str]) -> Iterator[SourceEntry]:
    """Yield one parsed or rejected entry per line after the header."""

    iterator = iter(lines)
    header = next(iterator, None)
    if header is None:
        return
    log.debug("Skipping header: %s", header.rstrip("\r\n"))
    for raw in iterator:
        yield parse_line(raw.rstrip("\r\n"))


class CsvRecordSource(RecordSource):
    """Read ``start,end,delete,key,value`` rows from a CSV file.

    The file is opened lazily when iteration begins, so a missing or unreadable
    file surfaces as ``OSError`` from the iterator, and undecodable bytes as
    ``UnicodeDecodeError``.
    """

    def __init__(self, path: str | Path, *, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding

    def __call__(self) -> Iterator[SourceEntry]:
        log.info("Reading records from %s", self.path)
        with self.path.open("r", encoding=self.encoding, newline="") as handle:
            yield from iter_rows(handle)


def build_csv_source(path: str | Path) -> CsvRecordSource:
    return CsvRecordSource(path)
