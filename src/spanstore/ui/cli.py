# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from spanstore.adapters.csv_source import HEADER
from spanstore.app import create_store, load_file
from spanstore.config import ConfigurationError, configure_logging, get_ingest_config

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

    from spanstore.domain.data_integration import LoadResult
    from spanstore.domain.ports.persistence import TemporalRecordRepository

log = logging.getLogger(__name__)

EMPTY_STORE_MESSAGE = "Database is empty"
PROMPT = "\nLoad File? (Y/N): "


def render_store(store: TemporalRecordRepository) -> list[str]:
    """Render the store contents in key/start order, header first."""

    if store.is_empty:
        return [HEADER, EMPTY_STORE_MESSAGE]
    return [HEADER, *(record.to_row() for record in store.snapshot())]


def render_errors(result: LoadResult) -> list[str]:
    if not result.errors:
        return []
    return ["", "Processing Errors:", *(error.message for error in result.errors)]


def run_session(
    store: TemporalRecordRepository,
    *,
    load: Callable[[TemporalRecordRepository], LoadResult],
    prompt: Callable[[str], str] = input,
    emit: Callable[[str], None] = print,
) -> None:
    """Show the store and offer loads until the user declines."""

    while True:
        emit("\nCurrent Database Contents:")
        for line in render_store(store):
            emit(line)

        try:
            answer = prompt(PROMPT).strip().upper()
        except EOFError:
            emit("Exiting program.")
            return

        if answer == "Y":
            result = load(store)
            for line in render_errors(result):
                emit(line)
        elif answer == "N":
            emit("Exiting program.")
            return
        else:
            emit("Invalid input. Please enter Y or N.")


def _positive_int(value: str) -> int:
    parsed = int(value)
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"must be positive, got {parsed}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile time-bounded records from CSV files")
    parser.add_argument(
        "--file",
        type=str,
        default=None,
        help="CSV file to load (defaults to SPANSTORE_SOURCE_PATH)",
    )
    parser.add_argument(
        "--batch-size",
        type=_positive_int,
        default=None,
        help="Number of distinct keys buffered before a flush (defaults to config)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Load the file once, print the result and exit without prompting",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log individual reconciliation decisions",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        config = get_ingest_config().with_overrides(
            batch_size=parsed_args.batch_size,
            source_path=parsed_args.file,
        )
        config.require_source_path()
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)

    store = create_store()

    def _load(target: TemporalRecordRepository) -> LoadResult:
        return load_file(target, config=config)

    try:
        if parsed_args.once:
            result = _load(store)
            for line in render_errors(result):
                print(line)
            for line in render_store(store):
                print(line)
        else:
            run_session(store, load=_load)
    except Exception:
        log.exception("Fatal error during load")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
