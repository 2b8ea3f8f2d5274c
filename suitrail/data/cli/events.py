#!/usr/bin/env python3
"""Backfill ledger events via cursor pagination and save them as CSV or JSON.

Usage:
    suitrail-events --limit 500 --filename events.csv
    suitrail-events --limit 1000 --format json --filename events.json
"""

from __future__ import annotations

import argparse
import sys
from functools import partial
from time import perf_counter

from ..api import HistoryAPI
from ..core import constants
from ..core.config import PaginationConfig
from ..core.enums import OutputFormat
from ..core.exceptions import DataError
from ..models import Event
from ..models.event import FALLBACK_CSV_FIELDS
from ..sinks import CSVSink, JSONSink
from .common import (
    EXIT_FAILURE,
    EXIT_OK,
    add_common_arguments,
    build_retry_policy,
    build_rpc_config,
    configure_logging,
    format_timestamp_ms,
    parse_output_format,
    run_command,
)


def event_columns(events: list[Event]) -> list[str]:
    """CSV columns taken from the first event, or a fixed header when there is none."""
    if events:
        return events[0].column_names()
    return list(FALLBACK_CSV_FIELDS)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Backfill Sui events via cursor pagination")
    p.add_argument(
        "--limit",
        type=int,
        default=constants.DEFAULT_EVENT_LIMIT,
        help="Number of events to fetch (the last page is kept whole)",
    )
    p.add_argument(
        "--page-size", type=int, default=constants.DEFAULT_PAGE_SIZE, help="Events per request"
    )
    p.add_argument("--filename", default="events.csv", help="Output filename")
    p.add_argument("--format", default="csv", help="Output format (csv or json)")
    p.add_argument("--descending", action="store_true", help="Newest events first")
    add_common_arguments(p)
    return p


async def _run(args: argparse.Namespace, config: PaginationConfig, output_format: OutputFormat) -> int:
    started = perf_counter()
    print("Starting event backfill...")

    async with HistoryAPI(build_rpc_config(args), retry_policy=build_retry_policy(args)) as api:
        result, summary = await api.fetch_events(config, descending=args.descending)

    elapsed = perf_counter() - started
    if result.is_empty:
        print("No events fetched!")
        return EXIT_OK

    print(f"Fetched a total of {result.total_records} events in {elapsed:.2f}s")
    if summary.has_timestamps:
        print(
            f"Spanning {format_timestamp_ms(summary.first_seen)} "
            f"to {format_timestamp_ms(summary.last_seen)}"
        )
    print(f"Saving events to {output_format.value} file...")

    if output_format is OutputFormat.CSV:
        CSVSink().write_tabular(
            [event.raw for event in result.records], event_columns(result.records), args.filename
        )
    else:
        JSONSink().write_structured([event.raw for event in result.records], args.filename)

    print(f"Done! {result.total_records} events saved to {args.filename}")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)
    try:
        config = PaginationConfig(page_size=args.page_size, limit=args.limit)
        output_format = parse_output_format(args.format)
    except DataError as e:
        print(f"Invalid arguments: {e}", file=sys.stderr)
        return EXIT_FAILURE
    return run_command("Fetching events", partial(_run, args, config, output_format))


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
