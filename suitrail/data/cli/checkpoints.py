#!/usr/bin/env python3
"""Fetch a range of checkpoints and save them as CSV or JSON.

Usage:
    suitrail-checkpoints --range 1000-2000
    suitrail-checkpoints --start 1000 --batch 20 --format json --output checkpoints.json
    suitrail-checkpoints --start 1000          # up to the current tip
"""

from __future__ import annotations

import argparse
import sys
from functools import partial
from time import perf_counter

from ..api import HistoryAPI
from ..core import constants
from ..core.config import RangeConfig
from ..core.enums import OutputFormat
from ..core.exceptions import DataError, ValidationError
from ..models.checkpoint import CSV_FIELDS
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


def parse_range(value: str) -> tuple[int, int]:
    """Parse ``"start-end"`` into two integers."""
    if not value:
        raise ValidationError("checkpoint range is required")
    parts = value.split("-")
    if len(parts) != 2:
        raise ValidationError("invalid range format, expected 'start-end'")
    try:
        start = int(parts[0])
    except ValueError:
        raise ValidationError(f"invalid start checkpoint: {parts[0]!r}") from None
    try:
        end = int(parts[1])
    except ValueError:
        raise ValidationError(f"invalid end checkpoint: {parts[1]!r}") from None
    return start, end


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Fetch Sui checkpoints in a sequence-number range")
    p.add_argument("--range", dest="checkpoint_range", default="", help="Checkpoint range, e.g. 1000-2000")
    p.add_argument("--start", type=int, default=-1, help="Starting checkpoint number")
    p.add_argument("--end", type=int, default=-1, help="Ending checkpoint number (0 or less for latest)")
    p.add_argument("--batch", type=int, default=constants.DEFAULT_BATCH_SIZE, help="Checkpoints per batch")
    p.add_argument("--output", default="checkpoints.csv", help="Output filename")
    p.add_argument("--format", default="csv", help="Output format (csv or json)")
    add_common_arguments(p)
    return p


def build_range_config(args: argparse.Namespace) -> RangeConfig:
    if args.checkpoint_range:
        start, end = parse_range(args.checkpoint_range)
    else:
        start, end = args.start, args.end
    if start < 0:
        raise ValidationError("starting checkpoint must be specified")
    return RangeConfig(start=start, end=end if end > 0 else None, batch_size=args.batch)


async def _run(args: argparse.Namespace, config: RangeConfig, output_format: OutputFormat) -> int:
    started = perf_counter()
    print("Starting checkpoint fetching...")

    async with HistoryAPI(build_rpc_config(args), retry_policy=build_retry_policy(args)) as api:
        result, summary = await api.fetch_checkpoints(config)

    elapsed = perf_counter() - started
    if result.is_empty:
        print("No checkpoints fetched!")
        return EXIT_OK

    print(f"Fetched a total of {result.total_records} checkpoints in {elapsed:.2f}s")
    if summary.has_timestamps:
        print(
            f"Spanning {format_timestamp_ms(summary.first_seen)} "
            f"to {format_timestamp_ms(summary.last_seen)}"
        )
    print(f"Saving checkpoints to {output_format.value} file...")

    if output_format is OutputFormat.CSV:
        CSVSink().write_tabular(
            [checkpoint.to_row() for checkpoint in result.records], CSV_FIELDS, args.output
        )
    else:
        JSONSink().write_structured(result.records, args.output)

    print(f"Done! {result.total_records} checkpoints saved to {args.output}")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)
    try:
        config = build_range_config(args)
        output_format = parse_output_format(args.format)
    except DataError as e:
        print(f"Invalid arguments: {e}", file=sys.stderr)
        return EXIT_FAILURE
    return run_command("Fetching checkpoints", partial(_run, args, config, output_format))


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
