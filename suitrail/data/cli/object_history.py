#!/usr/bin/env python3
"""Reconstruct and print the version history of one object.

Usage:
    suitrail-object-history --object 0x... --output history.json --verbose
"""

from __future__ import annotations

import argparse
import json
import sys
from functools import partial
from time import perf_counter

from ..api import HistoryAPI
from ..core.config import DiscoveryConfig
from ..core.exceptions import DataError
from ..models import ObjectHistory
from ..sinks import JSONSink
from .common import (
    EXIT_FAILURE,
    EXIT_OK,
    add_common_arguments,
    build_retry_policy,
    build_rpc_config,
    configure_logging,
    format_timestamp_ms,
    run_command,
)


def format_summary(history: ObjectHistory) -> list[str]:
    lines = [
        f"Object ID: {history.id}",
        f"Number of versions: {len(history.states)}",
        f"Number of changes: {history.num_changes}",
        f"Number of owners: {history.num_owners}",
    ]
    if history.first_seen > 0:
        lines.append(f"First seen: {format_timestamp_ms(history.first_seen)}")
    if history.last_seen > 0:
        lines.append(f"Last seen: {format_timestamp_ms(history.last_seen)}")
    if history.current is not None:
        lines.append(f"Current type: {history.current.type}")

    lines.append("Version history:")
    for i, state in enumerate(history.states, start=1):
        lines.append(f"  {i}. Version {state.version} - {format_timestamp_ms(state.timestamp)}")
    return lines


def format_details(history: ObjectHistory) -> list[str]:
    lines = ["", "Detailed state information:"]
    for i, state in enumerate(history.states, start=1):
        lines.append("")
        lines.append(f"State {i} (Version {state.version}):")
        lines.append(f"  Digest: {state.digest}")
        lines.append(f"  Type: {state.type}")
        lines.append(f"  Previous Transaction: {state.previous_transaction}")
        if state.owner is not None:
            lines.append(f"  Owner: {json.dumps(state.owner, indent=2)}")
    return lines


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Track the version history of a Sui object")
    p.add_argument("--object", dest="object_id", default="", help="Object ID to track")
    p.add_argument("--output", default="", help="Output JSON file (optional)")
    p.add_argument("--verbose", action="store_true", help="Print detailed state information")
    add_common_arguments(p)
    return p


async def _run(args: argparse.Namespace, config: DiscoveryConfig) -> int:
    started = perf_counter()
    print(f"Fetching history for object: {config.object_id}")

    async with HistoryAPI(build_rpc_config(args), retry_policy=build_retry_policy(args)) as api:
        history = await api.fetch_object_history(config)

    elapsed = perf_counter() - started
    if not history.states:
        print("No object history found!")
        return EXIT_OK

    print(f"Fetched {len(history.states)} versions in {elapsed:.2f}s")
    print("\n".join(format_summary(history)))

    if args.output:
        print(f"Saving history to JSON file: {args.output}")
        JSONSink().write_structured(history, args.output)
        print(f"History saved successfully to {args.output}")

    if args.verbose:
        print("\n".join(format_details(history)))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)
    try:
        config = DiscoveryConfig(object_id=args.object_id)
    except DataError as e:
        print(f"Invalid arguments: {e}", file=sys.stderr)
        return EXIT_FAILURE
    return run_command("Fetching object history", partial(_run, args, config))


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
