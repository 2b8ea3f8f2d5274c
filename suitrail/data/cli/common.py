"""Shared command-line plumbing: common options, logging and exit codes."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from ..core import constants
from ..core.config import RPCConfig
from ..core.enums import OutputFormat
from ..core.exceptions import DataError, ValidationError
from ..utils.retry import RetryPolicy

EXIT_OK = 0
EXIT_FAILURE = 1

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--rpc-url",
        default=None,
        help=f"Sui JSON-RPC endpoint (default: ${constants.RPC_URL_ENV_VAR} or {constants.DEFAULT_RPC_URL})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=constants.DEFAULT_TIMEOUT_SECONDS,
        help="Per-request timeout in seconds",
    )
    parser.add_argument(
        "--max-retries",
        type=int,
        default=constants.DEFAULT_MAX_RETRIES,
        help="Retries per batch, page or transaction before giving up",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging, including request and response previews",
    )


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    # aiohttp's own debug chatter drowns out request previews
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def build_rpc_config(args: argparse.Namespace) -> RPCConfig:
    return RPCConfig.from_env(url=args.rpc_url, timeout=args.timeout, debug=args.debug)


def build_retry_policy(args: argparse.Namespace) -> RetryPolicy:
    return RetryPolicy(max_retries=args.max_retries)


def parse_output_format(value: str) -> OutputFormat:
    try:
        return OutputFormat.from_str(value)
    except ValueError as e:
        raise ValidationError(str(e)) from e


def format_timestamp_ms(timestamp_ms: int) -> str:
    """RFC 3339 (UTC) rendering of a millisecond timestamp; "unknown" when not positive."""
    if timestamp_ms <= 0:
        return "unknown"
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def run_command(operation: str, command: Callable[[], Awaitable[int]]) -> int:
    """Run an async command and map failures to a diagnostic and a non-zero exit code."""
    try:
        return asyncio.run(command())
    except DataError as e:
        print(f"{operation} failed: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print(f"{operation} interrupted", file=sys.stderr)
        return EXIT_FAILURE
