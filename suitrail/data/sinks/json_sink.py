"""JSON output sink."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..core.exceptions import SinkError
from .base import to_jsonable

logger = logging.getLogger(__name__)


class JSONSink:
    """Pretty-prints any value as an indented JSON document."""

    def __init__(self, *, indent: int = 2) -> None:
        self._indent = indent

    def write_structured(self, value: Any, path: str | Path) -> None:
        try:
            text = json.dumps(to_jsonable(value), indent=self._indent, default=str)
        except (TypeError, ValueError) as e:
            raise SinkError(f"failed to serialize data for {path}: {e}", path=path) from e
        try:
            Path(path).write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            raise SinkError(f"failed to write JSON file {path}: {e}", path=path) from e

        logger.debug(f"Wrote JSON document to {path}")
