"""CSV output sink."""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from ..core.exceptions import SinkError
from .base import to_jsonable

logger = logging.getLogger(__name__)


def format_cell(value: Any) -> str:
    """Render one cell: nested values become compact JSON, None becomes empty."""
    if value is None:
        return ""
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(to_jsonable(value), separators=(",", ":"), default=str)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class CSVSink:
    """Flattens records into CSV rows.

    Missing fields produce empty cells; the header is always written, even
    when there are no records.
    """

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def write_tabular(
        self,
        records: Iterable[Mapping[str, Any]],
        field_names: Sequence[str],
        path: str | Path,
    ) -> int:
        rows = 0
        try:
            with open(path, "w", newline="", encoding=self._encoding) as handle:
                writer = csv.writer(handle)
                writer.writerow(list(field_names))
                for record in records:
                    writer.writerow([format_cell(record.get(name)) for name in field_names])
                    rows += 1
        except OSError as e:
            raise SinkError(f"failed to write CSV file {path}: {e}", path=path) from e

        logger.debug(f"Wrote {rows} rows to {path}")
        return rows
