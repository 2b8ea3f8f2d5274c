"""Output sink protocols and JSON conversion helpers."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol

from pydantic import BaseModel


class TabularSink(Protocol):
    """Writes flat rows with a fixed column set."""

    def write_tabular(
        self,
        records: Iterable[Mapping[str, Any]],
        field_names: Sequence[str],
        path: str | Path,
    ) -> int:
        """Write one row per record and return the number of rows written.

        Raises:
            SinkError: If the file cannot be written
        """
        ...


class StructuredSink(Protocol):
    """Writes an arbitrary value as one structured document."""

    def write_structured(self, value: Any, path: str | Path) -> None:
        """Serialize ``value`` to ``path``.

        Raises:
            SinkError: If the file cannot be written
        """
        ...


def to_jsonable(value: Any) -> Any:
    """Convert models, dataclasses and containers into plain JSON values.

    Pydantic models are dumped by alias so output keys match the tools'
    established file formats.
    """
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_jsonable(dataclasses.asdict(value))
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value
