"""Output sinks."""

from .base import StructuredSink, TabularSink, to_jsonable
from .csv_sink import CSVSink, format_cell
from .json_sink import JSONSink

__all__ = [
    "CSVSink",
    "JSONSink",
    "StructuredSink",
    "TabularSink",
    "format_cell",
    "to_jsonable",
]
