"""Core enumerations shared by the engine and the command-line tools."""

from enum import Enum


class OutputFormat(str, Enum):
    """Supported output serializations."""

    CSV = "csv"
    JSON = "json"

    @classmethod
    def from_str(cls, value: str) -> "OutputFormat":
        """Parse a user-supplied format name (case-insensitive).

        Raises:
            ValueError: If the format is not supported
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unsupported output format: {value}") from None


class RetrievalStrategy(str, Enum):
    """Iteration strategies driven by the bulk retrieval engine."""

    RANGE = "range"
    CURSOR = "cursor"
    DISCOVERY = "discovery"
