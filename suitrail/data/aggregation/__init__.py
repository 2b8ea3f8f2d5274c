"""Record ordering and summary statistics."""

from .aggregator import (
    Aggregator,
    build_object_history,
    checkpoint_aggregator,
    event_aggregator,
    object_state_aggregator,
    owner_key,
    parse_version,
)

__all__ = [
    "Aggregator",
    "build_object_history",
    "checkpoint_aggregator",
    "event_aggregator",
    "object_state_aggregator",
    "owner_key",
    "parse_version",
]
