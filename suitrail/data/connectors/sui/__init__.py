"""Sui JSON-RPC connector: response adapters and record fetchers."""

from .adapters import (
    CheckpointAdapter,
    EventPageAdapter,
    LatestSequenceAdapter,
    ObjectStateAdapter,
    ResponseAdapter,
    TransactionDigestsAdapter,
    TransactionObjectChangeAdapter,
    TransactionTimestampAdapter,
)
from .fetchers import CheckpointFetcher, EventFetcher, ObjectFetcher

__all__ = [
    "CheckpointAdapter",
    "CheckpointFetcher",
    "EventFetcher",
    "EventPageAdapter",
    "LatestSequenceAdapter",
    "ObjectFetcher",
    "ObjectStateAdapter",
    "ResponseAdapter",
    "TransactionDigestsAdapter",
    "TransactionObjectChangeAdapter",
    "TransactionTimestampAdapter",
]
