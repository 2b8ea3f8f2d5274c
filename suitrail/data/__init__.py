"""Suitrail Data - paginated checkpoint, event and object-history retrieval for Sui."""

from .aggregation import Aggregator, build_object_history
from .api import HistoryAPI
from .connectors import CheckpointFetcher, EventFetcher, ObjectFetcher
from .core import (
    DataError,
    DiscoveryConfig,
    MalformedResponseError,
    NotFoundError,
    OutputFormat,
    PaginationConfig,
    ProviderError,
    RangeConfig,
    RemoteAPIError,
    RetryExhaustedError,
    RPCConfig,
    SinkError,
    TransportError,
    ValidationError,
)
from .models import Checkpoint, Event, ObjectHistory, ObjectState, Payload, Summary
from .runtime import RPCClient
from .sinks import CSVSink, JSONSink
from .utils import RetryPolicy

__version__ = "0.1.0"

__all__ = [
    "Aggregator",
    "build_object_history",
    "Checkpoint",
    "CheckpointFetcher",
    "CSVSink",
    "DataError",
    "DiscoveryConfig",
    "Event",
    "EventFetcher",
    "HistoryAPI",
    "JSONSink",
    "MalformedResponseError",
    "NotFoundError",
    "ObjectFetcher",
    "ObjectHistory",
    "ObjectState",
    "OutputFormat",
    "PaginationConfig",
    "Payload",
    "ProviderError",
    "RangeConfig",
    "RemoteAPIError",
    "RetryExhaustedError",
    "RetryPolicy",
    "RPCClient",
    "RPCConfig",
    "SinkError",
    "Summary",
    "TransportError",
    "ValidationError",
]
