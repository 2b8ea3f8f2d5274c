"""Core components."""

from .config import DiscoveryConfig, PaginationConfig, RangeConfig, RPCConfig
from .enums import OutputFormat, RetrievalStrategy
from .exceptions import (
    DataError,
    MalformedResponseError,
    NotFoundError,
    ProviderError,
    RemoteAPIError,
    RetryExhaustedError,
    SinkError,
    TransportError,
    ValidationError,
)

__all__ = [
    "DataError",
    "DiscoveryConfig",
    "MalformedResponseError",
    "NotFoundError",
    "OutputFormat",
    "PaginationConfig",
    "ProviderError",
    "RangeConfig",
    "RemoteAPIError",
    "RetrievalStrategy",
    "RetryExhaustedError",
    "RPCConfig",
    "SinkError",
    "TransportError",
    "ValidationError",
]
