"""Runtime layer: JSON-RPC transport and the bulk retrieval engine."""

from .chunking import (
    BatchPlan,
    CursorExecutor,
    DiscoveryExecutor,
    FetchRequest,
    Page,
    RangeExecutor,
    RangePlanner,
    RetrievalResult,
    RetrievalState,
)
from .rpc import RPCCaller, RPCClient

__all__ = [
    "BatchPlan",
    "CursorExecutor",
    "DiscoveryExecutor",
    "FetchRequest",
    "Page",
    "RangeExecutor",
    "RangePlanner",
    "RetrievalResult",
    "RetrievalState",
    "RPCCaller",
    "RPCClient",
]
