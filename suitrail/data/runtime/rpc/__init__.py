"""JSON-RPC transport."""

from .client import RPCCaller, RPCClient

__all__ = ["RPCCaller", "RPCClient"]
