"""Shared Sui JSON-RPC constants.

Method names and defaults used by the fetchers and the command-line tools
are centralized here so the connector code can stay small and focused.
"""

from __future__ import annotations

DEFAULT_RPC_URL = "https://rpc.mainnet.sui.io"
RPC_URL_ENV_VAR = "SUITRAIL_RPC_URL"

# JSON-RPC methods
METHOD_GET_CHECKPOINT = "sui_getCheckpoint"
METHOD_GET_LATEST_CHECKPOINT = "sui_getLatestCheckpointSequenceNumber"
METHOD_QUERY_EVENTS = "suix_queryEvents"
METHOD_GET_OBJECT = "sui_getObject"
METHOD_GET_TRANSACTION = "sui_getTransactionBlock"
METHOD_QUERY_TRANSACTIONS = "suix_queryTransactionBlocks"

# Retrieval defaults
DEFAULT_BATCH_SIZE = 10
DEFAULT_PAGE_SIZE = 50
DEFAULT_EVENT_LIMIT = 200
DEFAULT_MAX_RETRIES = 3
DEFAULT_BACKOFF_SECONDS = 2.0
DEFAULT_INTER_BATCH_DELAY = 0.2
DEFAULT_TIMEOUT_SECONDS = 30.0

# Debug logging truncates response bodies to this many characters
RESPONSE_PREVIEW_CHARS = 200

UNKNOWN_OWNER_KEY = "unknown"
