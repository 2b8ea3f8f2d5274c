"""Record fetchers for checkpoints, events and object states.

Each fetch issues exactly one JSON-RPC call, except
:meth:`ObjectFetcher.fetch_current`, which makes one follow-up call to
resolve the timestamp of the object's previous transaction. That follow-up
is allowed to fail: the state is returned with ``timestamp == 0``.
"""

from __future__ import annotations

import logging
from typing import Any

from ...core import constants
from ...core.exceptions import DataError, ValidationError
from ...models import Checkpoint, Event, ObjectState
from ...runtime.chunking import FetchRequest, Page
from ...runtime.rpc import RPCCaller
from .adapters import (
    CheckpointAdapter,
    EventPageAdapter,
    LatestSequenceAdapter,
    ObjectStateAdapter,
    TransactionDigestsAdapter,
    TransactionObjectChangeAdapter,
    TransactionTimestampAdapter,
)

logger = logging.getLogger(__name__)

OBJECT_OPTIONS = {
    "showContent": True,
    "showOwner": True,
    "showType": True,
    "showPreviousTransaction": True,
}

TRANSACTION_OPTIONS = {
    "showEffects": True,
    "showInput": True,
    "showEvents": False,
    "showObjectChanges": True,
    "showBalanceChanges": False,
}

TIMESTAMP_OPTIONS = {
    "showEffects": True,
    "showInput": False,
    "showEvents": False,
    "showObjectChanges": False,
    "showBalanceChanges": False,
}

# Safety stop for transaction discovery; a page holds at most 50 digests
MAX_DIGEST_PAGES = 1000


class CheckpointFetcher:
    """Fetches checkpoints by sequence number."""

    def __init__(self, rpc: RPCCaller) -> None:
        self._rpc = rpc
        self._checkpoint = CheckpointAdapter()
        self._latest = LatestSequenceAdapter()

    async def fetch(self, request: FetchRequest) -> Checkpoint:
        if request.sequence is None:
            raise ValidationError("checkpoint request needs a sequence number")
        result = await self._rpc.call(constants.METHOD_GET_CHECKPOINT, [str(request.sequence)])
        return self._checkpoint.parse(result, {"sequence": request.sequence})

    async def fetch_latest_sequence(self) -> int:
        """Sequence number of the current tip."""
        result = await self._rpc.call(constants.METHOD_GET_LATEST_CHECKPOINT, [])
        return self._latest.parse(result, {})


class EventFetcher:
    """Fetches pages of events from ``suix_queryEvents``.

    Args:
        rpc: JSON-RPC caller
        event_filter: Sui event filter (defaults to ``{"All": []}``)
        descending: Newest first when True; oldest first by default
    """

    def __init__(
        self,
        rpc: RPCCaller,
        *,
        event_filter: dict[str, Any] | None = None,
        descending: bool = False,
    ) -> None:
        self._rpc = rpc
        self._filter = event_filter if event_filter is not None else {"All": []}
        self._descending = descending
        self._adapter = EventPageAdapter()

    async def fetch_page(self, request: FetchRequest) -> Page[Event]:
        limit = request.limit or constants.DEFAULT_PAGE_SIZE
        result = await self._rpc.call(
            constants.METHOD_QUERY_EVENTS,
            [self._filter, request.cursor, limit, self._descending],
        )
        return self._adapter.parse(result, {"cursor": request.cursor})


class ObjectFetcher:
    """Fetches object states: the current one, and one per transaction."""

    def __init__(self, rpc: RPCCaller) -> None:
        self._rpc = rpc
        self._state = ObjectStateAdapter()
        self._change = TransactionObjectChangeAdapter()
        self._timestamp = TransactionTimestampAdapter()
        self._digests = TransactionDigestsAdapter()

    async def fetch_current(self, object_id: str) -> ObjectState:
        """Current state via ``sui_getObject``, timestamped from its previous transaction."""
        result = await self._rpc.call(constants.METHOD_GET_OBJECT, [object_id, OBJECT_OPTIONS])
        state = self._state.parse(result, {"object_id": object_id})

        if not state.previous_transaction:
            return state
        try:
            timestamp = await self.fetch_transaction_timestamp(state.previous_transaction)
        except DataError as e:
            logger.debug(
                f"Could not resolve timestamp of {state.previous_transaction}: {e}"
            )
            return state
        return state.with_timestamp(timestamp)

    async def fetch_transaction_timestamp(self, digest: str) -> int:
        result = await self._rpc.call(constants.METHOD_GET_TRANSACTION, [digest, TIMESTAMP_OPTIONS])
        return self._timestamp.parse(result, {"digest": digest})

    async def fetch_transaction_digests(self, object_id: str) -> list[str]:
        """Digests of every transaction taking the object as input, newest first."""
        query = {"filter": {"InputObject": object_id}, "options": None}
        digests: list[str] = []
        cursor: Any = None

        for _ in range(MAX_DIGEST_PAGES):
            result = await self._rpc.call(
                constants.METHOD_QUERY_TRANSACTIONS, [query, cursor, None, True]
            )
            page = self._digests.parse(result, {"object_id": object_id})
            digests.extend(page.records)
            if not page.records or page.is_last:
                break
            if page.next_cursor == cursor:
                logger.warning(
                    f"Transaction query for {object_id} returned the same cursor twice; stopping"
                )
                break
            cursor = page.next_cursor
        else:
            logger.warning(
                f"Stopped transaction discovery for {object_id} after {MAX_DIGEST_PAGES} pages; "
                "older history is not included"
            )

        logger.debug(f"Found {len(digests)} transactions for object {object_id}")
        return digests

    async def fetch_from_transaction(self, request: FetchRequest) -> ObjectState:
        """State of ``request.object_id`` as written by transaction ``request.digest``.

        Raises:
            NotFoundError: If the transaction did not change the object
        """
        if not request.digest or not request.object_id:
            raise ValidationError("transaction request needs a digest and an object id")
        result = await self._rpc.call(
            constants.METHOD_GET_TRANSACTION, [request.digest, TRANSACTION_OPTIONS]
        )
        return self._change.parse(
            result, {"object_id": request.object_id, "digest": request.digest}
        )
