"""HistoryAPI facade over the bulk retrieval engine.

The HistoryAPI wires the JSON-RPC client, the Sui record fetchers, the
retrieval executors and the aggregator into three operations, one per
command-line tool.

Architecture:
    This module implements the Facade pattern to hide planning, retry and
    aggregation behind fetch_* methods:
    - fetch_checkpoints: bounded range strategy
    - fetch_events: cursor pagination strategy
    - fetch_object_history: transitive discovery strategy

Design Decisions:
    - RPC client injection allows testing with fake callers
    - One RetryPolicy is shared by all strategies
    - Context manager pattern closes the HTTP session the facade owns
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any

from ..aggregation import build_object_history, checkpoint_aggregator, event_aggregator
from ..connectors.sui import CheckpointFetcher, EventFetcher, ObjectFetcher
from ..core.config import DiscoveryConfig, PaginationConfig, RangeConfig, RPCConfig
from ..core.exceptions import DataError, add_context
from ..models import Checkpoint, Event, ObjectHistory, Summary
from ..runtime.chunking import (
    CursorExecutor,
    DiscoveryExecutor,
    RangeExecutor,
    RangePlanner,
    RetrievalResult,
)
from ..runtime.rpc import RPCCaller, RPCClient
from ..utils.retry import RetryPolicy

logger = logging.getLogger(__name__)


class HistoryAPI:
    """High-level entry point for checkpoint, event and object-history retrieval.

    Example:
        >>> async with HistoryAPI(RPCConfig(url="https://rpc.mainnet.sui.io")) as api:
        ...     result, summary = await api.fetch_checkpoints(RangeConfig(start=1000, end=1010))
        ...     history = await api.fetch_object_history(DiscoveryConfig(object_id="0x5"))
    """

    def __init__(
        self,
        rpc_config: RPCConfig | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
        rpc: RPCCaller | None = None,
    ) -> None:
        """Initialize the HistoryAPI.

        Args:
            rpc_config: Node connection settings (ignored when ``rpc`` is given)
            retry_policy: Retry/pacing policy shared by all strategies
            rpc: Optional pre-built JSON-RPC caller
        """
        self._owns_rpc = rpc is None
        self._rpc: RPCCaller = rpc or RPCClient(rpc_config or RPCConfig())
        self._policy = retry_policy or RetryPolicy()

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._policy

    async def fetch_checkpoints(
        self, config: RangeConfig
    ) -> tuple[RetrievalResult[Checkpoint], Summary]:
        """Fetch every checkpoint in ``[config.start, config.end]``.

        An unresolved end is replaced by the current tip before planning.

        Returns:
            The retrieval result (records sorted by sequence number) and its summary

        Raises:
            ValidationError: If the range is invalid
            RetryExhaustedError: If a batch keeps failing
        """
        fetcher = CheckpointFetcher(self._rpc)

        if not config.end_resolved:
            try:
                latest = await fetcher.fetch_latest_sequence()
            except DataError as e:
                raise add_context(e, "failed to fetch latest checkpoint")
            logger.info(f"Latest checkpoint is {latest}")
            config = config.with_end(latest)

        logger.info(f"Fetching checkpoints from {config.start} to {config.end}")
        plans = RangePlanner(config.batch_size).plan(start=config.start, end=config.end)
        result = await RangeExecutor(self._policy).execute(
            plans=plans, fetch_unit=fetcher.fetch
        )

        aggregator = checkpoint_aggregator()
        result.records = aggregator.sort(result.records)
        return result, aggregator.summarize(result.records)

    async def fetch_events(
        self,
        config: PaginationConfig,
        *,
        event_filter: dict[str, Any] | None = None,
        descending: bool = False,
    ) -> tuple[RetrievalResult[Event], Summary]:
        """Page through ``suix_queryEvents`` until exhausted or ``config.limit`` is reached.

        Returns:
            The retrieval result (records in page order) and its summary

        Raises:
            RetryExhaustedError: If a page keeps failing
        """
        fetcher = EventFetcher(self._rpc, event_filter=event_filter, descending=descending)
        result = await CursorExecutor(self._policy).execute(
            fetch_page=fetcher.fetch_page,
            page_size=config.page_size,
            limit=config.limit,
            cursor=config.cursor,
        )
        return result, event_aggregator().aggregate(result.records)

    async def fetch_object_history(self, config: DiscoveryConfig) -> ObjectHistory:
        """Reconstruct the version history of one object.

        Raises:
            DataError: If the object's current state cannot be fetched
        """
        fetcher = ObjectFetcher(self._rpc)
        object_id = config.object_id

        try:
            result = await DiscoveryExecutor(self._policy).execute(
                object_id=object_id,
                fetch_anchor=partial(fetcher.fetch_current, object_id),
                discover=partial(fetcher.fetch_transaction_digests, object_id),
                fetch_unit=fetcher.fetch_from_transaction,
                anchor_reference=lambda state: state.previous_transaction or None,
            )
        except DataError as e:
            raise add_context(e, "failed to get current object state")

        return build_object_history(object_id, result.records)

    async def close(self) -> None:
        """Close the JSON-RPC client if this facade created it."""
        if self._owns_rpc and isinstance(self._rpc, RPCClient):
            await self._rpc.close()

    async def __aenter__(self) -> HistoryAPI:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
