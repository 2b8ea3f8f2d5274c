"""Execution of the three retrieval strategies.

This module provides one executor per iteration strategy. All of them run
strictly sequentially (one outstanding request at a time) and retry through
the shared :class:`~suitrail.data.utils.retry.RetryPolicy`:

- RangeExecutor: bounded numeric range, fetched batch by batch
- CursorExecutor: open-ended cursor pagination
- DiscoveryExecutor: anchor record plus transitively discovered references

Executors return records unordered as gathered; ordering is the
aggregator's job.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from functools import partial
from typing import Any, Generic, TypeVar

from ...core.enums import RetrievalStrategy
from ...core.exceptions import DataError, NotFoundError, ValidationError
from ...utils.retry import RetryPolicy, retry_async
from .definitions import BatchPlan, FetchRequest, Page, RetrievalResult, RetrievalState
from .telemetry import (
    log_batch_completed,
    log_page_completed,
    log_retrieval_complete,
    log_unit_retry,
    log_unit_skipped,
)

T = TypeVar("T")

FetchUnit = Callable[[FetchRequest], Awaitable[T]]


class _Executor(Generic[T]):
    def __init__(self, policy: RetryPolicy | None = None) -> None:
        """Initialize executor.

        Args:
            policy: Retry policy (defaults to 3 retries, 2 s backoff)
        """
        self._policy = policy or RetryPolicy()

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    def _on_retry(self, state: RetrievalState, attempt: int, error: BaseException) -> None:
        log_unit_retry(
            unit=state.next_unit,
            attempt=attempt,
            max_retries=self._policy.max_retries,
            error=error,
        )


class RangeExecutor(_Executor[T]):
    """Fetches every sequence number of a planned range, batch by batch.

    A failing batch is retried from its first sequence number (never resumed
    mid-batch). Sequence numbers that raise NotFoundError are skipped.
    """

    async def execute(
        self,
        *,
        plans: list[BatchPlan],
        fetch_unit: FetchUnit[T],
    ) -> RetrievalResult[T]:
        """Execute batch plans in order.

        Args:
            plans: Batches from RangePlanner
            fetch_unit: Coroutine fetching one sequence number

        Returns:
            RetrievalResult with records in visiting order

        Raises:
            ValidationError: If no plans were given
            RetryExhaustedError: If a batch fails more than max_retries times
        """
        if not plans:
            raise ValidationError("Cannot execute: no batch plans provided")

        state = RetrievalState(next_unit=plans[0].start)
        records: list[T] = []
        batches_used = 0

        for position, plan in enumerate(plans):
            state.next_unit = plan.start
            batch_records, skipped = await retry_async(
                partial(self._run_batch, plan, fetch_unit),
                self._policy,
                description=f"batch {plan.start}-{plan.end}",
                counter=state,
                on_retry=partial(self._on_retry, state),
            )
            records.extend(batch_records)
            state.record_success(len(batch_records))
            state.skipped += skipped
            batches_used += 1

            log_batch_completed(plan=plan, records=len(batch_records), fetched_total=state.fetched)

            # Pace requests between batches, not after the last one
            if position < len(plans) - 1 and self._policy.inter_batch_delay > 0:
                await asyncio.sleep(self._policy.inter_batch_delay)

        result = RetrievalResult(
            records=records,
            units_used=batches_used,
            retries=state.total_retries,
            skipped=state.skipped,
        )
        log_retrieval_complete(strategy=RetrievalStrategy.RANGE.value, result=result)
        return result

    async def _run_batch(self, plan: BatchPlan, fetch_unit: FetchUnit[T]) -> tuple[list[T], int]:
        records: list[T] = []
        skipped = 0
        for request in plan.requests():
            try:
                records.append(await fetch_unit(request))
            except NotFoundError as e:
                log_unit_skipped(unit=request.sequence, reason=str(e))
                skipped += 1
        return records, skipped


class CursorExecutor(_Executor[T]):
    """Walks a cursor-paginated query until the data or the limit runs out.

    Stops when a page is empty, when no next cursor is returned, or once the
    running total reaches ``limit``. The page that crosses the limit is kept
    whole.
    """

    async def execute(
        self,
        *,
        fetch_page: Callable[[FetchRequest], Awaitable[Page[T]]],
        page_size: int,
        limit: int | None = None,
        cursor: Any = None,
    ) -> RetrievalResult[T]:
        """Fetch pages until a stop condition holds.

        Args:
            fetch_page: Coroutine fetching one page for a cursor request
            page_size: Records requested per page
            limit: Stop once at least this many records were fetched
            cursor: Cursor to start from (None = beginning)

        Returns:
            RetrievalResult with records in page order

        Raises:
            RetryExhaustedError: If a page fails more than max_retries times in a row
        """
        state = RetrievalState(next_unit=cursor)
        records: list[T] = []
        page_index = 0

        while True:
            request = FetchRequest(index=page_index, cursor=state.next_unit, limit=page_size)
            page = await retry_async(
                partial(fetch_page, request),
                self._policy,
                description=f"page {page_index}",
                counter=state,
                on_retry=partial(self._on_retry, state),
            )

            if not page.records:
                state.record_success(0)
                break

            records.extend(page.records)
            state.record_success(len(page.records))
            page_index += 1

            log_page_completed(
                page_index=request.index,
                records=len(page.records),
                fetched_total=state.fetched,
                has_more=not page.is_last,
            )

            if page.is_last:
                break
            state.next_unit = page.next_cursor

            if limit is not None and state.fetched >= limit:
                break

        result = RetrievalResult(
            records=records,
            units_used=page_index,
            retries=state.total_retries,
        )
        log_retrieval_complete(strategy=RetrievalStrategy.CURSOR.value, result=result)
        return result


class DiscoveryExecutor(_Executor[T]):
    """Builds a collection from one anchor record plus discovered references.

    The anchor lookup is retried and its failure is fatal. A failing
    discovery query degrades to the anchor alone. Each distinct discovered
    reference is fetched once, retried on transient errors and skipped on
    any remaining failure.
    """

    async def execute(
        self,
        *,
        object_id: str,
        fetch_anchor: Callable[[], Awaitable[T]],
        discover: Callable[[], Awaitable[list[str]]],
        fetch_unit: FetchUnit[T],
        anchor_reference: Callable[[T], str | None],
    ) -> RetrievalResult[T]:
        """Fetch the anchor, discover references, fetch each reference.

        Args:
            object_id: Target every reference must contain
            fetch_anchor: Coroutine fetching the current-state record
            discover: Coroutine returning reference digests (newest first)
            fetch_unit: Coroutine fetching the record for one digest
            anchor_reference: Digest already represented by the anchor

        Returns:
            RetrievalResult whose first record is the anchor

        Raises:
            DataError: If the anchor cannot be fetched
        """
        state = RetrievalState(next_unit=object_id)
        anchor = await retry_async(
            fetch_anchor,
            self._policy,
            description=f"current state of {object_id}",
            counter=state,
            on_retry=partial(self._on_retry, state),
        )
        records: list[T] = [anchor]
        state.record_success(1)
        units_used = 1

        try:
            digests = await retry_async(
                discover,
                self._policy,
                description=f"transaction query for {object_id}",
                counter=state,
                on_retry=partial(self._on_retry, state),
            )
        except DataError as e:
            log_unit_skipped(unit=object_id, reason=f"failed to get all transactions: {e}")
            digests = []
        state.clear_failures()

        # Each transaction contributes at most one state; the anchor already covers its own
        seen: set[str] = set()
        known = anchor_reference(anchor)
        if known:
            seen.add(known)
        for index, digest in enumerate(digests):
            if digest in seen:
                continue
            seen.add(digest)
            request = FetchRequest(index=index, digest=digest, object_id=object_id)
            state.next_unit = digest
            try:
                record = await retry_async(
                    partial(fetch_unit, request),
                    self._policy,
                    description=f"transaction {digest}",
                    counter=state,
                    on_retry=partial(self._on_retry, state),
                )
            except DataError as e:
                log_unit_skipped(unit=digest, reason=str(e))
                state.skipped += 1
                state.clear_failures()
                continue
            records.append(record)
            state.record_success(1)
            units_used += 1

        result = RetrievalResult(
            records=records,
            units_used=units_used,
            retries=state.total_retries,
            skipped=state.skipped,
        )
        log_retrieval_complete(strategy=RetrievalStrategy.DISCOVERY.value, result=result)
        return result
