"""Bounded retry with fixed backoff.

Architecture:
    All three retrieval strategies share one :class:`RetryPolicy` and one
    driver, :func:`retry_async`. A unit of work (a checkpoint batch, an
    event page, a transaction lookup) is retried from its start until it
    succeeds, hits a non-retryable error, or exceeds ``max_retries``.

    With ``max_retries=3`` a unit gets four attempts in total; the fourth
    failure raises :class:`RetryExhaustedError` with ``retries == 3``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar

from ..core.constants import (
    DEFAULT_BACKOFF_SECONDS,
    DEFAULT_INTER_BATCH_DELAY,
    DEFAULT_MAX_RETRIES,
)
from ..core.exceptions import NotFoundError, ProviderError, RetryExhaustedError, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Retry and pacing policy shared by every retrieval strategy.

    Attributes:
        max_retries: Retries allowed per unit of work after the first attempt
        backoff: Seconds to wait before each retry
        inter_batch_delay: Seconds to wait between successful range batches
        retryable: Exception types considered transient
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    backoff: float = DEFAULT_BACKOFF_SECONDS
    inter_batch_delay: float = DEFAULT_INTER_BATCH_DELAY
    retryable: tuple[type[BaseException], ...] = (ProviderError,)

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValidationError("max_retries must be >= 0")
        if self.backoff < 0 or self.inter_batch_delay < 0:
            raise ValidationError("delays must be >= 0")

    def is_retryable(self, exc: BaseException) -> bool:
        """Transport, remote API and malformed-response errors are transient.

        Not-found and validation errors never are, whatever ``retryable`` says.
        """
        if isinstance(exc, (NotFoundError, ValidationError)):
            return False
        return isinstance(exc, self.retryable)


class FailureCounter(Protocol):
    """Consecutive-failure bookkeeping consulted by :func:`retry_async`."""

    consecutive_failures: int

    def record_failure(self) -> None: ...


class _LocalCounter:
    def __init__(self) -> None:
        self.consecutive_failures = 0

    def record_failure(self) -> None:
        self.consecutive_failures += 1


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    description: str = "operation",
    counter: FailureCounter | None = None,
    on_retry: Callable[[int, BaseException], None] | None = None,
) -> T:
    """Run ``operation`` until it succeeds or the retry budget is spent.

    The abort decision reads ``counter.consecutive_failures``; the caller owns
    resetting it once a unit succeeds. Without a counter a private one is used.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        policy: Retry policy
        description: Human-readable name used in logs and the final error
        counter: Failure counter shared with the caller (e.g. a RetrievalState)
        on_retry: Called with (retry number, error) before each backoff wait;
            replaces the default warning log line

    Returns:
        The operation's result

    Raises:
        RetryExhaustedError: When the operation failed ``max_retries + 1`` times
        Exception: Any non-retryable error, unchanged
    """
    failures = counter if counter is not None else _LocalCounter()
    while True:
        try:
            return await operation()
        except Exception as e:
            if not policy.is_retryable(e):
                raise
            if failures.consecutive_failures >= policy.max_retries:
                raise RetryExhaustedError(
                    f"{description} failed after {policy.max_retries} retries: {e}",
                    retries=policy.max_retries,
                    last_error=e,
                ) from e
            failures.record_failure()
            attempt = failures.consecutive_failures
            if on_retry is not None:
                on_retry(attempt, e)
            else:
                logger.warning(
                    f"{description} failed: {e} (retry attempt {attempt} of {policy.max_retries})"
                )
            await asyncio.sleep(policy.backoff)
