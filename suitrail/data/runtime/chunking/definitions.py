"""Retrieval metadata definitions.

This module defines the data structures shared by the planner and the
executors: units of work, batch plans, pages, the engine-owned retrieval
state, and the result handed to the aggregator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class FetchRequest:
    """One unit of work handed to a record fetcher.

    Exactly one addressing mode is used per request:
    a sequence number (range strategy), a cursor plus limit (cursor
    strategy), or a transaction digest plus target object (discovery).

    Attributes:
        index: Zero-based position of this unit in the run
        sequence: Checkpoint sequence number
        cursor: Opaque pagination cursor (None = first page)
        limit: Page size
        digest: Transaction digest
        object_id: Object the transaction must contain
    """

    index: int = 0
    sequence: int | None = None
    cursor: Any = None
    limit: int | None = None
    digest: str | None = None
    object_id: str | None = None


@dataclass(frozen=True)
class BatchPlan:
    """Inclusive slice ``[start, end]`` of a sequence-number range.

    Attributes:
        start: First sequence number of the batch
        end: Last sequence number of the batch (inclusive)
        batch_index: Zero-based index of this batch in the overall plan
    """

    start: int
    end: int
    batch_index: int = 0

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    def requests(self) -> list[FetchRequest]:
        """One request per sequence number, ascending."""
        return [FetchRequest(index=seq - self.start, sequence=seq) for seq in range(self.start, self.end + 1)]


@dataclass
class Page(Generic[T]):
    """One page of a cursor-paginated query.

    Attributes:
        records: Records on this page
        next_cursor: Cursor for the following page (None = end of data)
        has_next_page: Explicit end-of-data flag, when the node sends one
    """

    records: list[T] = field(default_factory=list)
    next_cursor: Any = None
    has_next_page: bool | None = None

    @property
    def is_last(self) -> bool:
        return self.next_cursor is None or self.has_next_page is False


@dataclass
class RetrievalState:
    """Mutable progress tracked by an executor during one run.

    Attributes:
        next_unit: Next sequence number or cursor to issue
        fetched: Records successfully fetched so far
        consecutive_failures: Failures of the in-flight unit since its last success
        total_retries: Retries performed over the whole run
        skipped: Units skipped as not found or unrecoverable
    """

    next_unit: Any = None
    fetched: int = 0
    consecutive_failures: int = 0
    total_retries: int = 0
    skipped: int = 0

    def record_success(self, count: int) -> None:
        self.fetched += count
        self.consecutive_failures = 0

    def record_failure(self) -> None:
        self.consecutive_failures += 1
        self.total_retries += 1

    def clear_failures(self) -> None:
        """Start the next unit with a fresh failure count (after a skip)."""
        self.consecutive_failures = 0


@dataclass
class RetrievalResult(Generic[T]):
    """Records gathered by one executor run, in gathering order.

    Attributes:
        records: Fetched records (unordered as gathered)
        units_used: Batches, pages or transactions successfully processed
        retries: Total retries performed
        skipped: Units skipped
    """

    records: list[T]
    units_used: int = 0
    retries: int = 0
    skipped: int = 0

    @property
    def total_records(self) -> int:
        return len(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records
