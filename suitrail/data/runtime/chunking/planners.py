"""Batch planning for bounded numeric ranges.

This module provides the RangePlanner class that splits an inclusive
sequence-number range into consecutive batches.
"""

from __future__ import annotations

from ...core.exceptions import ValidationError
from .definitions import BatchPlan
from .telemetry import log_batch_plan


class RangePlanner:
    """Plans batches over an inclusive ``[start, end]`` range."""

    def __init__(self, batch_size: int) -> None:
        """Initialize range planner.

        Args:
            batch_size: Sequence numbers per batch (>= 1)

        Raises:
            ValidationError: If batch_size is not positive
        """
        if batch_size < 1:
            raise ValidationError("batch size must be >= 1")
        self._batch_size = batch_size

    def plan(self, *, start: int, end: int) -> list[BatchPlan]:
        """Plan batches for a range.

        The number of plans is ``ceil((end - start + 1) / batch_size)``; the
        last batch is truncated at ``end``.

        Args:
            start: First sequence number (inclusive)
            end: Last sequence number (inclusive)

        Returns:
            Batch plans in ascending order

        Raises:
            ValidationError: If start < 0 or start > end
        """
        if start < 0:
            raise ValidationError("start checkpoint must be >= 0")
        if start > end:
            raise ValidationError(
                f"start checkpoint must be <= end checkpoint (start={start}, end={end})"
            )

        plans: list[BatchPlan] = []
        batch_index = 0
        for batch_start in range(start, end + 1, self._batch_size):
            batch_end = min(batch_start + self._batch_size - 1, end)
            plans.append(BatchPlan(start=batch_start, end=batch_end, batch_index=batch_index))
            batch_index += 1

        log_batch_plan(
            start=start, end=end, batch_size=self._batch_size, total_batches=len(plans)
        )
        return plans
