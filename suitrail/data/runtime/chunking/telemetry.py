"""Structured logging for retrieval operations.

This module provides telemetry hooks for the executors, emitting event-style
log records with structured ``extra`` fields.
"""

from __future__ import annotations

import logging
from typing import Any

from .definitions import BatchPlan, RetrievalResult

logger = logging.getLogger(__name__)


def log_batch_plan(*, start: int, end: int, batch_size: int, total_batches: int) -> None:
    """Log range plan creation."""
    logger.info(
        "batch_plan_created",
        extra={
            "start": start,
            "end": end,
            "batch_size": batch_size,
            "total_batches": total_batches,
        },
    )


def log_batch_completed(*, plan: BatchPlan, records: int, fetched_total: int) -> None:
    """Log completion of a single range batch.

    Args:
        plan: Batch that completed
        records: Records gathered from this batch
        fetched_total: Records gathered so far
    """
    logger.info(
        "batch_completed",
        extra={
            "batch_index": plan.batch_index,
            "start": plan.start,
            "end": plan.end,
            "records": records,
            "fetched_total": fetched_total,
        },
    )


def log_page_completed(*, page_index: int, records: int, fetched_total: int, has_more: bool) -> None:
    """Log completion of a single cursor page."""
    logger.info(
        "page_completed",
        extra={
            "page_index": page_index,
            "records": records,
            "fetched_total": fetched_total,
            "has_more": has_more,
        },
    )


def log_unit_skipped(*, unit: Any, reason: str) -> None:
    """Log a unit of work skipped without failing the run."""
    logger.warning("unit_skipped", extra={"unit": str(unit), "reason": reason})


def log_retrieval_complete(*, strategy: str, result: RetrievalResult[Any]) -> None:
    """Log completion of an executor run."""
    logger.info(
        "retrieval_complete",
        extra={
            "strategy": strategy,
            "total_records": result.total_records,
            "units_used": result.units_used,
            "retries": result.retries,
            "skipped": result.skipped,
        },
    )


def log_unit_retry(*, unit: Any, attempt: int, max_retries: int, error: BaseException) -> None:
    """Log a failed unit of work (batch, page or transaction) about to be retried."""
    logger.warning(
        "unit_retry",
        extra={
            "unit": str(unit),
            "attempt": attempt,
            "max_retries": max_retries,
            "error": str(error),
        },
    )
