"""Generic retrieval layer for batching, pagination and discovery.

This module provides reusable bulk-retrieval logic driven over any record
fetcher.

Architecture:
    The retrieval layer consists of:
    - definitions.py: FetchRequest, BatchPlan, Page, RetrievalState, RetrievalResult
    - planners.py: Range planning (splits [start, end] into batches)
    - executors.py: Range, cursor and discovery executors
    - telemetry.py: Structured logging
"""

from __future__ import annotations

from .definitions import BatchPlan, FetchRequest, Page, RetrievalResult, RetrievalState
from .executors import CursorExecutor, DiscoveryExecutor, RangeExecutor
from .planners import RangePlanner

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
]
