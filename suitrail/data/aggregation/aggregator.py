"""Ordering and summary statistics over retrieved records.

The aggregator is pure: it performs no I/O and does not raise on odd data.
Unparseable sort keys sort as 0 and records without an owner count as one
shared ``"unknown"`` owner.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from ..core.constants import UNKNOWN_OWNER_KEY
from ..models import Checkpoint, Event, ObjectHistory, ObjectState, Summary, parse_int

T = TypeVar("T")


def parse_version(version: Any) -> int:
    """Parse a version as an unsigned integer; anything else is 0."""
    parsed = parse_int(version, 0)
    return parsed if parsed >= 0 else 0


def owner_key(owner: Any) -> str:
    """Canonical string key for an owner descriptor.

    Equal descriptors give equal keys regardless of key order; a missing
    descriptor maps to ``"unknown"``.
    """
    if owner is None:
        return UNKNOWN_OWNER_KEY
    return json.dumps(owner, sort_keys=True, separators=(",", ":"), default=str)


class Aggregator(Generic[T]):
    """Sorts records by a monotonic key and computes a :class:`Summary`.

    Args:
        key: Monotonic sort key; None keeps the input order
        timestamp: Timestamp in ms of a record (<= 0 means unknown)
        owner: Owner descriptor of a record; None disables owner counting
    """

    def __init__(
        self,
        *,
        key: Callable[[T], int] | None = None,
        timestamp: Callable[[T], int] | None = None,
        owner: Callable[[T], Any] | None = None,
    ) -> None:
        self._key = key
        self._timestamp = timestamp
        self._owner = owner

    def sort(self, records: Iterable[T]) -> list[T]:
        """Stable ascending sort; equal keys keep their input order."""
        if self._key is None:
            return list(records)
        return sorted(records, key=self._key)

    def summarize(self, records: list[T]) -> Summary:
        """Statistics over records (order does not matter)."""
        count = len(records)

        distinct_owners = 0
        if self._owner is not None:
            distinct_owners = len({owner_key(self._owner(record)) for record in records})

        first_seen = 0
        last_seen = 0
        if self._timestamp is not None:
            known = [ts for ts in (self._timestamp(record) for record in records) if ts > 0]
            if known:
                first_seen = min(known)
                last_seen = max(known)

        return Summary(
            record_count=count,
            change_count=max(0, count - 1),
            distinct_owners=distinct_owners,
            first_seen=first_seen,
            last_seen=last_seen,
        )

    def aggregate(self, records: Iterable[T]) -> Summary:
        """Sort records, then summarize the sorted sequence."""
        return self.summarize(self.sort(records))


def checkpoint_aggregator() -> Aggregator[Checkpoint]:
    return Aggregator(
        key=lambda checkpoint: checkpoint.sequence_number,
        timestamp=lambda checkpoint: checkpoint.timestamp_ms,
    )


def event_aggregator() -> Aggregator[Event]:
    # Events keep page order: the node already returns them in sequence
    return Aggregator(timestamp=lambda event: event.timestamp_ms)


def object_state_aggregator() -> Aggregator[ObjectState]:
    return Aggregator(
        key=lambda state: parse_version(state.version),
        timestamp=lambda state: state.timestamp,
        owner=lambda state: state.owner,
    )


def build_object_history(object_id: str, states: Iterable[ObjectState]) -> ObjectHistory:
    """Order states by version and attach first/last seen, change and owner counts."""
    aggregator = object_state_aggregator()
    ordered = aggregator.sort(states)
    summary = aggregator.summarize(ordered)
    return ObjectHistory.from_summary(object_id, ordered, summary)
