"""Data models for ledger records.

Architecture:
    Normalized records are Pydantic v2 models, all frozen so a record cannot
    change after the fetcher built it. Aliases keep the JSON output keys the
    command-line tools have always written.

Model Categories:
    - Records: Checkpoint, Event, ObjectState
    - Derived: Summary, ObjectHistory
    - Raw access: Payload, PayloadKind
"""

from .checkpoint import Checkpoint
from .event import Event
from .history import ObjectHistory
from .object_state import ObjectState
from .payload import Payload, PayloadKind, parse_int
from .summary import Summary

__all__ = [
    "Checkpoint",
    "Event",
    "ObjectHistory",
    "ObjectState",
    "Payload",
    "PayloadKind",
    "Summary",
    "parse_int",
]
