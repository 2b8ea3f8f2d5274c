"""Ledger event data model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Header used when no event was fetched and there is nothing to infer columns from
FALLBACK_CSV_FIELDS = ["EventID", "PackageID", "TransactionDigest", "ParsedJson"]


class Event(BaseModel):
    """An event as returned by ``suix_queryEvents``.

    The full event mapping is kept verbatim in ``raw`` so the CSV output
    can carry every column the node sent; the remaining attributes are
    convenience projections defaulting to zero values.
    """

    raw: dict[str, Any] = Field(default_factory=dict)
    tx_digest: str = ""
    event_seq: int = 0
    timestamp_ms: int = 0
    sender: str = ""
    type: str = ""

    model_config = ConfigDict(frozen=True)

    def column_names(self) -> list[str]:
        """Field names in the order the node sent them."""
        return list(self.raw.keys())
