"""Checkpoint data model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

CSV_FIELDS = [
    "Digest",
    "SequenceNumber",
    "TimestampMs",
    "TransactionCount",
    "NetworkTotalTransactions",
    "EventRoot",
]


class Checkpoint(BaseModel):
    """Normalized projection of a ``sui_getCheckpoint`` result.

    Every field absent from the response keeps its zero value.
    """

    digest: str = Field(default="", alias="Digest")
    sequence_number: int = Field(default=0, ge=0, alias="SequenceNumber")
    timestamp_ms: int = Field(default=0, alias="TimestampMs")
    validator_signature: str = Field(default="", alias="ValidatorSignature")
    transaction_digests: list[str] = Field(default_factory=list, alias="TransactionDigests")
    network_total_transactions: int = Field(default=0, alias="NetworkTotalTransactions")
    event_root: str = Field(default="", alias="EventRoot")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def transaction_count(self) -> int:
        return len(self.transaction_digests)

    def to_row(self) -> dict[str, Any]:
        """Flat row keyed by :data:`CSV_FIELDS`."""
        return {
            "Digest": self.digest,
            "SequenceNumber": self.sequence_number,
            "TimestampMs": self.timestamp_ms,
            "TransactionCount": self.transaction_count,
            "NetworkTotalTransactions": self.network_total_transactions,
            "EventRoot": self.event_root,
        }
