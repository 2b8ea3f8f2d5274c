"""Derived statistics over a retrieved record collection."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Summary(BaseModel):
    """Read-only statistics computed by the aggregator.

    ``first_seen`` and ``last_seen`` only consider records with a known
    (positive) timestamp and stay at 0 when there is none.
    """

    record_count: int = Field(default=0, ge=0)
    change_count: int = Field(default=0, ge=0)
    distinct_owners: int = Field(default=0, ge=0)
    first_seen: int = 0
    last_seen: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def has_timestamps(self) -> bool:
        return self.first_seen > 0 and self.last_seen > 0
