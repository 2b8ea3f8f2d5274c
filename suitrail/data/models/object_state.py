"""Object version snapshot data model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ObjectState(BaseModel):
    """One version of an on-chain object.

    ``version`` is kept as the decimal string the node reports; ordering by
    version goes through the aggregator's unsigned-integer parse.
    """

    version: str = ""
    digest: str = ""
    type: str = ""
    owner: dict[str, Any] | str | None = None
    previous_transaction: str = Field(default="", alias="previousTransaction")
    content: dict[str, Any] | None = None
    timestamp: int = 0

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def with_timestamp(self, timestamp: int) -> ObjectState:
        return self.model_copy(update={"timestamp": timestamp})
