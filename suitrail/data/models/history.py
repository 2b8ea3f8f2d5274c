"""Object version history model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .object_state import ObjectState
from .summary import Summary


class ObjectHistory(BaseModel):
    """Chronologically ordered states of one object plus summary statistics."""

    id: str
    states: list[ObjectState] = Field(default_factory=list)
    first_seen: int = Field(default=0, alias="firstSeen")
    last_seen: int = Field(default=0, alias="lastSeen")
    num_changes: int = Field(default=0, ge=0, alias="numChanges")
    num_owners: int = Field(default=0, ge=0, alias="numOwners")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def from_summary(
        cls, object_id: str, states: list[ObjectState], summary: Summary
    ) -> ObjectHistory:
        return cls(
            id=object_id,
            states=states,
            first_seen=summary.first_seen,
            last_seen=summary.last_seen,
            num_changes=summary.change_count,
            num_owners=summary.distinct_owners,
        )

    @property
    def current(self) -> ObjectState | None:
        """Latest state (highest version), if any."""
        return self.states[-1] if self.states else None
