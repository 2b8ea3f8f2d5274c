"""Configuration objects handed to the retrieval engine.

Each configuration is a frozen dataclass validated on construction, so an
invalid range or an empty object id fails before any request is sent.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from .constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_RPC_URL,
    DEFAULT_TIMEOUT_SECONDS,
    RPC_URL_ENV_VAR,
)
from .exceptions import ValidationError


@dataclass(frozen=True)
class RPCConfig:
    """Connection settings for the JSON-RPC node.

    Attributes:
        url: Endpoint receiving JSON-RPC POST requests
        timeout: Total per-request timeout in seconds
        debug: Log request payloads and response previews
    """

    url: str = DEFAULT_RPC_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    debug: bool = False

    def __post_init__(self) -> None:
        if not self.url or not self.url.strip():
            raise ValidationError("RPC url must not be empty")
        if self.timeout <= 0:
            raise ValidationError("RPC timeout must be positive")

    @classmethod
    def from_env(cls, *, url: str | None = None, **kwargs: Any) -> RPCConfig:
        """Build a config, falling back to ``SUITRAIL_RPC_URL`` then the mainnet default."""
        resolved = url or os.environ.get(RPC_URL_ENV_VAR) or DEFAULT_RPC_URL
        return cls(url=resolved, **kwargs)


@dataclass(frozen=True)
class RangeConfig:
    """Bounded numeric range of checkpoint sequence numbers.

    Attributes:
        start: First sequence number (inclusive, >= 0)
        end: Last sequence number (inclusive); None or <= 0 means the current tip
        batch_size: Sequence numbers fetched per outer batch
    """

    start: int
    end: int | None = None
    batch_size: int = DEFAULT_BATCH_SIZE

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValidationError("start checkpoint must be >= 0")
        if self.batch_size < 1:
            raise ValidationError("batch size must be >= 1")
        if self.end_resolved and self.start > self.end:
            raise ValidationError("start checkpoint must be <= end checkpoint")

    @property
    def end_resolved(self) -> bool:
        """Whether ``end`` names a concrete sequence number."""
        return self.end is not None and self.end > 0

    @classmethod
    def latest(cls, tip: int, count: int, batch_size: int = DEFAULT_BATCH_SIZE) -> RangeConfig:
        """The newest ``count`` sequence numbers ending at ``tip`` (clipped at genesis)."""
        if count < 1:
            raise ValidationError("checkpoint count must be >= 1")
        if tip < 0:
            raise ValidationError("tip must be >= 0")
        start = max(tip - count + 1, 0)
        # end <= 0 reads as "current tip", so a tip of 0 stays unresolved
        return cls(start=start, end=tip if tip > 0 else None, batch_size=batch_size)

    def with_end(self, end: int) -> RangeConfig:
        """Return a copy with ``end`` resolved (re-validated)."""
        if self.start > end:
            raise ValidationError(
                f"start checkpoint must be <= end checkpoint (start={self.start}, end={end})"
            )
        return RangeConfig(start=self.start, end=end, batch_size=self.batch_size)


@dataclass(frozen=True)
class PaginationConfig:
    """Cursor pagination settings.

    Attributes:
        page_size: Records requested per page
        limit: Stop once at least this many records were fetched (None = until exhausted)
        cursor: Opaque cursor to resume from (None = beginning)
    """

    page_size: int = DEFAULT_PAGE_SIZE
    limit: int | None = None
    cursor: Any = None

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValidationError("page size must be >= 1")
        if self.limit is not None and self.limit < 1:
            raise ValidationError("limit must be >= 1 when given")


@dataclass(frozen=True)
class DiscoveryConfig:
    """Target of a transitive object-history discovery."""

    object_id: str

    def __post_init__(self) -> None:
        if not self.object_id or not self.object_id.strip():
            raise ValidationError("object id is required")
        object.__setattr__(self, "object_id", self.object_id.strip())
