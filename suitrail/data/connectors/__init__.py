"""Chain connectors."""

from .sui import CheckpointFetcher, EventFetcher, ObjectFetcher

__all__ = ["CheckpointFetcher", "EventFetcher", "ObjectFetcher"]
