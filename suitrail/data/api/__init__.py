"""High-level API."""

from .history_api import HistoryAPI

__all__ = ["HistoryAPI"]
