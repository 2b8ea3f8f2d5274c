"""Utility functions."""

from .http import HTTPClient
from .retry import FailureCounter, RetryPolicy, retry_async

__all__ = ["FailureCounter", "HTTPClient", "RetryPolicy", "retry_async"]
