"""Custom exception hierarchy."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class DataError(Exception):
    """Base exception for all library errors."""

    pass


class ValidationError(DataError):
    """Malformed input range or configuration.

    Raised before any network activity takes place.
    """

    pass


class ProviderError(DataError):
    """Error from the remote JSON-RPC node."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(ProviderError):
    """The node could not be reached or returned a non-JSON body."""

    pass


class RemoteAPIError(ProviderError):
    """The node responded with a JSON-RPC ``error`` member."""

    def __init__(self, message: str, code: Any = None, data: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.data = data


class MalformedResponseError(ProviderError):
    """A response is missing a field the caller cannot do without."""

    pass


class NotFoundError(DataError):
    """A unit of work has no corresponding data.

    Non-retryable for that unit but not fatal to the overall run: bulk
    strategies skip the unit and carry on.
    """

    pass


class RetryExhaustedError(DataError):
    """A unit of work kept failing after the configured number of retries."""

    def __init__(
        self,
        message: str,
        retries: int,
        last_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.retries = retries
        self.last_error = last_error


class SinkError(DataError):
    """Writing output failed."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = path


def add_context(error: DataError, context: str) -> DataError:
    """Prefix an error's message with the failing operation, keeping its type and attributes."""
    error.args = (f"{context}: {error}",) + tuple(error.args[1:])
    return error
