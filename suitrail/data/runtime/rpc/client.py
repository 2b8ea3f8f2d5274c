"""JSON-RPC 2.0 client for a Sui full node.

One :meth:`RPCClient.call` is one POST carrying one request envelope. Every
failure surfaces as a :class:`~suitrail.data.core.exceptions.ProviderError`
subclass so the retry policy can classify it:

- ``TransportError``: connection failures, timeouts, HTTP errors, bodies that
  are not JSON
- ``MalformedResponseError``: a JSON body that is not a JSON-RPC envelope
- ``RemoteAPIError``: the envelope carries an ``error`` member

A ``null`` result is returned as ``None`` and is not an error.
"""

from __future__ import annotations

import asyncio
import itertools
import json
import logging
from typing import Any, Protocol

import aiohttp

from ...core.config import RPCConfig
from ...core.constants import RESPONSE_PREVIEW_CHARS
from ...core.exceptions import MalformedResponseError, RemoteAPIError, TransportError
from ...utils.http import HTTPClient

logger = logging.getLogger(__name__)


class RPCCaller(Protocol):
    """Anything able to perform a single JSON-RPC call."""

    async def call(self, method: str, params: list[Any]) -> Any: ...


def _preview(value: Any) -> str:
    text = value if isinstance(value, str) else json.dumps(value, default=str)
    if len(text) > RESPONSE_PREVIEW_CHARS:
        return text[:RESPONSE_PREVIEW_CHARS] + "..."
    return text


class RPCClient:
    """Async JSON-RPC client over :class:`HTTPClient`."""

    def __init__(self, config: RPCConfig | None = None, *, http: HTTPClient | None = None) -> None:
        self._config = config or RPCConfig()
        self._http = http or HTTPClient(timeout=self._config.timeout)
        self._ids = itertools.count(1)

    @property
    def url(self) -> str:
        return self._config.url

    def build_payload(self, method: str, params: list[Any]) -> dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": list(params),
        }

    async def call(self, method: str, params: list[Any]) -> Any:
        """Send one request and return its ``result`` member.

        Raises:
            TransportError: The node could not be reached or sent a non-JSON body
            MalformedResponseError: The body is not a JSON-RPC response object
            RemoteAPIError: The node reported an application-level error
        """
        payload = self.build_payload(method, params)
        if self._config.debug:
            logger.debug(f"Sending request to {self.url}: {_preview(payload)}")

        try:
            body = await self._http.post(self.url, json_body=payload)
        except aiohttp.ClientResponseError as e:
            raise TransportError(f"{method}: HTTP {e.status} {e.message}", status_code=e.status) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"{method}: failed to send request: {e!r}") from e
        except ValueError as e:
            raise TransportError(f"{method}: failed to decode response: {e}") from e

        if self._config.debug:
            logger.debug(f"Received response for {method}: {_preview(body)}")

        if not isinstance(body, dict):
            raise MalformedResponseError(
                f"{method}: expected a JSON-RPC object, got {type(body).__name__}"
            )

        error = body.get("error")
        if error is not None:
            code = error.get("code") if isinstance(error, dict) else None
            message = error.get("message", error) if isinstance(error, dict) else error
            raise RemoteAPIError(f"{method}: API error: {message}", code=code, data=error)

        return body.get("result")

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> RPCClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
