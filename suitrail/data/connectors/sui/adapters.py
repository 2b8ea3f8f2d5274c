"""Response adapters for Sui JSON-RPC methods.

Each adapter turns the loosely typed ``result`` member of one response into
a normalized record. Fields are pulled through :class:`Payload` so that an
absent field falls back to its zero value; only a response that cannot
stand for the requested record at all raises.

Based on the Sui JSON-RPC reference:
https://docs.sui.io/sui-api-ref
"""

from __future__ import annotations

from typing import Any

from ...core.exceptions import MalformedResponseError, NotFoundError
from ...models import Checkpoint, Event, ObjectState, Payload, parse_int
from ...runtime.chunking import Page


class ResponseAdapter:
    def parse(self, response: Any, params: dict[str, Any]) -> Any:
        return response


def _require_mapping(result: Any, what: str) -> Payload:
    payload = Payload(result)
    if not payload.is_mapping:
        raise MalformedResponseError(
            f"Invalid {what} response format: expected object, got {payload.kind.value}"
        )
    return payload


def _owner(payload: Payload) -> dict[str, Any] | str | None:
    # Owners are objects ({"AddressOwner": ...}, {"Shared": {...}}) or the bare string "Immutable"
    owner = payload.child("owner")
    if owner.is_mapping:
        return payload.get_mapping("owner")
    value = owner.raw
    return value if isinstance(value, str) and value else None


def _transaction_timestamp(payload: Payload) -> int:
    # Current nodes send timestampMs; some older tooling reads timestamp_ms
    timestamp = payload.get_int("timestampMs")
    if timestamp <= 0:
        timestamp = payload.get_int("timestamp_ms")
    return timestamp


class LatestSequenceAdapter(ResponseAdapter):
    """Adapter for ``sui_getLatestCheckpointSequenceNumber`` (a decimal string)."""

    def parse(self, response: Any, params: dict[str, Any]) -> int:
        sequence = parse_int(response, -1)
        if sequence < 0:
            raise MalformedResponseError(f"failed to parse sequence number: {response!r}")
        return sequence


class CheckpointAdapter(ResponseAdapter):
    """Adapter for ``sui_getCheckpoint``.

    Expected format::

        {"digest": "...", "sequenceNumber": "123", "timestampMs": "1700000000000",
         "validatorSignature": "...", "transactions": ["..."],
         "networkTotalTransactions": "456", "checkpointCommitments": [...], ...}
    """

    def parse(self, response: Any, params: dict[str, Any]) -> Checkpoint:
        if response is None:
            raise NotFoundError(f"checkpoint {params.get('sequence')} not found")
        payload = _require_mapping(response, "checkpoint")

        return Checkpoint(
            digest=payload.get_str("digest"),
            sequence_number=max(payload.get_int("sequenceNumber"), 0),
            timestamp_ms=payload.get_int("timestampMs"),
            validator_signature=payload.get_str("validatorSignature"),
            transaction_digests=payload.get_str_list("transactions"),
            network_total_transactions=payload.get_int("networkTotalTransactions"),
            event_root=payload.get_str("eventRoot"),
        )


class EventPageAdapter(ResponseAdapter):
    """Adapter for ``suix_queryEvents``.

    Expected format::

        {"data": [{"id": {"txDigest": "...", "eventSeq": "0"}, "packageId": "...",
                   "transactionModule": "...", "sender": "...", "type": "...",
                   "parsedJson": {...}, "timestampMs": "..."}, ...],
         "nextCursor": {"txDigest": "...", "eventSeq": "0"} | null,
         "hasNextPage": true}
    """

    def parse(self, response: Any, params: dict[str, Any]) -> Page[Event]:
        payload = _require_mapping(response, "event page")

        events: list[Event] = []
        for item in payload.child("data").items():
            if not item.is_mapping:
                continue
            event_id = item.child("id")
            events.append(
                Event(
                    raw=dict(item.raw),
                    tx_digest=event_id.get_str("txDigest"),
                    event_seq=event_id.get_int("eventSeq"),
                    timestamp_ms=item.get_int("timestampMs"),
                    sender=item.get_str("sender"),
                    type=item.get_str("type"),
                )
            )

        return Page(
            records=events,
            next_cursor=payload.child("nextCursor").raw,
            has_next_page=payload.get_bool("hasNextPage"),
        )


class ObjectStateAdapter(ResponseAdapter):
    """Adapter for ``sui_getObject``.

    Expected format: ``{"data": {...}}`` for a live object,
    ``{"error": {"code": "notExists", ...}}`` otherwise.
    """

    def parse(self, response: Any, params: dict[str, Any]) -> ObjectState:
        payload = _require_mapping(response, "object")
        data = payload.child("data")
        if not data.is_mapping:
            error = payload.child("error")
            code = error.get_str("code") or "no data"
            raise NotFoundError(f"object {params.get('object_id')} not available: {code}")

        return ObjectState(
            version=data.get_version("version"),
            digest=data.get_str("digest"),
            type=data.get_str("type"),
            owner=_owner(data),
            previous_transaction=data.get_str("previousTransaction"),
            content=data.get_mapping("content"),
        )


class TransactionTimestampAdapter(ResponseAdapter):
    """Adapter extracting the timestamp of a ``sui_getTransactionBlock`` result."""

    def parse(self, response: Any, params: dict[str, Any]) -> int:
        payload = _require_mapping(response, "transaction")
        timestamp = _transaction_timestamp(payload)
        if timestamp <= 0:
            raise MalformedResponseError(
                f"timestamp not found in transaction {params.get('digest')}"
            )
        return timestamp


class TransactionObjectChangeAdapter(ResponseAdapter):
    """Adapter picking the target object's entry out of a transaction's ``objectChanges``."""

    def parse(self, response: Any, params: dict[str, Any]) -> ObjectState:
        object_id = params["object_id"]
        digest = params["digest"]
        payload = _require_mapping(response, "transaction")

        for change in payload.child("objectChanges").items():
            if change.get_str("objectId") != object_id:
                continue
            return ObjectState(
                version=change.get_version("version"),
                digest=change.get_str("digest"),
                type=change.get_str("objectType"),
                owner=_owner(change),
                previous_transaction=digest,
                timestamp=_transaction_timestamp(payload),
            )

        raise NotFoundError(f"object {object_id} not found in transaction {digest}")


class TransactionDigestsAdapter(ResponseAdapter):
    """Adapter for one page of ``suix_queryTransactionBlocks``."""

    def parse(self, response: Any, params: dict[str, Any]) -> Page[str]:
        payload = _require_mapping(response, "transaction query")
        digests = [
            item.get_str("digest")
            for item in payload.child("data").items()
            if item.get_str("digest")
        ]
        return Page(
            records=digests,
            next_cursor=payload.child("nextCursor").raw,
            has_next_page=payload.get_bool("hasNextPage"),
        )
