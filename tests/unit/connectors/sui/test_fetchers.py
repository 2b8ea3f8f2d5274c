"""Unit tests for Sui record fetchers."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from suitrail.data.connectors.sui import CheckpointFetcher, EventFetcher, ObjectFetcher
from suitrail.data.connectors.sui.fetchers import OBJECT_OPTIONS, TIMESTAMP_OPTIONS
from suitrail.data.core import NotFoundError, TransportError, ValidationError
from suitrail.data.runtime.chunking import FetchRequest


def _rpc(handler):
    rpc = MagicMock()
    rpc.call = AsyncMock(side_effect=handler)
    return rpc


class TestCheckpointFetcher:
    @pytest.mark.asyncio
    async def test_fetch_sends_sequence_as_string(self):
        rpc = _rpc(lambda method, params: {"sequenceNumber": params[0], "digest": "D"})
        checkpoint = await CheckpointFetcher(rpc).fetch(FetchRequest(sequence=42))
        assert checkpoint.sequence_number == 42
        rpc.call.assert_awaited_once_with("sui_getCheckpoint", ["42"])

    @pytest.mark.asyncio
    async def test_fetch_latest_sequence(self):
        rpc = _rpc(lambda method, params: "1000")
        assert await CheckpointFetcher(rpc).fetch_latest_sequence() == 1000
        rpc.call.assert_awaited_once_with("sui_getLatestCheckpointSequenceNumber", [])

    @pytest.mark.asyncio
    async def test_request_without_sequence_rejected(self):
        with pytest.raises(ValidationError):
            await CheckpointFetcher(_rpc(None)).fetch(FetchRequest(cursor="x"))


class TestEventFetcher:
    @pytest.mark.asyncio
    async def test_default_query_is_ascending_over_all_events(self):
        rpc = _rpc(lambda method, params: {"data": [], "nextCursor": None, "hasNextPage": False})
        page = await EventFetcher(rpc).fetch_page(FetchRequest(cursor=None, limit=25))
        assert page.is_last
        rpc.call.assert_awaited_once_with("suix_queryEvents", [{"All": []}, None, 25, False])

    @pytest.mark.asyncio
    async def test_custom_filter_and_order(self):
        rpc = _rpc(lambda method, params: {"data": []})
        fetcher = EventFetcher(rpc, event_filter={"Sender": "0xA"}, descending=True)
        cursor = {"txDigest": "T", "eventSeq": "1"}
        await fetcher.fetch_page(FetchRequest(cursor=cursor, limit=10))
        rpc.call.assert_awaited_once_with("suix_queryEvents", [{"Sender": "0xA"}, cursor, 10, True])


class TestObjectFetcher:
    @pytest.mark.asyncio
    async def test_current_state_is_timestamped(self):
        def handler(method, params):
            if method == "sui_getObject":
                return {"data": {"version": "7", "previousTransaction": "tx7"}}
            assert method == "sui_getTransactionBlock"
            assert params == ["tx7", TIMESTAMP_OPTIONS]
            return {"timestampMs": "1700000000700"}

        rpc = _rpc(handler)
        state = await ObjectFetcher(rpc).fetch_current("0x5")

        assert state.version == "7"
        assert state.timestamp == 1700000000700
        assert rpc.call.await_args_list[0].args == ("sui_getObject", ["0x5", OBJECT_OPTIONS])

    @pytest.mark.asyncio
    async def test_timestamp_failure_leaves_zero(self):
        def handler(method, params):
            if method == "sui_getObject":
                return {"data": {"version": "7", "previousTransaction": "tx7"}}
            raise TransportError("timeout")

        state = await ObjectFetcher(_rpc(handler)).fetch_current("0x5")
        assert state.version == "7"
        assert state.timestamp == 0

    @pytest.mark.asyncio
    async def test_missing_object(self):
        rpc = _rpc(lambda method, params: {"error": {"code": "notExists"}})
        with pytest.raises(NotFoundError):
            await ObjectFetcher(rpc).fetch_current("0xdead")

    @pytest.mark.asyncio
    async def test_transaction_digests_follow_cursor(self):
        pages = {
            None: {"data": [{"digest": "tx3"}, {"digest": "tx2"}], "nextCursor": "tx2", "hasNextPage": True},
            "tx2": {"data": [{"digest": "tx1"}], "nextCursor": "tx1", "hasNextPage": False},
        }

        def handler(method, params):
            assert method == "suix_queryTransactionBlocks"
            query, cursor, limit, descending = params
            assert query == {"filter": {"InputObject": "0x5"}, "options": None}
            assert limit is None
            assert descending is True
            return pages[cursor]

        digests = await ObjectFetcher(_rpc(handler)).fetch_transaction_digests("0x5")
        assert digests == ["tx3", "tx2", "tx1"]

    @pytest.mark.asyncio
    async def test_repeated_cursor_stops_digest_query(self, caplog):
        def handler(method, params):
            cursor = params[1]
            return {"data": [{"digest": f"tx-{cursor}"}], "nextCursor": "c1", "hasNextPage": True}

        rpc = _rpc(handler)
        with caplog.at_level("WARNING", logger="suitrail.data.connectors.sui.fetchers"):
            digests = await ObjectFetcher(rpc).fetch_transaction_digests("0x5")

        assert digests == ["tx-None", "tx-c1"]
        assert rpc.call.await_count == 2
        assert "returned the same cursor twice" in caplog.text

    @pytest.mark.asyncio
    async def test_page_cap_is_logged(self, caplog, monkeypatch):
        monkeypatch.setattr("suitrail.data.connectors.sui.fetchers.MAX_DIGEST_PAGES", 2)
        calls = iter(range(100))

        def handler(method, params):
            n = next(calls)
            return {"data": [{"digest": f"tx{n}"}], "nextCursor": f"c{n}", "hasNextPage": True}

        rpc = _rpc(handler)
        with caplog.at_level("WARNING", logger="suitrail.data.connectors.sui.fetchers"):
            digests = await ObjectFetcher(rpc).fetch_transaction_digests("0x5")

        assert digests == ["tx0", "tx1"]
        assert rpc.call.await_count == 2
        assert "Stopped transaction discovery for 0x5 after 2 pages" in caplog.text

    @pytest.mark.asyncio
    async def test_fetch_from_transaction(self):
        def handler(method, params):
            assert params[0] == "tx2"
            return {
                "timestampMs": "900",
                "objectChanges": [{"objectId": "0x5", "version": "2", "owner": {"Shared": {}}}],
            }

        state = await ObjectFetcher(_rpc(handler)).fetch_from_transaction(
            FetchRequest(digest="tx2", object_id="0x5")
        )
        assert state.version == "2"
        assert state.timestamp == 900
        assert state.previous_transaction == "tx2"

    @pytest.mark.asyncio
    async def test_fetch_from_transaction_needs_digest(self):
        with pytest.raises(ValidationError):
            await ObjectFetcher(_rpc(None)).fetch_from_transaction(FetchRequest(object_id="0x5"))
