"""Unit tests for the range, cursor and discovery executors."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from suitrail.data.core import (
    NotFoundError,
    RetryExhaustedError,
    TransportError,
    ValidationError,
)
from suitrail.data.runtime.chunking import (
    CursorExecutor,
    DiscoveryExecutor,
    FetchRequest,
    Page,
    RangeExecutor,
    RangePlanner,
)
from suitrail.data.utils import RetryPolicy

FAST = RetryPolicy(max_retries=3, backoff=0, inter_batch_delay=0)


class TestRangeExecutor:
    """Test RangeExecutor functionality."""

    @pytest.mark.asyncio
    async def test_visits_every_sequence_in_order(self):
        visited = []

        async def fetch_unit(request: FetchRequest) -> int:
            visited.append(request.sequence)
            return request.sequence

        plans = RangePlanner(batch_size=3).plan(start=5, end=12)
        result = await RangeExecutor(policy=FAST).execute(plans=plans, fetch_unit=fetch_unit)

        assert visited == list(range(5, 13))
        assert result.records == list(range(5, 13))
        assert result.units_used == 3
        assert result.retries == 0

    @pytest.mark.asyncio
    async def test_single_checkpoint_range(self):
        fetch_unit = AsyncMock(side_effect=lambda request: request.sequence)
        plans = RangePlanner(batch_size=10).plan(start=10, end=10)

        result = await RangeExecutor(policy=FAST).execute(plans=plans, fetch_unit=fetch_unit)

        assert result.records == [10]
        assert result.retries == 0
        assert fetch_unit.await_count == 1

    @pytest.mark.asyncio
    async def test_failed_batch_restarts_from_its_first_sequence(self):
        visited = []
        failed = False

        async def fetch_unit(request: FetchRequest) -> int:
            nonlocal failed
            visited.append(request.sequence)
            if request.sequence == 1 and not failed:
                failed = True
                raise TransportError("connection reset")
            return request.sequence

        plans = RangePlanner(batch_size=3).plan(start=0, end=2)
        result = await RangeExecutor(policy=FAST).execute(plans=plans, fetch_unit=fetch_unit)

        assert visited == [0, 1, 0, 1, 2]
        assert result.records == [0, 1, 2]
        assert result.retries == 1

    @pytest.mark.asyncio
    async def test_exhausted_batch_aborts_run(self):
        fetch_unit = AsyncMock(side_effect=TransportError("node down"))
        policy = RetryPolicy(max_retries=2, backoff=0, inter_batch_delay=0)
        plans = RangePlanner(batch_size=5).plan(start=0, end=9)

        with pytest.raises(RetryExhaustedError) as exc_info:
            await RangeExecutor(policy=policy).execute(plans=plans, fetch_unit=fetch_unit)

        assert exc_info.value.retries == 2
        # first sequence of the first batch, attempted max_retries + 1 times
        assert fetch_unit.await_count == 3

    @pytest.mark.asyncio
    async def test_not_found_sequence_is_skipped(self):
        async def fetch_unit(request: FetchRequest) -> int:
            if request.sequence == 3:
                raise NotFoundError("checkpoint 3 not found")
            return request.sequence

        plans = RangePlanner(batch_size=10).plan(start=0, end=5)
        result = await RangeExecutor(policy=FAST).execute(plans=plans, fetch_unit=fetch_unit)

        assert result.records == [0, 1, 2, 4, 5]
        assert result.skipped == 1
        assert result.retries == 0

    @pytest.mark.asyncio
    async def test_delay_between_batches_only(self):
        fetch_unit = AsyncMock(side_effect=lambda request: request.sequence)
        policy = RetryPolicy(max_retries=0, backoff=0, inter_batch_delay=0.2)
        plans = RangePlanner(batch_size=2).plan(start=0, end=5)

        with patch(
            "suitrail.data.runtime.chunking.executors.asyncio.sleep", new_callable=AsyncMock
        ) as sleep:
            await RangeExecutor(policy=policy).execute(plans=plans, fetch_unit=fetch_unit)

        assert sleep.await_count == len(plans) - 1
        sleep.assert_awaited_with(0.2)

    @pytest.mark.asyncio
    async def test_empty_plans_rejected(self):
        with pytest.raises(ValidationError):
            await RangeExecutor(policy=FAST).execute(plans=[], fetch_unit=AsyncMock())


class TestCursorExecutor:
    """Test CursorExecutor functionality."""

    @pytest.mark.asyncio
    async def test_stops_on_empty_page(self):
        pages = [
            Page(records=list(range(50)), next_cursor="c1"),
            Page(records=list(range(50, 100)), next_cursor="c2"),
            Page(records=[], next_cursor=None),
        ]
        fetch_page = AsyncMock(side_effect=pages)

        result = await CursorExecutor(policy=FAST).execute(fetch_page=fetch_page, page_size=50)

        assert result.records == list(range(100))
        assert fetch_page.await_count == 3
        cursors = [call.args[0].cursor for call in fetch_page.await_args_list]
        assert cursors == [None, "c1", "c2"]
        assert all(call.args[0].limit == 50 for call in fetch_page.await_args_list)

    @pytest.mark.asyncio
    async def test_stops_without_next_cursor(self):
        fetch_page = AsyncMock(return_value=Page(records=[1, 2, 3], next_cursor=None))

        result = await CursorExecutor(policy=FAST).execute(fetch_page=fetch_page, page_size=50)

        assert result.records == [1, 2, 3]
        assert fetch_page.await_count == 1

    @pytest.mark.asyncio
    async def test_stops_when_has_next_page_false(self):
        fetch_page = AsyncMock(
            return_value=Page(records=[1], next_cursor="more", has_next_page=False)
        )

        result = await CursorExecutor(policy=FAST).execute(fetch_page=fetch_page, page_size=1)

        assert result.records == [1]
        assert fetch_page.await_count == 1

    @pytest.mark.asyncio
    async def test_limit_keeps_overshooting_page(self):
        fetch_page = AsyncMock(return_value=Page(records=list(range(50)), next_cursor="next"))

        result = await CursorExecutor(policy=FAST).execute(
            fetch_page=fetch_page, page_size=50, limit=60
        )

        assert fetch_page.await_count == 2
        assert result.total_records == 100
        assert result.units_used == 2

    @pytest.mark.asyncio
    async def test_resumes_from_given_cursor(self):
        fetch_page = AsyncMock(return_value=Page(records=[], next_cursor=None))

        result = await CursorExecutor(policy=FAST).execute(
            fetch_page=fetch_page, page_size=10, cursor={"txDigest": "T", "eventSeq": "4"}
        )

        assert result.is_empty
        assert fetch_page.await_args.args[0].cursor == {"txDigest": "T", "eventSeq": "4"}

    @pytest.mark.asyncio
    async def test_failed_page_retried_with_same_cursor(self):
        fetch_page = AsyncMock(
            side_effect=[
                Page(records=[1], next_cursor="c1"),
                TransportError("timeout"),
                Page(records=[2], next_cursor=None),
            ]
        )

        result = await CursorExecutor(policy=FAST).execute(fetch_page=fetch_page, page_size=1)

        assert result.records == [1, 2]
        assert result.retries == 1
        cursors = [call.args[0].cursor for call in fetch_page.await_args_list]
        assert cursors == [None, "c1", "c1"]

    @pytest.mark.asyncio
    async def test_exhausted_page_aborts_run(self):
        fetch_page = AsyncMock(side_effect=TransportError("down"))

        with pytest.raises(RetryExhaustedError) as exc_info:
            await CursorExecutor(policy=FAST).execute(fetch_page=fetch_page, page_size=50)

        assert exc_info.value.retries == 3
        assert fetch_page.await_count == 4


class TestDiscoveryExecutor:
    """Test DiscoveryExecutor functionality."""

    @staticmethod
    def _anchor_reference(record: dict) -> str:
        return record["tx"]

    @pytest.mark.asyncio
    async def test_anchor_plus_discovered_states(self):
        anchor = {"version": 3, "tx": "tx0"}
        fetched = {"tx2": {"version": 5, "tx": "tx2"}}

        async def fetch_unit(request: FetchRequest) -> dict:
            assert request.object_id == "0x5"
            if request.digest not in fetched:
                raise NotFoundError(f"object 0x5 not found in transaction {request.digest}")
            return fetched[request.digest]

        fetch_unit_mock = AsyncMock(side_effect=fetch_unit)
        result = await DiscoveryExecutor(policy=FAST).execute(
            object_id="0x5",
            fetch_anchor=AsyncMock(return_value=anchor),
            discover=AsyncMock(return_value=["tx2", "tx1", "tx0"]),
            fetch_unit=fetch_unit_mock,
            anchor_reference=self._anchor_reference,
        )

        assert result.records == [anchor, {"version": 5, "tx": "tx2"}]
        assert result.skipped == 1
        digests = [call.args[0].digest for call in fetch_unit_mock.await_args_list]
        assert digests == ["tx2", "tx1"]

    @pytest.mark.asyncio
    async def test_failed_discovery_keeps_anchor(self):
        anchor = {"version": 1, "tx": "tx0"}
        discover = AsyncMock(side_effect=TransportError("query failed"))
        fetch_unit = AsyncMock()

        result = await DiscoveryExecutor(policy=FAST).execute(
            object_id="0x5",
            fetch_anchor=AsyncMock(return_value=anchor),
            discover=discover,
            fetch_unit=fetch_unit,
            anchor_reference=self._anchor_reference,
        )

        assert result.records == [anchor]
        assert discover.await_count == 4
        fetch_unit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_anchor_failure_is_fatal(self):
        with pytest.raises(NotFoundError):
            await DiscoveryExecutor(policy=FAST).execute(
                object_id="0xdead",
                fetch_anchor=AsyncMock(side_effect=NotFoundError("object not found")),
                discover=AsyncMock(return_value=[]),
                fetch_unit=AsyncMock(),
                anchor_reference=self._anchor_reference,
            )

    @pytest.mark.asyncio
    async def test_transient_digest_failure_retried(self):
        anchor = {"version": 2, "tx": "tx0"}
        fetch_unit = AsyncMock(side_effect=[TransportError("reset"), {"version": 1, "tx": "tx1"}])

        result = await DiscoveryExecutor(policy=FAST).execute(
            object_id="0x5",
            fetch_anchor=AsyncMock(return_value=anchor),
            discover=AsyncMock(return_value=["tx1"]),
            fetch_unit=fetch_unit,
            anchor_reference=self._anchor_reference,
        )

        assert result.total_records == 2
        assert result.retries == 1
        assert result.skipped == 0

    @pytest.mark.asyncio
    async def test_repeated_digest_fetched_once(self):
        anchor = {"tx": "t0"}
        fetch_unit = AsyncMock(side_effect=lambda request: {"tx": request.digest})

        result = await DiscoveryExecutor(policy=FAST).execute(
            object_id="0x5",
            fetch_anchor=AsyncMock(return_value=anchor),
            discover=AsyncMock(return_value=["t1", "t1", "t0", "t1"]),
            fetch_unit=fetch_unit,
            anchor_reference=self._anchor_reference,
        )

        assert result.records == [{"tx": "t0"}, {"tx": "t1"}]
        assert fetch_unit.await_count == 1

    @pytest.mark.asyncio
    async def test_skipped_digest_does_not_spend_next_budget(self):
        """Failures of an abandoned transaction are not charged to the next one."""
        anchor = {"tx": "t0"}
        outcomes = [TransportError("down")] * 4 + [TransportError("flaky")] * 3 + [{"tx": "t2"}]
        fetch_unit = AsyncMock(side_effect=outcomes)

        result = await DiscoveryExecutor(policy=FAST).execute(
            object_id="0x5",
            fetch_anchor=AsyncMock(return_value=anchor),
            discover=AsyncMock(return_value=["t1", "t2"]),
            fetch_unit=fetch_unit,
            anchor_reference=self._anchor_reference,
        )

        assert result.records == [anchor, {"tx": "t2"}]
        assert result.skipped == 1
        assert result.retries == 6


class TestRetryTelemetry:
    @pytest.mark.asyncio
    async def test_one_log_line_per_retry(self, caplog):
        fetch_page = AsyncMock(
            side_effect=[TransportError("timeout"), Page(records=[1], next_cursor=None)]
        )

        with caplog.at_level("INFO"):
            await CursorExecutor(policy=FAST).execute(fetch_page=fetch_page, page_size=1)

        retry_lines = [r for r in caplog.records if r.levelname == "WARNING"]
        assert [r.getMessage() for r in retry_lines] == ["unit_retry"]
        assert retry_lines[0].attempt == 1
        assert retry_lines[0].max_retries == 3
        assert not [r for r in caplog.records if r.name == "suitrail.data.utils.retry"]
