#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from suitrail.data.api import HistoryAPI
from suitrail.data.connectors.sui import CheckpointFetcher
from suitrail.data.core import DiscoveryConfig, PaginationConfig, RangeConfig, RPCConfig
from suitrail.data.runtime.rpc import RPCClient
from suitrail.data.utils import RetryPolicy


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Quickstart for checkpoint, event and object history retrieval")
    p.add_argument("object_id", nargs="?", default=None, help="Object to track (optional)")
    p.add_argument("checkpoints", nargs="?", type=int, default=5, help="Latest checkpoints to fetch (>= 1)")
    p.add_argument("--rpc-url", default=None)
    args = p.parse_args()
    if args.checkpoints < 1:
        p.error("checkpoints must be >= 1")
    return args


async def main() -> None:
    args = parse_args()
    policy = RetryPolicy(max_retries=2, backoff=1.0)

    async with RPCClient(RPCConfig.from_env(url=args.rpc_url)) as rpc:
        api = HistoryAPI(rpc=rpc, retry_policy=policy)

        # Window of the newest checkpoints, ending at the tip
        tip = await CheckpointFetcher(rpc).fetch_latest_sequence()
        window = RangeConfig.latest(tip, args.checkpoints)
        result, _ = await api.fetch_checkpoints(window)
        print(f"Checkpoints {window.start}-{tip}: {result.total_records} | retries={result.retries} | skipped={result.skipped}")
        for c in result.records:
            print(f"  #{c.sequence_number:<10} {c.digest} txs={c.transaction_count}")

        events, _ = await api.fetch_events(PaginationConfig(page_size=10, limit=10))
        print(f"Events: {events.total_records} over {events.units_used} page(s)")
        for e in events.records[:5]:
            print(f"  {e.tx_digest}:{e.event_seq} {e.type}")

        if not args.object_id:
            return
        history = await api.fetch_object_history(DiscoveryConfig(object_id=args.object_id))
        print(
            f"Object {history.id}: {len(history.states)} versions, "
            f"{history.num_owners} owner(s), last seen {history.last_seen}"
        )


if __name__ == "__main__":
    asyncio.run(main())
