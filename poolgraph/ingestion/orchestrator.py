import asyncio
import logging
import time
from dataclasses import dataclass

from poolgraph.config.settings import BLOCKS_PER_CALL, MAX_IN_FLIGHT
from poolgraph.ingestion.decoder import decode_logs
from poolgraph.rpc.client import RpcClient
from poolgraph.storage.pool_store import PoolStore
from poolgraph.utils.constants import TRACKED_TOPICS

log = logging.getLogger(__name__)


@dataclass
class IngestStats:
    windows: int = 0
    logs_fetched: int = 0
    pools_stored: int = 0
    logs_rejected: int = 0
    duration_seconds: float = 0.0


def walk_block_ranges(start: int, end: int, step: int):
    """Consecutive inclusive (from, to) windows; the last one is clipped to ``end``."""
    for i in range(start, end, step):
        yield i, min(i + step - 1, end)


class IngestOrchestrator:
    """Backfill driver: windows → concurrent fetches → decode → store.

    Every window yields one fetch per tracked topic. A fixed pool of
    ``max_in_flight`` workers drains a bounded queue; once a batch is drained
    its results are decoded and written in window order, then committed.
    """

    def __init__(
        self,
        client: RpcClient,
        store: PoolStore,
        window_size: int = BLOCKS_PER_CALL,
        max_in_flight: int = MAX_IN_FLIGHT,
        topics: tuple[str, ...] = TRACKED_TOPICS,
    ):
        if window_size <= 0:
            raise ValueError(f"window_size must be positive, got {window_size}")
        if max_in_flight < len(topics):
            raise ValueError(
                f"max_in_flight ({max_in_flight}) must cover one window ({len(topics)} fetches)"
            )
        self.client = client
        self.store = store
        self.window_size = window_size
        self.max_in_flight = max_in_flight
        self.topics = topics

    @property
    def windows_per_batch(self) -> int:
        return self.max_in_flight // len(self.topics)

    def windows(self, start_block: int, end_block: int) -> list[tuple[int, int]]:
        return list(walk_block_ranges(start_block, end_block, self.window_size))

    async def _worker(self, queue: asyncio.Queue, results: dict) -> None:
        while True:
            key, from_block, to_block, topic = await queue.get()
            try:
                results[key] = await self.client.fetch_logs(from_block, to_block, topic)
            finally:
                queue.task_done()

    async def _drain(self, queue: asyncio.Queue, workers: list[asyncio.Task]) -> None:
        join = asyncio.ensure_future(queue.join())
        await asyncio.wait([join, *workers], return_when=asyncio.FIRST_COMPLETED)
        failed = [w for w in workers if w.done()]
        if failed:
            join.cancel()
            failed[0].result()  # re-raises the fetch error (ResourceExhausted)
            raise RuntimeError("fetch worker exited unexpectedly")

    def _flush(self, results: dict, stats: IngestStats) -> None:
        for key in sorted(results):
            raw_logs = results[key]
            if not raw_logs:
                continue
            stats.logs_fetched += len(raw_logs)
            events, rejected = decode_logs(raw_logs)
            stats.logs_rejected += rejected
            stats.pools_stored += self.store.insert_many(events)
        self.store.commit()

    async def run(self, start_block: int, end_block: int) -> IngestStats:
        start_ts = time.time()
        windows = self.windows(start_block, end_block)
        stats = IngestStats(windows=len(windows))
        total_blocks = max(1, end_block - start_block)
        per_batch = self.windows_per_batch

        log.info(
            f"Ingesting blocks {start_block} to {end_block}: {len(windows)} windows "
            f"of {self.window_size}, {per_batch} windows per batch"
        )

        queue: asyncio.Queue = asyncio.Queue(maxsize=self.max_in_flight)
        results: dict = {}
        workers = [
            asyncio.create_task(self._worker(queue, results))
            for _ in range(self.max_in_flight)
        ]
        try:
            for batch_start in range(0, len(windows), per_batch):
                batch = windows[batch_start:batch_start + per_batch]
                results.clear()
                for offset, (from_block, to_block) in enumerate(batch):
                    for topic_idx, topic in enumerate(self.topics):
                        key = (batch_start + offset, topic_idx)
                        queue.put_nowait((key, from_block, to_block, topic))

                await self._drain(queue, workers)
                self._flush(results, stats)

                last_to = batch[-1][1]
                progress = min(100.0, (last_to - start_block + 1) / total_blocks * 100)
                log.info(
                    f"Progress: {progress:.2f}% (Block {batch[0][0]:,} to {last_to:,}), "
                    f"{stats.pools_stored} pools stored"
                )
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

        stats.duration_seconds = time.time() - start_ts
        log.info(
            f"[ingest] Done in {stats.duration_seconds:.2f}s: {stats.logs_fetched} logs, "
            f"{stats.pools_stored} stored, {stats.logs_rejected} rejected"
        )
        return stats
