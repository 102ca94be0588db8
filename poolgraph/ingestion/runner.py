import asyncio
import logging
from multiprocessing import Process
from typing import Sequence

from sqlalchemy.orm import sessionmaker

from poolgraph.config.settings import DATABASE_URL, RPC_URLS
from poolgraph.ingestion.orchestrator import IngestOrchestrator, IngestStats
from poolgraph.rpc.client import RpcClient
from poolgraph.rpc.endpoint_pool import EndpointPool
from poolgraph.storage.db import create_tables, make_engine
from poolgraph.storage.pool_store import PoolStore

log = logging.getLogger(__name__)


async def run_backfill(
    rpc_urls: Sequence[str] | None = None,
    database_url: str = DATABASE_URL,
    client: RpcClient | None = None,
) -> IngestStats:
    """Chain head → ingest block 0..head → close the store.

    ResourceExhausted propagates; batches committed before it stay written.
    """
    engine = make_engine(database_url)
    create_tables(engine)
    store = PoolStore(sessionmaker(bind=engine, expire_on_commit=False)())
    client = client or RpcClient(EndpointPool(rpc_urls or RPC_URLS))
    try:
        async with client:
            latest_block = await client.get_latest_block()
            log.info(f"Latest block: {latest_block:,}")
            stats = await IngestOrchestrator(client, store).run(0, latest_block)
        store.log_extraction_metrics(
            block_range=f"0-{latest_block}",
            log_count=stats.logs_fetched,
            pools_stored=stats.pools_stored,
            duration_seconds=stats.duration_seconds,
        )
        return stats
    finally:
        store.close()
        engine.dispose()


def background_task(database_url: str = DATABASE_URL):
    try:
        asyncio.run(run_backfill(database_url=database_url))
    except Exception:
        log.error("[task] Backfill failed", exc_info=True)
        raise


def runner(database_url: str = DATABASE_URL) -> str:
    log.info("[runner] Kicking off pool backfill in background")
    p = Process(target=background_task, args=(database_url,))
    p.start()
    return "Backfill kicked off in background"
