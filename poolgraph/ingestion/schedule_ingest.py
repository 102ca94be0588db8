# poolgraph/ingestion/schedule_ingest.py
"""
Celery-side wrapper that launches one full pool backfill.

It runs the same ``run_backfill`` coroutine the ``poolgraph ingest`` CLI
command uses and returns the run's counters as a plain dict.
"""
import asyncio
import logging
from dataclasses import asdict

from celery import shared_task

from poolgraph.config.settings import DATABASE_URL
from poolgraph.ingestion.runner import run_backfill

log = logging.getLogger(__name__)


@shared_task(name="backfill_pools", queue="ingest", bind=True)
def backfill_pools(self, database_url: str = DATABASE_URL) -> dict:
    log.info(f"🔄  Starting pool backfill into {database_url}")
    stats = asyncio.run(run_backfill(database_url=database_url))
    return asdict(stats)
