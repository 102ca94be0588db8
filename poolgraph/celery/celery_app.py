# celery_app.py  ─────────────────────────────────────────────────────────
from celery import Celery

from poolgraph.config.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "poolgraph_tasks",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

celery_app.conf.update(
    task_serializer       ='json',
    result_serializer     ='json',
    accept_content        =['json'],
    timezone              ='UTC',
    enable_utc            =True,

    # one backfill saturates the endpoint pool on its own
    worker_concurrency    =1,
    worker_hijack_root_logger = False,
)

# register task modules
import poolgraph.ingestion.schedule_ingest  # noqa: E402,F401
