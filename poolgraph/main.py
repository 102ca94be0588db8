# poolgraph/main.py
import logging

from fastapi import FastAPI
from sqlalchemy import text

from poolgraph.api import api
from poolgraph.storage.db import create_tables, engine
from poolgraph.utils.logging_setup import setup_logging

app = FastAPI()

setup_logging()
log = logging.getLogger(__name__)

app.include_router(api.router, prefix="/api")


@app.on_event("startup")
def check_db_connection():
    try:
        create_tables(engine)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            log.info("✅ Database connected.")
    except Exception as e:
        log.error(f"❌ DB connection failed: {e}")
