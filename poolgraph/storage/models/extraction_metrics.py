from sqlalchemy import Table, Column, Integer, Numeric, Text, TIMESTAMP, func

from poolgraph.storage.models.base import Base

extraction_metrics_table = Table(
    "extraction_metrics",
    Base.metadata,
    Column("id", Integer, primary_key=True),
    Column("timestamp", TIMESTAMP(timezone=True), server_default=func.now()),
    Column("block_range", Text),
    Column("log_count", Integer, nullable=False),
    Column("pools_stored", Integer, nullable=False),
    Column("duration_seconds", Numeric(10, 2)),
)
