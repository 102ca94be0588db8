import logging
from typing import Iterable

from sqlalchemy import func, insert, select
from sqlalchemy.orm import Session

from poolgraph.storage.models.extraction_metrics import extraction_metrics_table
from poolgraph.storage.models.pools import UniswapPool
from poolgraph.utils.log_utils import address_bytes, to_address
from poolgraph.utils.types import PoolEvent, PoolVersion

log = logging.getLogger(__name__)


class PoolStore:
    """Append-only access to the ``uniswap_pools`` table.

    Rows are added to the session by :meth:`insert` and written on
    :meth:`commit`, which the orchestrator calls once per batch.
    """

    def __init__(self, session: Session):
        self.session = session

    def insert(self, event: PoolEvent) -> None:
        self.session.execute(
            insert(UniswapPool).values(
                token0=address_bytes(event.token0),
                token1=address_bytes(event.token1),
                type=event.version.value,
                address=address_bytes(event.pool_address),
            )
        )

    def insert_many(self, events: Iterable[PoolEvent]) -> int:
        count = 0
        for event in events:
            self.insert(event)
            count += 1
        return count

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    def records(self, version: PoolVersion | None = None) -> list[PoolEvent]:
        """All stored pools in insertion (row id) order."""
        stmt = select(
            UniswapPool.token0, UniswapPool.token1, UniswapPool.address, UniswapPool.type
        ).order_by(UniswapPool.id)
        if version is not None:
            stmt = stmt.where(UniswapPool.type == PoolVersion(version).value)

        return [
            PoolEvent(to_address(t0), to_address(t1), to_address(addr), PoolVersion(kind))
            for t0, t1, addr, kind in self.session.execute(stmt)
        ]

    def count(self) -> int:
        return self.session.execute(select(func.count(UniswapPool.id))).scalar_one()

    def log_extraction_metrics(
        self,
        block_range: str,
        log_count: int,
        pools_stored: int,
        duration_seconds: float,
    ) -> None:
        self.session.execute(
            insert(extraction_metrics_table).values(
                block_range=block_range,
                log_count=log_count,
                pools_stored=pools_stored,
                duration_seconds=round(duration_seconds, 2),
            )
        )
        self.session.commit()

    def close(self) -> None:
        self.session.close()
        log.info("[store] Database session closed")
