# models/pools.py
from sqlalchemy import Column, Integer, LargeBinary, String, Index

from poolgraph.storage.models.base import Base


class UniswapPool(Base):
    __tablename__ = "uniswap_pools"

    # row id is the only key: re-ingesting a range appends duplicates
    id      = Column(Integer, primary_key=True, autoincrement=True)
    token0  = Column(LargeBinary(20), nullable=False)
    token1  = Column(LargeBinary(20), nullable=False)
    type    = Column(String(2),       nullable=False)      # "V2" / "V3"
    address = Column(LargeBinary(20), nullable=False)      # pool / pair contract

    __table_args__ = (
        Index("ix_uniswap_pools_type", "type"),
    )

    def __repr__(self) -> str:
        return f"<UniswapPool {self.type} 0x{self.address.hex()}>"
