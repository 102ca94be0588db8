from enum import Enum
from typing import NamedTuple


class PoolVersion(str, Enum):
    V2 = "V2"
    V3 = "V3"


class PoolEvent(NamedTuple):
    token0: str
    token1: str
    pool_address: str
    version: PoolVersion
