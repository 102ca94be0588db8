from web3 import Web3

from poolgraph.utils.types import PoolVersion

# Factory deployments the events come from (BSC). Informational only, the
# log queries filter on topic alone.
UNISWAP_V2_FACTORY = "0x8909Dc15e40173Ff4699343b6eB8132c65e18eC6"
UNISWAP_V3_FACTORY = "0xdB1d10011AD0Ff90774D0C6Bb92e5C5c8b4461F7"

# PairCreated(address indexed token0, address indexed token1, address pair, uint256)
PAIR_CREATED_TOPIC = Web3.to_hex(
    Web3.keccak(text="PairCreated(address,address,address,uint256)")
)
# PoolCreated(address indexed token0, address indexed token1, uint24 indexed fee,
#             int24 tickSpacing, address pool)
POOL_CREATED_TOPIC = Web3.to_hex(
    Web3.keccak(text="PoolCreated(address,address,uint24,int24,address)")
)

TOPIC_VERSIONS = {
    PAIR_CREATED_TOPIC: PoolVersion.V2,
    POOL_CREATED_TOPIC: PoolVersion.V3,
}
TRACKED_TOPICS = (PAIR_CREATED_TOPIC, POOL_CREATED_TOPIC)

# Byte slice of the event data holding the pool address (first ABI word).
POOL_ADDRESS_SLICE = slice(12, 32)
ADDRESS_BYTES = 20

MAX_PATH_LENGTH = 3  # nodes, i.e. at most two hops

MAX_RETRIES = 1
RATE_LIMIT_STEP_SECS = 0.2
