import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///uniswap_logs.db")

# Public BSC endpoints rotated round-robin; RPC_URLS="a,b,c" replaces the list.
DEFAULT_RPC_URLS = [
    "https://binance.llamarpc.com",
    "https://bsc-dataseed.bnbchain.org",
    "https://bsc-dataseed1.defibit.io",
    "https://bsc-dataseed1.ninicoin.io",
    "https://bsc-dataseed2.defibit.io",
    "https://bsc-dataseed3.defibit.io",
    "https://bsc-dataseed4.defibit.io",
    "https://bsc-dataseed2.ninicoin.io",
    "https://bsc-dataseed3.ninicoin.io",
    "https://bsc-dataseed4.ninicoin.io",
    "https://bsc-dataseed1.bnbchain.org",
    "https://bsc-dataseed2.bnbchain.org",
    "https://bsc-dataseed3.bnbchain.org",
    "https://bsc-dataseed4.bnbchain.org",
    "https://0.48.club",
    "https://bsc-pokt.nodies.app",
    "https://binance.nodereal.io",
    "https://bsc.rpc.blxrbdn.com",
    "https://bsc-rpc.publicnode.com",
    "https://bsc-mainnet.public.blastapi.io",
    "https://api.zan.top/bsc-mainnet",
    "https://bsc.blockrazor.xyz",
]


def _split_urls(raw: str | None) -> list[str]:
    if not raw:
        return list(DEFAULT_RPC_URLS)
    return [u.strip() for u in raw.split(",") if u.strip()]


RPC_URLS = _split_urls(os.getenv("RPC_URLS"))
RPC_TIMEOUT = float(os.getenv("RPC_TIMEOUT", "30"))

BLOCKS_PER_CALL = int(os.getenv("BLOCKS_PER_CALL", "40000"))
MAX_IN_FLIGHT = int(os.getenv("MAX_IN_FLIGHT", "30"))

CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/0")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/0")
