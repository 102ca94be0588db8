# poolgraph/ingestion/decoder.py
# --------------------------------------------------------------
# Decode factory PairCreated (V2) / PoolCreated (V3) logs
# --------------------------------------------------------------
import logging
from typing import Iterable

from hexbytes import HexBytes

from poolgraph.utils.constants import ADDRESS_BYTES, POOL_ADDRESS_SLICE, TOPIC_VERSIONS
from poolgraph.utils.log_utils import sanitize_log, to_address
from poolgraph.utils.types import PoolEvent

logger = logging.getLogger(__name__)


class DecodeError(ValueError):
    """A log that cannot be turned into a PoolEvent."""


def _topic_address(topic) -> str:
    raw = HexBytes(topic)
    if len(raw) != 32:
        raise DecodeError(f"topic is {len(raw)} bytes, expected 32")
    # addresses are right-aligned in the 32-byte word
    return to_address(raw[-ADDRESS_BYTES:])


def decode(log: dict) -> PoolEvent:
    """Raw eth_getLogs entry → PoolEvent. Raises DecodeError for anything else."""
    if not isinstance(log, dict):
        raise DecodeError(f"log entry is {type(log).__name__}, expected an object")
    topics = log.get("topics")
    if not isinstance(topics, list) or not topics:
        raise DecodeError("log has no topics")
    log = sanitize_log(log)
    topics = log["topics"]

    version = TOPIC_VERSIONS.get(topics[0])
    if version is None:
        raise DecodeError(f"Unknown event topic: {topics[0]}")
    if len(topics) < 3:
        raise DecodeError(f"{version.value} log has {len(topics)} topics, expected >= 3")

    try:
        data = HexBytes(log.get("data") or b"")
    except ValueError as e:
        raise DecodeError(f"malformed data field: {e}") from e
    pool = data[POOL_ADDRESS_SLICE]
    if len(pool) != ADDRESS_BYTES:
        raise DecodeError(f"data is {len(data)} bytes, too short for a pool address")

    try:
        token0 = _topic_address(topics[1])
        token1 = _topic_address(topics[2])
    except ValueError as e:
        raise DecodeError(str(e)) from e

    return PoolEvent(token0, token1, to_address(pool), version)


def decode_logs(logs: Iterable[dict]) -> tuple[list[PoolEvent], int]:
    """Decode a batch, skipping (and counting) anything that does not decode."""
    out: list[PoolEvent] = []
    rejected = 0
    for log in logs:
        try:
            out.append(decode(log))
        except DecodeError as e:
            rejected += 1
            tx = log.get("transactionHash", "?") if isinstance(log, dict) else "?"
            logger.warning(f"Skipping log {tx}: {e}")

    logger.debug("decoded %d pool events, %d rejected", len(out), rejected)
    return out, rejected
