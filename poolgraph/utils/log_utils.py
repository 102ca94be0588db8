# poolgraph/utils/log_utils.py
from hexbytes import HexBytes


def _hex(value) -> str:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    value = str(value).lower()
    return value if value.startswith("0x") else "0x" + value


def sanitize_log(log: dict) -> dict:
    """Normalise a raw eth_getLogs entry to lower-case 0x-prefixed hex strings."""
    out = dict(log)
    out["topics"] = [_hex(t) for t in log.get("topics") or []]
    if "data" in log:
        out["data"] = _hex(log["data"])
    if "address" in log:
        out["address"] = _hex(log["address"])
    return out


def to_address(raw: bytes) -> str:
    return "0x" + bytes(raw).hex()


def normalize_address(address: str) -> str:
    return to_address(HexBytes(address))


def address_bytes(address: str) -> bytes:
    return bytes(HexBytes(address))
