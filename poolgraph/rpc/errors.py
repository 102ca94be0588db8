class RpcError(Exception):
    """Base class for failures talking to a JSON-RPC endpoint."""


class RateLimited(RpcError):
    """HTTP 429 or a node error mentioning the rate limit. Never evicts."""


class EndpointFailure(RpcError):
    """Transport error, malformed response or non-rate node error."""


class ResourceExhausted(RpcError):
    """Every endpoint has been evicted; nothing left to query."""
