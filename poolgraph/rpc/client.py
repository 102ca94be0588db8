import asyncio
import itertools
import logging

import backoff
import httpx

from poolgraph.config.settings import RPC_TIMEOUT
from poolgraph.rpc.endpoint_pool import EndpointPool
from poolgraph.rpc.errors import EndpointFailure, RateLimited, ResourceExhausted
from poolgraph.utils.constants import MAX_RETRIES, RATE_LIMIT_STEP_SECS

log = logging.getLogger(__name__)


class RpcClient:
    """JSON-RPC client that spreads requests over an :class:`EndpointPool`.

    Usage::

        async with RpcClient(EndpointPool(urls)) as client:
            head = await client.get_latest_block()
            logs = await client.fetch_logs(0, 39_999, PAIR_CREATED_TOPIC)
    """

    def __init__(
        self,
        pool: EndpointPool,
        http: httpx.AsyncClient | None = None,
        timeout: float = RPC_TIMEOUT,
        max_retries: int = MAX_RETRIES,
        rate_limit_step: float = RATE_LIMIT_STEP_SECS,
    ):
        self.pool = pool
        self.max_retries = max_retries
        self.rate_limit_step = rate_limit_step
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=timeout)
        self._ids = itertools.count(1)

    async def __aenter__(self) -> "RpcClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def _call(self, rpc_url: str, method: str, params: list):
        """One request against one endpoint. Returns ``result`` or raises."""
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": next(self._ids),
        }
        try:
            resp = await self._http.post(rpc_url, json=payload)
        except httpx.HTTPError as e:
            raise EndpointFailure(f"{rpc_url}: {e!r}") from e

        if resp.status_code == 429:
            raise RateLimited(f"{rpc_url}: HTTP 429")

        try:
            body = resp.json()
        except ValueError as e:
            raise EndpointFailure(
                f"{rpc_url}: non-JSON response (HTTP {resp.status_code})"
            ) from e

        if not isinstance(body, dict):
            raise EndpointFailure(f"{rpc_url}: unexpected response {body!r:.200}")

        error = body.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            if isinstance(message, str) and "rate" in message.lower():
                raise RateLimited(f"{rpc_url}: {message}")
            raise EndpointFailure(f"{rpc_url}: rpc_error {error}")

        if resp.status_code >= 400 or "result" not in body:
            raise EndpointFailure(f"{rpc_url}: HTTP {resp.status_code} without result")
        return body["result"]

    async def fetch_logs(self, from_block: int, to_block: int, topic: str) -> list[dict]:
        """``eth_getLogs`` for one topic over an inclusive block range.

        Two attempts in total, shared by both failure kinds. A rate-limited
        range that is still limited on the last attempt comes back empty.
        Raises ResourceExhausted once the pool has no endpoints left.
        """
        params = [{
            "fromBlock": hex(from_block),
            "toBlock": hex(to_block),
            "topics": [topic],
        }]
        attempt = 0
        while attempt <= self.max_retries:
            rpc_url = self.pool.next()
            try:
                result = await self._call(rpc_url, "eth_getLogs", params)
                if not isinstance(result, list):
                    raise EndpointFailure(f"{rpc_url}: eth_getLogs result is not a list")
                return result
            except RateLimited as e:
                log.info(f"Rate limited on {from_block}-{to_block} ({e})")
                attempt += 1
                if attempt <= self.max_retries:
                    await asyncio.sleep(self.rate_limit_step * attempt)
            except EndpointFailure as e:
                log.warning(f"Endpoint failure on {from_block}-{to_block}: {e}")
                self.pool.evict(rpc_url)
                if self.pool.is_empty:
                    raise ResourceExhausted("No more RPC nodes available!") from e
                attempt += 1

        log.warning(
            f"--[!] Giving up on blocks {from_block}-{to_block} topic {topic[:10]}…, "
            "range skipped"
        )
        return []

    @backoff.on_exception(backoff.expo, EndpointFailure, max_tries=3, jitter=None)
    async def get_latest_block(self) -> int:
        """Current chain head via ``eth_blockNumber``; failing endpoints are evicted."""
        rpc_url = self.pool.next()
        try:
            result = await self._call(rpc_url, "eth_blockNumber", [])
            try:
                return int(result, 16)
            except (TypeError, ValueError) as e:
                raise EndpointFailure(f"{rpc_url}: bad block number {result!r}") from e
        except RateLimited as e:
            # retried through backoff on the next endpoint, no eviction
            raise EndpointFailure(str(e)) from e
        except EndpointFailure:
            self.pool.evict(rpc_url)
            raise
