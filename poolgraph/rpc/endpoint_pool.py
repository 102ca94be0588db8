import logging
import threading
from typing import Iterable

from poolgraph.rpc.errors import ResourceExhausted

log = logging.getLogger(__name__)


class EndpointPool:
    """Round-robin set of RPC URLs with permanent eviction.

    Shared by every concurrent fetch, so rotation and eviction both happen
    under one lock. The active set only ever shrinks.
    """

    def __init__(self, urls: Iterable[str]):
        self._active: list[str] = list(dict.fromkeys(urls))
        self._evicted: set[str] = set()
        self._cursor = 0
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            if not self._active:
                raise ResourceExhausted("No more RPC nodes available!")
            url = self._active[self._cursor % len(self._active)]
            self._cursor = (self._cursor + 1) % len(self._active)
            return url

    def evict(self, url: str) -> None:
        with self._lock:
            if url not in self._active:
                return
            idx = self._active.index(url)
            self._active.pop(idx)
            self._evicted.add(url)
            # keep pointing at the endpoint that would have come next
            if idx < self._cursor:
                self._cursor -= 1
            if self._active:
                self._cursor %= len(self._active)
            else:
                self._cursor = 0
            remaining = len(self._active)
        log.warning(f"Removed failing RPC: {url} ({remaining} remaining)")

    @property
    def active(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._active)

    @property
    def evicted(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._evicted)

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._active)

    def __repr__(self) -> str:
        return f"<EndpointPool active={len(self)} evicted={len(self.evicted)}>"
