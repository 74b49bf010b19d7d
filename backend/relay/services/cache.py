from __future__ import annotations

import threading
import time
from typing import Callable

from cachetools import TTLCache

from relay.schemas.share import UpstreamResponse


class ResponseCache:
    """Upstream responses keyed by the exact request URL.

    Only successful responses are stored. Expired entries are dropped lazily by
    the underlying TTLCache when it is read or written.
    """

    def __init__(
        self,
        ttl_seconds: float = 60,
        maxsize: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._entries: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl_seconds, timer=timer)
        self._lock = threading.Lock()

    def get(self, url: str) -> UpstreamResponse | None:
        with self._lock:
            return self._entries.get(url)

    def put(self, url: str, response: UpstreamResponse) -> bool:
        if not response.ok:
            return False
        with self._lock:
            self._entries[url] = response
        return True

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            self._entries.expire()
            return len(self._entries)
