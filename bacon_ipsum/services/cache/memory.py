"""In-process cache store backed by cachetools."""

import threading
import time
from collections.abc import Sequence

from cachetools import TLRUCache

from bacon_ipsum.core.logging import get_logger
from bacon_ipsum.services.cache.base import CacheEntry, CacheStore, Clock

logger = get_logger(__name__)


def _entry_expiry(key: str, entry: CacheEntry, now: float) -> float:
    return now + entry.ttl


class MemoryCacheStore(CacheStore):
    """Per-process expiring cache, used when Redis is not configured.

    Entries carry their own TTL; cachetools evicts them once the clock
    passes ``stored_at + ttl``. A lock guards the cache because cachetools
    containers are not thread-safe.
    """

    backend = "memory"

    def __init__(self, max_entries: int = 256, clock: Clock = time.time) -> None:
        super().__init__(clock)
        self._cache: TLRUCache[str, CacheEntry] = TLRUCache(
            maxsize=max_entries,
            ttu=_entry_expiry,
            timer=clock,
        )
        self._lock = threading.Lock()
        logger.info("Memory cache initialized", max_entries=max_entries)

    async def get(self, key: str) -> CacheEntry | None:
        with self._lock:
            entry = self._cache.get(key)
        return self._fresh(entry)

    async def set(self, key: str, paragraphs: Sequence[str], ttl: int) -> bool:
        entry = self._new_entry(key, paragraphs, ttl)
        with self._lock:
            self._cache[key] = entry
        return True

    async def delete(self, key: str) -> bool:
        with self._lock:
            return self._cache.pop(key, None) is not None

    async def flush_all(self) -> int:
        with self._lock:
            self._cache.expire()
            count = len(self._cache)
            self._cache.clear()
        return count
