"""Expiring cache for generated bacon ipsum paragraphs.

Two backends share the CacheStore interface:
- Upstash Redis (REST) for deployments with more than one worker
- cachetools TLRU cache for single-process and test use

Both degrade gracefully: failures read as a miss and writes are best-effort.
"""

from bacon_ipsum.services.cache.base import CacheEntry, CacheStore
from bacon_ipsum.services.cache.constants import KEY_PREFIX_BACON, TTL_GENERATED_TEXT
from bacon_ipsum.services.cache.keys import derive_key, make_key
from bacon_ipsum.services.cache.memory import MemoryCacheStore
from bacon_ipsum.services.cache.service import build_cache_store
from bacon_ipsum.services.cache.upstash import RedisCacheStore

__all__ = [
    # Constants
    "KEY_PREFIX_BACON",
    "TTL_GENERATED_TEXT",
    # Keys
    "derive_key",
    "make_key",
    # Stores
    "CacheEntry",
    "CacheStore",
    "MemoryCacheStore",
    "RedisCacheStore",
    "build_cache_store",
]
