"""Cache store selection."""

from bacon_ipsum.core.config import Settings
from bacon_ipsum.core.logging import get_logger
from bacon_ipsum.services.cache.base import CacheStore
from bacon_ipsum.services.cache.memory import MemoryCacheStore
from bacon_ipsum.services.cache.upstash import RedisCacheStore

logger = get_logger(__name__)


def build_cache_store(settings: Settings) -> CacheStore:
    """Create the cache store for the given settings.

    Uses Upstash Redis when credentials are configured and the client could
    be created, otherwise an in-process cache.
    """
    if settings.redis_available:
        store = RedisCacheStore(settings)
        if store.is_available:
            return store
        logger.warning("Falling back to memory cache")

    return MemoryCacheStore(max_entries=settings.memory_cache_max_entries)
