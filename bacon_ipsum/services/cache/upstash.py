"""Redis cache store using Upstash's REST client."""

import asyncio
import json
import time
from collections.abc import Sequence
from typing import Any

from upstash_redis.asyncio import Redis

from bacon_ipsum.core.config import Settings
from bacon_ipsum.core.logging import get_logger
from bacon_ipsum.services.cache.base import CacheEntry, CacheStore, Clock
from bacon_ipsum.services.cache.keys import namespace_pattern

logger = get_logger(__name__)


class RedisCacheStore(CacheStore):
    """Shared cache in Upstash Redis with graceful degradation.

    Entries are JSON strings written with a native ``EX`` expiry, so Redis
    evicts them on its own; the stored timestamp is still checked on read.
    """

    backend = "redis"

    def __init__(self, settings: Settings, clock: Clock = time.time) -> None:
        super().__init__(clock)
        self._client: Redis | None = None

        if settings.redis_available:
            try:
                self._client = Redis(
                    url=settings.upstash_redis_rest_url,
                    token=settings.upstash_redis_rest_token,
                )
                logger.info("Redis cache initialized")
            except Exception as e:
                logger.warning("Failed to initialize Redis cache", error=str(e))
                self._client = None
        else:
            logger.info("Redis cache not configured, caching disabled")

    @property
    def is_available(self) -> bool:
        """Check if cache is available."""
        return self._client is not None

    async def _get_raw(self, key: str) -> str | None:
        if not self.is_available:
            return None

        try:
            result = await self._client.get(key)  # type: ignore
            return result if isinstance(result, str) else None
        except Exception as e:
            logger.debug("Cache get failed", key=key, error=str(e))
            return None

    async def get(self, key: str) -> CacheEntry | None:
        raw = await self._get_raw(key)
        if raw is None:
            return None

        try:
            data: Any = json.loads(raw)
        except json.JSONDecodeError:
            logger.debug("Cache JSON decode failed", key=key)
            return None

        entry = CacheEntry.from_dict(data)
        if entry is None or entry.key != key:
            logger.debug("Cache entry malformed", key=key)
            return None
        return self._fresh(entry)

    async def set(self, key: str, paragraphs: Sequence[str], ttl: int) -> bool:
        if not self.is_available:
            return False

        entry = self._new_entry(key, paragraphs, ttl)
        try:
            await self._client.set(key, json.dumps(entry.to_dict()), ex=ttl)  # type: ignore
            return True
        except Exception as e:
            logger.debug("Cache set failed", key=key, error=str(e))
            return False

    async def delete(self, key: str) -> bool:
        if not self.is_available:
            return False

        try:
            await self._client.delete(key)  # type: ignore
            return True
        except Exception as e:
            logger.debug("Cache delete failed", key=key, error=str(e))
            return False

    async def flush_all(self) -> int:
        """Delete every ``bacon:*`` key.

        Upstash's REST API has no SCAN cursor support, so KEYS is used; the
        namespace holds at most 20 keys (two types x ten counts x lorem flag).
        """
        if not self.is_available:
            return 0

        pattern = namespace_pattern()
        try:
            keys = await self._client.keys(pattern)  # type: ignore
            if keys:
                await self._client.delete(*keys)  # type: ignore
                return len(keys)
            return 0
        except Exception as e:
            logger.debug("Cache flush failed", pattern=pattern, error=str(e))
            return 0

    async def check_health(self, timeout: float = 5.0) -> bool:
        """Check Redis connectivity with timeout."""
        if not self.is_available:
            return False

        try:
            result = await asyncio.wait_for(
                self._client.ping(),  # type: ignore
                timeout=timeout,
            )
            return bool(result)
        except asyncio.TimeoutError:
            logger.error("Redis health check timed out", timeout=timeout)
            return False
        except Exception as e:
            logger.error("Redis health check failed", error=str(e))
            return False

    async def close(self) -> None:
        if self._client is not None:
            try:
                await self._client.close()
            except Exception as e:
                logger.debug("Redis client close failed", error=str(e))
