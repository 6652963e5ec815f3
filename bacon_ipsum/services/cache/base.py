"""Cache entry model and the store interface shared by all backends."""

import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from bacon_ipsum.core.logging import get_logger

logger = get_logger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry:
    """Paragraphs stored for one cache key."""

    key: str
    paragraphs: tuple[str, ...]
    stored_at: float
    ttl: int

    @property
    def expires_at(self) -> float:
        return self.stored_at + self.ttl

    def is_expired(self, now: float) -> bool:
        """An entry is usable strictly before its expiry instant."""
        return now >= self.expires_at

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "paragraphs": list(self.paragraphs),
            "stored_at": self.stored_at,
            "ttl": self.ttl,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "CacheEntry | None":
        """Rebuild an entry from its serialized form, None if malformed."""
        if not isinstance(data, dict):
            return None
        paragraphs = data.get("paragraphs")
        if (
            not isinstance(paragraphs, list)
            or not paragraphs
            or not all(isinstance(p, str) for p in paragraphs)
        ):
            return None
        try:
            return cls(
                key=str(data["key"]),
                paragraphs=tuple(paragraphs),
                stored_at=float(data["stored_at"]),
                ttl=int(data["ttl"]),
            )
        except (KeyError, TypeError, ValueError):
            return None


class CacheStore(ABC):
    """Expiring key-value store for generated paragraphs.

    Implementations degrade gracefully: a failing backend reads as a miss
    and writes report ``False`` instead of raising.
    """

    backend: str = "base"

    def __init__(self, clock: Clock = time.time) -> None:
        self._clock = clock

    @property
    def is_available(self) -> bool:
        """Check if the backing store can be used."""
        return True

    def _fresh(self, entry: CacheEntry | None) -> CacheEntry | None:
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            logger.debug("Cache entry expired", key=entry.key)
            return None
        return entry

    def _new_entry(self, key: str, paragraphs: Sequence[str], ttl: int) -> CacheEntry:
        return CacheEntry(
            key=key,
            paragraphs=tuple(paragraphs),
            stored_at=self._clock(),
            ttl=ttl,
        )

    @abstractmethod
    async def get(self, key: str) -> CacheEntry | None:
        """Return the unexpired entry for key, or None on a miss."""
        ...

    @abstractmethod
    async def set(self, key: str, paragraphs: Sequence[str], ttl: int) -> bool:
        """Store paragraphs under key, replacing any existing entry."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove the entry for key."""
        ...

    @abstractmethod
    async def flush_all(self) -> int:
        """Remove every entry written by this service, returning the count."""
        ...

    async def check_health(self, timeout: float = 5.0) -> bool:
        """Check backend connectivity."""
        return self.is_available

    async def close(self) -> None:
        """Release backend resources."""
        return None
