"""Generation orchestrator - cache-aside access to the bacon ipsum API.

Flow for one request:
1. Derive the cache key from (type, paragraphs, start-with-lorem)
2. Return the cached paragraphs when an unexpired entry exists
3. Otherwise fetch from the API; failures propagate unchanged
4. Store the validated paragraphs for one hour and return them

Concurrent misses for the same key may each reach the API; there is no
single-flight coalescing.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from bacon_ipsum.core.exceptions import ValidationError
from bacon_ipsum.core.logging import get_logger
from bacon_ipsum.services.cache import TTL_GENERATED_TEXT, CacheStore, derive_key

logger = get_logger(__name__)

MIN_PARAGRAPHS = 1
MAX_PARAGRAPHS = 10


class MeatType(str, Enum):
    """Text styles offered by the API."""

    ALL_MEAT = "all-meat"
    MEAT_AND_FILLER = "meat-and-filler"


@dataclass(frozen=True)
class GenerationRequest:
    """Parameters for one generation action."""

    type: MeatType
    paragraph_count: int
    start_with_lorem: bool

    @classmethod
    def from_params(
        cls,
        meat_type: str,
        paragraph_count: int,
        start_with_lorem: bool,
    ) -> "GenerationRequest":
        """Build a request from untrusted values.

        Raises:
            ValidationError: If any value is outside the accepted range or type
        """
        try:
            parsed_type = MeatType(meat_type)
        except ValueError:
            raise ValidationError(
                "Invalid meat type",
                {"type": meat_type, "allowed": [m.value for m in MeatType]},
            )

        if (
            isinstance(paragraph_count, bool)
            or not isinstance(paragraph_count, int)
            or not MIN_PARAGRAPHS <= paragraph_count <= MAX_PARAGRAPHS
        ):
            raise ValidationError(
                f"Paragraph count must be an integer between {MIN_PARAGRAPHS} and {MAX_PARAGRAPHS}",
                {"paras": paragraph_count},
            )

        if not isinstance(start_with_lorem, bool):
            raise ValidationError(
                "start_with_lorem must be a boolean",
                {"start_with_lorem": start_with_lorem},
            )

        return cls(parsed_type, paragraph_count, start_with_lorem)

    @property
    def cache_key(self) -> str:
        return derive_key(self.type.value, self.paragraph_count, self.start_with_lorem)


@dataclass(frozen=True)
class GenerationResult:
    """Paragraphs for a request and whether they came from the cache."""

    paragraphs: list[str]
    cached: bool


class ParagraphFetcher(Protocol):
    async def fetch_paragraphs(
        self,
        meat_type: str,
        paragraph_count: int,
        start_with_lorem: bool,
    ) -> list[str]: ...


class GenerationService:
    """Serves generation requests from the cache or the upstream API."""

    def __init__(
        self,
        cache_store: CacheStore,
        fetcher: ParagraphFetcher,
        ttl: int = TTL_GENERATED_TEXT,
    ) -> None:
        self.cache_store = cache_store
        self.fetcher = fetcher
        self.ttl = ttl

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Return paragraphs for the request.

        Raises:
            UpstreamUnreachable, UpstreamStatusError, InvalidResponse: From
                the fetcher on a cache miss. Nothing is cached in that case.
        """
        key = request.cache_key

        entry = await self.cache_store.get(key)
        if entry is not None:
            logger.debug("Generation cache hit", key=key)
            return GenerationResult(paragraphs=list(entry.paragraphs), cached=True)

        logger.debug("Generation cache miss", key=key)
        start_time = time.monotonic()
        paragraphs = await self.fetcher.fetch_paragraphs(
            request.type.value,
            request.paragraph_count,
            request.start_with_lorem,
        )
        logger.info(
            "Fetched bacon ipsum",
            key=key,
            paragraphs=len(paragraphs),
            latency_ms=round((time.monotonic() - start_time) * 1000, 2),
        )

        if not await self.cache_store.set(key, paragraphs, self.ttl):
            logger.debug("Generation cache write skipped", key=key)

        return GenerationResult(paragraphs=paragraphs, cached=False)

    async def invalidate(self, request: GenerationRequest) -> bool:
        """Drop the cached paragraphs for one request."""
        return await self.cache_store.delete(request.cache_key)

    async def flush_cache(self) -> int:
        """Drop every cached generation."""
        count = await self.cache_store.flush_all()
        logger.info("Generation cache flushed", deleted=count)
        return count
