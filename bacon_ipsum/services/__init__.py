"""Services module exports."""

from bacon_ipsum.services.bacon_api import BaconIpsumClient
from bacon_ipsum.services.cache import CacheStore, build_cache_store
from bacon_ipsum.services.generation import (
    GenerationRequest,
    GenerationResult,
    GenerationService,
    MeatType,
)
from bacon_ipsum.services.rendering import BlockContent, render_block, to_html

__all__ = [
    # Cache
    "CacheStore",
    "build_cache_store",
    # Upstream
    "BaconIpsumClient",
    # Generation
    "GenerationRequest",
    "GenerationResult",
    "GenerationService",
    "MeatType",
    # Rendering
    "BlockContent",
    "render_block",
    "to_html",
]
