"""Cache key derivation for generated text."""

from enum import Enum

from bacon_ipsum.services.cache.constants import KEY_PREFIX_BACON, LOREM_FLAG, NO_LOREM_FLAG


def make_key(prefix: str, *parts: str | int) -> str:
    """Create a cache key from prefix and parts."""
    return f"{prefix}:{':'.join(str(p) for p in parts)}"


def derive_key(meat_type: str, paragraph_count: int, start_with_lorem: bool) -> str:
    """Derive the cache key for one set of generation parameters.

    Every parameter is part of the key, so changing any one of them selects
    a different entry: ``derive_key("all-meat", 2, True)`` is
    ``"bacon:all-meat:2:lorem"``.
    """
    if isinstance(meat_type, Enum):
        meat_type = meat_type.value
    return make_key(
        KEY_PREFIX_BACON,
        meat_type,
        int(paragraph_count),
        LOREM_FLAG if start_with_lorem else NO_LOREM_FLAG,
    )


def namespace_pattern() -> str:
    """Glob pattern matching every key this service writes."""
    return f"{KEY_PREFIX_BACON}:*"
