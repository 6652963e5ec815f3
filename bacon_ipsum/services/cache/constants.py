"""Cache TTL and key prefix constants."""

# Cache TTL constants (in seconds)
TTL_GENERATED_TEXT = 3600  # 1 hour - generated paragraphs per parameter set

# Cache key prefixes - using Redis naming conventions
KEY_PREFIX_BACON = "bacon"  # bacon:{type}:{paras}:{lorem|no_lorem}

LOREM_FLAG = "lorem"
NO_LOREM_FLAG = "no_lorem"
