"""API module exports."""

from bacon_ipsum.api.deps import CapabilityChecker, require_capability
from bacon_ipsum.api.routes import bacon_router, health_router

__all__ = [
    # Routers
    "bacon_router",
    "health_router",
    # Dependencies
    "CapabilityChecker",
    "require_capability",
]
