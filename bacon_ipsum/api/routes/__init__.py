"""Routes module exports."""

from bacon_ipsum.api.routes.bacon import router as bacon_router
from bacon_ipsum.api.routes.health import router as health_router

__all__ = [
    "bacon_router",
    "health_router",
]
