"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from bacon_ipsum.api import CapabilityChecker, bacon_router, health_router
from bacon_ipsum.core.config import Settings, get_settings
from bacon_ipsum.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from bacon_ipsum.core.logging import get_logger, setup_logging
from bacon_ipsum.services.bacon_api import BaconIpsumClient
from bacon_ipsum.services.cache import CacheStore, build_cache_store
from bacon_ipsum.services.generation import GenerationService, ParagraphFetcher

# Initialize logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Services are created in ``create_app``; shutdown closes the upstream
    HTTP client and the cache connection.
    """
    settings: Settings = app.state.settings

    logger.info(
        "Starting application",
        app_name=settings.app_name,
        version=settings.app_version,
        cache_backend=app.state.cache_store.backend,
        debug=settings.debug,
    )

    yield

    logger.info("Shutting down application")

    fetcher = app.state.fetcher
    if hasattr(fetcher, "close"):
        await fetcher.close()
        logger.info("Upstream connections closed")

    await app.state.cache_store.close()
    logger.info("Cache connections closed")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds standard security headers to every response."""

    def __init__(self, app: Any, hsts: bool = True) -> None:
        super().__init__(app)
        self.hsts = hsts

    async def dispatch(self, request: Any, call_next: Any) -> Any:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if self.hsts:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


def create_app(
    settings: Settings | None = None,
    cache_store: CacheStore | None = None,
    fetcher: ParagraphFetcher | None = None,
    capability_checker: CapabilityChecker | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the composition root: every service is built here once and
    shared through ``app.state``. Any of them can be passed in instead.
    """
    settings = settings or get_settings()
    cache_store = cache_store or build_cache_store(settings)
    fetcher = fetcher or BaconIpsumClient(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Bacon ipsum placeholder text generation for the editor block",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )

    app.state.settings = settings
    app.state.cache_store = cache_store
    app.state.fetcher = fetcher
    app.state.generation_service = GenerationService(cache_store, fetcher)
    app.state.capability_checker = capability_checker or CapabilityChecker(settings)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    app.add_middleware(SecurityHeadersMiddleware, hsts=not settings.debug)

    # Register exception handlers
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include routers
    app.include_router(health_router)
    app.include_router(bacon_router, prefix="/api/v1")

    return app


# Create application instance
app = create_app()
