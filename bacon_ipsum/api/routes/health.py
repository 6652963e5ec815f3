"""Health check and monitoring endpoints."""

import asyncio
import platform
import sys
import time
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from bacon_ipsum.api.deps import AppSettings, Cache
from bacon_ipsum.api.schemas import HealthResponse, ServiceHealth
from bacon_ipsum.services.cache import CacheStore

router = APIRouter(tags=["Health"])

# Track server start time for uptime calculation
_server_start_time = datetime.now(timezone.utc)


def _get_system_info() -> dict[str, Any]:
    """Get system information for health endpoints."""
    return {
        "hostname": platform.node(),
        "platform": platform.system(),
        "platform_version": platform.version(),
        "python_version": sys.version.split()[0],
        "architecture": platform.machine(),
    }


def _get_uptime() -> dict[str, Any]:
    """Calculate server uptime."""
    now = datetime.now(timezone.utc)
    delta = now - _server_start_time

    days = delta.days
    hours, remainder = divmod(delta.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    return {
        "started_at": _server_start_time.isoformat(),
        "uptime_seconds": int(delta.total_seconds()),
        "uptime_human": f"{days}d {hours}h {minutes}m {seconds}s",
    }


async def _timed_cache_check(
    cache: CacheStore,
    timeout: float = 5.0,
) -> tuple[bool, float, str | None]:
    """Run the cache health check and measure its latency.

    Returns:
        Tuple of (healthy, latency_ms, error_message)
    """
    start = time.perf_counter()
    try:
        result = await asyncio.wait_for(cache.check_health(), timeout=timeout)
        return (result, (time.perf_counter() - start) * 1000, None)
    except asyncio.TimeoutError:
        latency = (time.perf_counter() - start) * 1000
        return (False, latency, f"Health check timed out after {timeout}s")
    except Exception as e:
        return (False, (time.perf_counter() - start) * 1000, str(e))


@router.get(
    "/",
    summary="Root endpoint",
    response_description="API information and basic health status",
)
async def root(settings: AppSettings) -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "healthy",
        "environment": settings.environment,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "documentation": "/docs",
    }


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Comprehensive health check",
    response_description="Detailed health status of all services",
)
async def health_check(settings: AppSettings, cache: Cache) -> HealthResponse:
    """
    Health check endpoint for monitoring.

    The cache is the only stateful dependency. A failing cache leaves the
    service usable (every request goes upstream), so it reports
    `degraded` rather than `unhealthy`.
    """
    healthy, latency, error = await _timed_cache_check(cache)

    details: dict[str, Any] = {"type": cache.backend}
    if error:
        details["error"] = error

    return HealthResponse(
        status="healthy" if healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=settings.app_version,
        services={
            "cache": ServiceHealth(
                status="healthy" if healthy else "degraded",
                latency_ms=round(latency, 2),
                details=details,
            ),
        },
    )


@router.get(
    "/health/live",
    summary="Liveness probe",
    response_description="Simple liveness check for orchestrators",
)
async def liveness() -> dict[str, str]:
    """Returns 200 if the service process is running."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get(
    "/health/ready",
    summary="Readiness probe",
    response_description="Readiness check for load balancers",
)
async def readiness(cache: Cache) -> JSONResponse:
    """
    Readiness probe endpoint.

    The service can answer requests without its cache, so readiness only
    reports the cache state alongside a 200.
    """
    healthy, _, _ = await _timed_cache_check(cache)

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready",
            "cache": "healthy" if healthy else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


@router.get(
    "/health/info",
    summary="System information",
    response_description="Detailed system and runtime information",
)
async def system_info(settings: AppSettings) -> dict[str, Any]:
    """Application metadata, system information and uptime."""
    return {
        "application": {
            "name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
        },
        "upstream": {"url": settings.bacon_ipsum_api_url},
        "system": _get_system_info(),
        "uptime": _get_uptime(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get(
    "/health/cache",
    summary="Cache health check",
    response_description="Detailed cache connectivity status",
)
async def cache_health(cache: Cache) -> JSONResponse:
    """Check cache connectivity and response time."""
    healthy, latency, error = await _timed_cache_check(cache)

    response_data: dict[str, Any] = {
        "service": "cache",
        "type": cache.backend,
        "status": "healthy" if healthy else "degraded",
        "latency_ms": round(latency, 2),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    if error:
        response_data["error"] = error

    # Cache is optional, degraded is still a 200
    return JSONResponse(status_code=status.HTTP_200_OK, content=response_data)
