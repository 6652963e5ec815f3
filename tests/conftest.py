"""Test configuration and fixtures.

Provides isolated test fixtures for:
- Settings with auth enabled and a fake upstream URL
- A controllable clock and in-memory cache store
- A stub upstream fetcher that records calls
- HTTP client wired through create_app()
- Capability token headers
"""

from collections.abc import AsyncGenerator
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from bacon_ipsum.core.config import Settings
from bacon_ipsum.core.security import (
    CAPABILITY_EDIT_POSTS,
    CAPABILITY_MANAGE_OPTIONS,
    create_access_token,
)
from bacon_ipsum.main import create_app
from bacon_ipsum.services.cache import CacheStore, MemoryCacheStore

TEST_SECRET = "test-secret-key-for-testing-only-min-32-chars"
SAMPLE_PARAGRAPHS = ["Bacon ipsum one.", "Bacon ipsum two."]


# =============================================================================
# Helpers
# =============================================================================

class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubFetcher:
    """Upstream stand-in returning canned paragraphs or raising."""

    def __init__(self, paragraphs: list[str] | None = None) -> None:
        self.paragraphs = list(paragraphs or SAMPLE_PARAGRAPHS)
        self.error: Exception | None = None
        self.calls: list[tuple[str, int, bool]] = []
        self.close = AsyncMock()

    async def fetch_paragraphs(
        self, meat_type: str, paragraph_count: int, start_with_lorem: bool
    ) -> list[str]:
        self.calls.append((meat_type, paragraph_count, start_with_lorem))
        if self.error is not None:
            raise self.error
        return list(self.paragraphs)


# =============================================================================
# Settings & Services
# =============================================================================

@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with safe defaults."""
    return Settings(
        jwt_secret_key=TEST_SECRET,
        auth_enabled=True,
        debug=True,
        upstash_redis_rest_url="",
        upstash_redis_rest_token="",
        bacon_ipsum_api_url="https://baconipsum.test/api/",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store(clock: FakeClock) -> MemoryCacheStore:
    return MemoryCacheStore(max_entries=32, clock=clock)


@pytest.fixture
def stub_fetcher() -> StubFetcher:
    return StubFetcher()


@pytest.fixture
def mock_cache_store() -> MagicMock:
    """Cache store mock that always misses."""
    mock = MagicMock(spec=CacheStore)
    mock.backend = "mock"
    mock.is_available = True
    mock.get = AsyncMock(return_value=None)
    mock.set = AsyncMock(return_value=True)
    mock.delete = AsyncMock(return_value=True)
    mock.flush_all = AsyncMock(return_value=0)
    mock.check_health = AsyncMock(return_value=True)
    mock.close = AsyncMock()
    return mock


# =============================================================================
# HTTP Client Fixtures
# =============================================================================

@pytest.fixture
def test_app(test_settings: Settings, memory_store: MemoryCacheStore, stub_fetcher: StubFetcher):
    return create_app(
        settings=test_settings,
        cache_store=memory_store,
        fetcher=stub_fetcher,
    )


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client for the wired application."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac


# =============================================================================
# Authentication Fixtures
# =============================================================================

def make_token(
    settings: Settings,
    capabilities: list[str],
    expires_delta: timedelta | None = None,
) -> str:
    return create_access_token(
        {"sub": "42", "capabilities": capabilities},
        expires_delta=expires_delta,
        settings=settings,
    )


@pytest.fixture
def auth_headers(test_settings: Settings) -> dict[str, str]:
    """Headers for an author who may edit posts."""
    token = make_token(test_settings, [CAPABILITY_EDIT_POSTS])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(test_settings: Settings) -> dict[str, str]:
    """Headers for an administrator."""
    token = make_token(test_settings, [CAPABILITY_EDIT_POSTS, CAPABILITY_MANAGE_OPTIONS])
    return {"Authorization": f"Bearer {token}"}
