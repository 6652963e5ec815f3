"""API dependencies for FastAPI routes.

Services are built once by ``create_app()`` and stored on ``app.state``;
the dependencies here only look them up, so tests can swap any of them
through ``app.dependency_overrides`` or by passing their own instances.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bacon_ipsum.core.config import Settings
from bacon_ipsum.core.exceptions import AuthenticationError, AuthorizationError
from bacon_ipsum.core.logging import get_logger
from bacon_ipsum.core.security import (
    CAPABILITY_EDIT_POSTS,
    CAPABILITY_MANAGE_OPTIONS,
    decode_access_token,
    token_capabilities,
)
from bacon_ipsum.services.cache import CacheStore
from bacon_ipsum.services.generation import GenerationService

logger = get_logger(__name__)

# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


class CapabilityChecker:
    """Checks that a host-issued token grants a capability.

    With ``auth_enabled`` off every caller holds every capability.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    @property
    def enabled(self) -> bool:
        return self._settings.auth_enabled

    def check(self, token: str | None, capability: str) -> None:
        """Raise unless the token grants the capability.

        Raises:
            AuthenticationError: Missing or invalid token
            AuthorizationError: Valid token without the capability
        """
        if not self.enabled:
            return

        if not token:
            raise AuthenticationError("Authentication required")

        payload = decode_access_token(token, self._settings)
        if not payload:
            raise AuthenticationError("Invalid or expired token")

        if capability not in token_capabilities(payload):
            logger.info("Capability denied", capability=capability, sub=payload.get("sub"))
            raise AuthorizationError(f"Missing capability: {capability}")


def get_settings_from_app(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[no-any-return]


def get_cache_store(request: Request) -> CacheStore:
    return request.app.state.cache_store  # type: ignore[no-any-return]


def get_generation_service(request: Request) -> GenerationService:
    return request.app.state.generation_service  # type: ignore[no-any-return]


def get_capability_checker(request: Request) -> CapabilityChecker:
    return request.app.state.capability_checker  # type: ignore[no-any-return]


def require_capability(capability: str) -> Callable[..., Awaitable[None]]:
    """Build a dependency enforcing one capability."""

    async def _check(
        credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
        checker: Annotated[CapabilityChecker, Depends(get_capability_checker)],
    ) -> None:
        checker.check(credentials.credentials if credentials else None, capability)

    return _check


# Type aliases for cleaner route signatures
Generator = Annotated[GenerationService, Depends(get_generation_service)]
Cache = Annotated[CacheStore, Depends(get_cache_store)]
AppSettings = Annotated[Settings, Depends(get_settings_from_app)]
CanEditPosts = Depends(require_capability(CAPABILITY_EDIT_POSTS))
CanManageOptions = Depends(require_capability(CAPABILITY_MANAGE_OPTIONS))
