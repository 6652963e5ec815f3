"""Core module exports."""

from bacon_ipsum.core.config import Settings, get_settings
from bacon_ipsum.core.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    InvalidResponse,
    UpstreamError,
    UpstreamStatusError,
    UpstreamUnreachable,
    ValidationError,
)
from bacon_ipsum.core.logging import get_logger, setup_logging
from bacon_ipsum.core.security import (
    CAPABILITY_EDIT_POSTS,
    CAPABILITY_MANAGE_OPTIONS,
    create_access_token,
    decode_access_token,
    token_capabilities,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Logging
    "get_logger",
    "setup_logging",
    # Security
    "CAPABILITY_EDIT_POSTS",
    "CAPABILITY_MANAGE_OPTIONS",
    "create_access_token",
    "decode_access_token",
    "token_capabilities",
    # Exceptions
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "InvalidResponse",
    "UpstreamError",
    "UpstreamStatusError",
    "UpstreamUnreachable",
    "ValidationError",
]
