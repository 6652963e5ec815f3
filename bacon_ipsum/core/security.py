"""Capability token utilities.

The host environment (the CMS running the editor) issues short-lived JWTs
whose ``capabilities`` claim lists what the bearer may do. This service only
verifies them; python-jose handles signing and validation.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from bacon_ipsum.core.config import Settings, get_settings

CAPABILITY_EDIT_POSTS = "edit_posts"
CAPABILITY_MANAGE_OPTIONS = "manage_options"


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
    settings: Settings | None = None,
) -> str:
    """Create a signed capability token.

    Args:
        data: Payload data to encode in the token
        expires_delta: Optional custom expiration time (defaults to one hour)
        settings: Settings providing the signing key

    Returns:
        Encoded JWT token string
    """
    settings = settings or get_settings()
    to_encode = data.copy()
    now = datetime.now(timezone.utc)

    to_encode.update({
        "exp": now + (expires_delta or timedelta(hours=1)),
        "iat": now,
    })

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str, settings: Settings | None = None) -> dict[str, Any] | None:
    """Decode and validate a capability token.

    Returns:
        Decoded payload if valid, None otherwise
    """
    settings = settings or get_settings()
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None


def token_capabilities(payload: dict[str, Any]) -> set[str]:
    """Extract the capability names granted by a decoded token."""
    raw = payload.get("capabilities")
    if not isinstance(raw, list):
        return set()
    return {str(cap) for cap in raw}
