"""Application configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults for development.
"""

from functools import lru_cache
from typing import Literal
from urllib.parse import urlparse

from pydantic import Field, computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_PLACEHOLDER_SECRET = "CHANGE-THIS-IN-PRODUCTION-USE-SECRETS-TOKEN"
_LOOPBACK_HOSTS = {"localhost", "127.0.0.1", "::1"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========== Cache (Upstash Redis) ==========
    upstash_redis_rest_url: str = Field(default="", description="Upstash Redis REST URL")
    upstash_redis_rest_token: str = Field(default="", description="Upstash Redis REST Token")
    memory_cache_max_entries: int = Field(
        default=256,
        ge=1,
        description="Size of the in-process cache used when Redis is not configured",
    )

    # ========== Upstream API ==========
    bacon_ipsum_api_url: str = Field(
        default="https://baconipsum.com/api/",
        description="Base URL of the bacon ipsum text API",
    )
    upstream_timeout_seconds: float = Field(default=15.0, gt=0, le=60)

    # ========== Authentication ==========
    auth_enabled: bool = Field(default=True, description="Require capability tokens")
    jwt_secret_key: str = Field(
        default=_PLACEHOLDER_SECRET,
        min_length=32,
        description="Secret shared with the host for signing capability tokens",
    )
    jwt_algorithm: Literal["HS256", "HS384", "HS512"] = "HS256"

    # ========== CORS ==========
    cors_origins_str: str = Field(
        default="http://localhost:8080,http://localhost:3000",
        alias="CORS_ORIGINS",
        description="Comma-separated CORS origins",
    )

    # ========== Application ==========
    app_name: str = "Bacon Ipsum Block"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    debug: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # ========== Validators ==========
    @field_validator("bacon_ipsum_api_url")
    @classmethod
    def _require_https_for_remote(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme == "https":
            return value
        if parsed.scheme == "http" and parsed.hostname in _LOOPBACK_HOSTS:
            return value
        raise ValueError("bacon_ipsum_api_url must use https for non-local hosts")

    @model_validator(mode="after")
    def _reject_placeholder_secret(self) -> "Settings":
        if (
            self.auth_enabled
            and self.environment != "development"
            and self.jwt_secret_key == _PLACEHOLDER_SECRET
        ):
            raise ValueError("jwt_secret_key must be changed outside development")
        return self

    # ========== Computed Properties ==========
    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @computed_field
    @property
    def redis_available(self) -> bool:
        """Check if Redis credentials are configured."""
        return bool(self.upstash_redis_rest_url and self.upstash_redis_rest_token)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
