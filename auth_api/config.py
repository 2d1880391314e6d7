"""
Auth API application settings.

Extends the base settings with session and cookie configuration, and
derives the immutable AuthConfig handed to the auth service.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache

from common.config import BaseAppSettings

logger = logging.getLogger(__name__)


class Settings(BaseAppSettings):
    """Auth API specific settings."""

    # ==========================================================================
    # Session Settings
    # ==========================================================================
    SESSION_COOKIE_NAME: str = "token"
    SESSION_EXPIRE_DAYS: int = 1
    REMEMBER_ME_EXPIRE_DAYS: int = 7

    # ==========================================================================
    # Password Hashing
    # ==========================================================================
    BCRYPT_ROUNDS: int = 10

    # ==========================================================================
    # Resilience
    # ==========================================================================
    STORE_TIMEOUT_SECONDS: float = 5.0
    HASH_TIMEOUT_SECONDS: float = 5.0


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@dataclass(frozen=True)
class AuthConfig:
    """Read-only configuration for the auth service, built once at startup."""

    jwt_secret: str
    jwt_algorithm: str = "HS256"
    session_ttl: timedelta = timedelta(days=1)
    remember_ttl: timedelta = timedelta(days=7)
    cookie_name: str = "token"
    cookie_path: str = "/"
    cookie_secure: bool = False
    cookie_samesite: str = "lax"
    bcrypt_rounds: int = 10
    store_timeout: float = 5.0
    hash_timeout: float = 5.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthConfig":
        """
        Build the auth configuration from environment settings.

        Production deployments get secure, cross-site cookies; anything else
        gets lax, non-secure cookies so local development works over HTTP.
        """
        settings.validate_required()

        secret = settings.JWT_SECRET
        if not secret:
            # Only reachable outside production (validate_required enforces it there)
            logger.warning("JWT_SECRET not set; using a random per-process secret")
            secret = secrets.token_urlsafe(32)

        production = settings.is_production()
        return cls(
            jwt_secret=secret,
            jwt_algorithm=settings.JWT_ALGORITHM,
            session_ttl=timedelta(days=settings.SESSION_EXPIRE_DAYS),
            remember_ttl=timedelta(days=settings.REMEMBER_ME_EXPIRE_DAYS),
            cookie_name=settings.SESSION_COOKIE_NAME,
            cookie_secure=production,
            cookie_samesite="none" if production else "lax",
            bcrypt_rounds=settings.BCRYPT_ROUNDS,
            store_timeout=settings.STORE_TIMEOUT_SECONDS,
            hash_timeout=settings.HASH_TIMEOUT_SECONDS,
        )

    def session_lifetime(self, remember: bool) -> timedelta:
        """Token and cookie lifetime for a login."""
        return self.remember_ttl if remember else self.session_ttl
