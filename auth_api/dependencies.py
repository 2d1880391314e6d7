"""
FastAPI dependencies for the auth API.

Services are built once at application startup by init_auth_services()
and handed to route handlers through Depends().
"""

from motor.motor_asyncio import AsyncIOMotorDatabase

from auth_api.config import AuthConfig
from auth_api.services.auth_service import AuthService
from auth_api.services.session_cookie import SessionCookie
from auth_api.services.user_repository import UserRepository


_auth_service: AuthService | None = None
_session_cookie: SessionCookie | None = None


def init_auth_services(db: AsyncIOMotorDatabase, config: AuthConfig) -> UserRepository:
    """
    Initialize auth services with database and configuration.

    Called once at application startup.

    Args:
        db: MongoDB database connection
        config: Immutable auth configuration

    Returns:
        The user repository, so the caller can ensure its indexes
    """
    global _auth_service, _session_cookie

    users = UserRepository(
        db[UserRepository.COLLECTION_NAME],
        timeout=config.store_timeout,
    )
    _auth_service = AuthService.from_config(users, config)
    _session_cookie = SessionCookie(config)
    return users


def reset_auth_services() -> None:
    """Drop the initialized services (application shutdown and tests)."""
    global _auth_service, _session_cookie
    _auth_service = None
    _session_cookie = None


def get_auth_service() -> AuthService:
    """Get the auth service instance."""
    if _auth_service is None:
        raise RuntimeError("Auth services not initialized. Call init_auth_services first.")
    return _auth_service


def get_session_cookie() -> SessionCookie:
    """Get the session cookie policy."""
    if _session_cookie is None:
        raise RuntimeError("Auth services not initialized. Call init_auth_services first.")
    return _session_cookie
