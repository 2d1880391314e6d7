"""
Auth API Services

Contains service classes for authentication operations.
"""

from auth_api.services.user_repository import UserRepository, normalize_email
from auth_api.services.auth_service import AuthService, LoginResult
from auth_api.services.session_cookie import SessionCookie

__all__ = [
    "UserRepository",
    "normalize_email",
    "AuthService",
    "LoginResult",
    "SessionCookie",
]
