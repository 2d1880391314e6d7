"""
Auth API Pydantic Schemas.

Request models for API endpoints.
"""

from auth_api.schemas.auth import RegisterRequest, LoginRequest

__all__ = [
    "RegisterRequest",
    "LoginRequest",
]
