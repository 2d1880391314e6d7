"""
Authentication request schemas.

Fields are optional at the schema level so that missing credentials are
reported by the auth service as a 400 with a readable message instead of
a generic validation error. Scalar values are coerced to strings.
"""

from typing import Any, Optional
from pydantic import BaseModel, field_validator


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


class RegisterRequest(BaseModel):
    """User registration request."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("name", "email", "password", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Optional[str]:
        return _as_text(value)


class LoginRequest(BaseModel):
    """User login request."""

    email: Optional[str] = None
    password: Optional[str] = None
    remember: bool = False

    @field_validator("email", "password", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Optional[str]:
        return _as_text(value)

    @field_validator("remember", mode="before")
    @classmethod
    def coerce_truthy(cls, value: Any) -> bool:
        """Any truthy value requests a persistent login."""
        return bool(value)
