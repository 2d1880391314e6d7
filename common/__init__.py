"""
Common library for reusable infrastructure components.

- database: Async MongoDB connection with Motor
- auth: JWT tokens and bcrypt password hashing
- utils: Standard responses and HTTP exceptions
- config: Base settings class
"""

from common.database import MongoDB
from common.auth import JWTAuth
from common.utils import (
    success_response,
    error_response,
    APIException,
    ValidationException,
    UnauthorizedException,
    ConflictException,
    InternalServerException,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    # Auth
    "JWTAuth",
    # Utils
    "success_response",
    "error_response",
    "APIException",
    "ValidationException",
    "UnauthorizedException",
    "ConflictException",
    "InternalServerException",
    # Config
    "BaseAppSettings",
]
