"""
Custom HTTP exceptions with error codes.

Extends FastAPI's HTTPException with standardized error codes
for consistent API error responses.

Example:
    from common.utils import ConflictException

    async def create(email: str):
        if await users.find_one({"email": email}):
            raise ConflictException("Email already registered.", code="EMAIL_EXISTS")
"""

from typing import Optional, Any, Dict
from fastapi import HTTPException


class APIException(HTTPException):
    """
    Base API exception with error code support.

    Provides consistent error response format across the API.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Create an API exception.

        Args:
            status_code: HTTP status code
            message: Human-readable error message
            code: Machine-readable error code
            details: Additional error details
            headers: Optional response headers
        """
        detail: Dict[str, Any] = {"message": message}

        if code:
            detail["code"] = code

        if details is not None:
            detail["details"] = details

        super().__init__(
            status_code=status_code,
            detail=detail,
            headers=headers,
        )
        self.message = message
        self.code = code


class ValidationException(APIException):
    """400 Bad Request - A required field is missing or empty."""

    def __init__(
        self,
        message: str = "Validation error",
        code: str = "VALIDATION_ERROR",
        details: Optional[Any] = None,
    ):
        super().__init__(400, message, code, details)


class UnauthorizedException(APIException):
    """401 Unauthorized - Missing or invalid authentication."""

    def __init__(
        self,
        message: str = "Unauthorized",
        code: str = "UNAUTHORIZED",
        details: Optional[Any] = None,
    ):
        super().__init__(401, message, code, details)


class ConflictException(APIException):
    """409 Conflict - Resource already exists or state conflict."""

    def __init__(
        self,
        message: str = "Conflict",
        code: str = "CONFLICT",
        details: Optional[Any] = None,
    ):
        super().__init__(409, message, code, details)


class InternalServerException(APIException):
    """500 Internal Server Error - Unexpected server error."""

    def __init__(
        self,
        message: str = "Server error",
        code: str = "INTERNAL_ERROR",
        details: Optional[Any] = None,
    ):
        super().__init__(500, message, code, details)
