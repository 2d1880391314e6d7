"""
Standard API response helpers.

Bodies are flat JSON objects: a human-readable ``message`` next to any
payload keys.

Example:
    from common.utils import success_response, error_response

    return success_response({"user": user.to_public_dict()}, message="Login successful")
    # {"message": "Login successful", "user": {...}}

    return error_response("Invalid credentials", code="INVALID_CREDENTIALS")
    # {"message": "Invalid credentials", "code": "INVALID_CREDENTIALS"}
"""

from typing import Any, Optional, Dict


def success_response(
    data: Optional[Dict[str, Any]] = None,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a standard success response.

    Args:
        data: Payload keys merged into the top level of the body
        message: Optional success message

    Returns:
        Dictionary with optional message and payload keys
    """
    response: Dict[str, Any] = {}

    if message:
        response["message"] = message

    if data:
        response.update(data)

    return response


def error_response(
    message: str,
    code: Optional[str] = None,
    details: Optional[Any] = None,
) -> Dict[str, Any]:
    """
    Create a standard error response.

    Args:
        message: Human-readable error message
        code: Machine-readable error code (e.g., "EMAIL_EXISTS")
        details: Additional error details

    Returns:
        Dictionary with the message and optional code/details
    """
    error: Dict[str, Any] = {"message": message}

    if code:
        error["code"] = code

    if details is not None:
        error["details"] = details

    return error
