"""
Authentication Router.

Handles user registration, login, session lookup and logout.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from common.utils import success_response

from auth_api.dependencies import get_auth_service, get_session_cookie
from auth_api.schemas.auth import RegisterRequest, LoginRequest
from auth_api.services.auth_service import AuthService
from auth_api.services.session_cookie import SessionCookie

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# POST /api/auth/register
# =============================================================================
@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """
    Register a new user account.

    Does not start a session; the client logs in afterwards.
    """
    user = await auth_service.register(body.name, body.email, body.password)
    return success_response(
        {"user": user.to_public_dict()},
        message="User created successfully",
    )


# =============================================================================
# POST /api/auth/login
# =============================================================================
@router.post("/login")
async def login(
    body: LoginRequest,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    session_cookie: Annotated[SessionCookie, Depends(get_session_cookie)],
):
    """
    Authenticate user and set the HTTP-only session cookie.

    The body is informational; the cookie is the credential.
    """
    result = await auth_service.login(body.email, body.password, remember=body.remember)
    session_cookie.set(response, result.token, result.max_age)
    return success_response(
        {"user": result.user.to_identity()},
        message="Login successful",
    )


# =============================================================================
# GET /api/auth/me
# =============================================================================
@router.get("/me")
async def me(
    request: Request,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    session_cookie: Annotated[SessionCookie, Depends(get_session_cookie)],
):
    """
    Return the identity from the session cookie or bearer token.
    """
    user = await auth_service.current_user(session_cookie.extract_token(request))
    return success_response({"user": user})


# =============================================================================
# POST /api/auth/logout
# =============================================================================
@router.post("/logout")
async def logout(
    response: Response,
    session_cookie: Annotated[SessionCookie, Depends(get_session_cookie)],
):
    """
    Clear the session cookie. Succeeds whether or not a session exists.
    """
    session_cookie.clear(response)
    logger.debug("Session cookie cleared")
    return success_response(message="Logged out")
