"""
Auth service: registration, login and session lookup.

Composes the user repository (credential store), JWTAuth (password hashing
and token signing) and the immutable AuthConfig. Every public operation
lets APIExceptions through unchanged and turns anything else into a
generic 500 so store or library details never reach the client.
"""

import asyncio
import functools
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from starlette.concurrency import run_in_threadpool

from common.auth import JWTAuth
from common.utils.exceptions import (
    APIException,
    ConflictException,
    InternalServerException,
    UnauthorizedException,
    ValidationException,
)

from auth_api.config import AuthConfig
from auth_api.models import User
from auth_api.services.user_repository import UserRepository, normalize_email

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
NOT_AUTHENTICATED = "Not authenticated"
INVALID_TOKEN = "Invalid or expired token"


def _guard(operation: str):
    """Map unexpected failures of an async operation to a generic 500."""

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except APIException:
                raise
            except Exception:
                logger.exception(f"{operation} error")
                raise InternalServerException()

        return wrapper

    return decorator


@dataclass(frozen=True)
class LoginResult:
    """A successful login: who logged in and the session to hand back."""

    user: User
    token: str
    max_age: timedelta


class AuthService:
    """
    Orchestrates registration, login and session lookup.
    """

    def __init__(
        self,
        users: UserRepository,
        auth: JWTAuth,
        config: AuthConfig,
    ):
        """
        Initialize AuthService.

        Args:
            users: Credential store
            auth: Password hasher and token issuer
            config: Session lifetimes and timeouts
        """
        self._users = users
        self._auth = auth
        self._config = config
        self._decoy_hash: Optional[str] = None

    @classmethod
    def from_config(cls, users: UserRepository, config: AuthConfig) -> "AuthService":
        """Build the service and its JWTAuth from an AuthConfig."""
        auth = JWTAuth(
            secret=config.jwt_secret,
            algorithm=config.jwt_algorithm,
            bcrypt_rounds=config.bcrypt_rounds,
        )
        return cls(users=users, auth=auth, config=config)

    async def _hash_password(self, password: str) -> str:
        return await asyncio.wait_for(
            run_in_threadpool(self._auth.hash_password, password),
            timeout=self._config.hash_timeout,
        )

    async def _verify_password(self, password: str, password_hash: str) -> bool:
        return await asyncio.wait_for(
            run_in_threadpool(self._auth.verify_password, password, password_hash),
            timeout=self._config.hash_timeout,
        )

    async def _burn_verify(self, password: str) -> None:
        """Spend one bcrypt check so unknown emails cost as much as wrong passwords."""
        if self._decoy_hash is None:
            self._decoy_hash = await self._hash_password(secrets.token_urlsafe(16))
        await self._verify_password(password, self._decoy_hash)

    # =========================================================================
    # Registration
    # =========================================================================
    @_guard("Register")
    async def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> User:
        """
        Create a new user account.

        Registration does not log the user in; the client calls login next.

        Returns:
            The stored user

        Raises:
            ValidationException: name, email or password missing
            ConflictException: email already registered
        """
        name = (name or "").strip()
        email = normalize_email(email or "")
        if not name or not email or not password:
            raise ValidationException("Name, email and password are required.")

        logger.info(f"Registration attempt for email: {email}")
        user = User(
            name=name,
            email=email,
            password_hash=await self._hash_password(password),
        )
        try:
            user = await self._users.insert(user)
        except ConflictException:
            logger.warning(f"Registration failed - email already exists: {email}")
            raise

        logger.info(f"User registered successfully: {user.id} ({email})")
        return user

    # =========================================================================
    # Login
    # =========================================================================
    @_guard("Login")
    async def login(
        self,
        email: Optional[str],
        password: Optional[str],
        remember: bool = False,
        now: Optional[datetime] = None,
    ) -> LoginResult:
        """
        Verify credentials and issue a session token.

        Unknown email and wrong password raise the same error.

        Raises:
            ValidationException: email or password missing
            UnauthorizedException: invalid credentials
        """
        if not email or not password:
            raise ValidationException("Email and password required")

        email = normalize_email(email)
        logger.info(f"Login attempt for email: {email}")

        user = await self._users.find_by_email(email)
        if not user:
            await self._burn_verify(password)
            logger.warning(f"Login failed - user not found: {email}")
            raise UnauthorizedException(INVALID_CREDENTIALS, code="INVALID_CREDENTIALS")

        if not await self._verify_password(password, user.password_hash):
            logger.warning(f"Login failed - invalid password for user: {user.id}")
            raise UnauthorizedException(INVALID_CREDENTIALS, code="INVALID_CREDENTIALS")

        lifetime = self._config.session_lifetime(remember)
        token = self._auth.create_token(
            user.id,
            expires_in=lifetime,
            issued_at=now,
            **user.to_identity(),
        )
        logger.info(f"Login successful for user: {user.id} (remember={remember})")
        return LoginResult(user=user, token=token, max_age=lifetime)

    # =========================================================================
    # Session lookup
    # =========================================================================
    async def current_user(self, token: Optional[str]) -> dict:
        """
        Resolve the identity carried by a session token.

        The identity is returned as it was signed at login; the store is not
        consulted, so profile changes show up only after the next login.

        Raises:
            UnauthorizedException: no token, or a token that fails verification
        """
        if not token:
            raise UnauthorizedException(NOT_AUTHENTICATED, code="NOT_AUTHENTICATED")

        try:
            claims = self._auth.verify_token(token)
        except Exception as e:
            logger.debug(f"Session lookup rejected token: {e}")
            raise UnauthorizedException(INVALID_TOKEN, code="INVALID_TOKEN")

        user_id = claims.get("id") or claims.get("sub")
        if not user_id:
            raise UnauthorizedException(INVALID_TOKEN, code="INVALID_TOKEN")

        return {
            "id": user_id,
            "name": claims.get("name"),
            "email": claims.get("email"),
        }
