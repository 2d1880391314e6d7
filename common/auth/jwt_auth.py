"""
JWT + bcrypt authentication provider.

Token issuing/verification and password hashing for stateless sessions:
- JWT tokens (python-jose) carrying the user's identity claims
- bcrypt for salted, one-way password hashing

Example:
    auth = JWTAuth(secret="your-secret-key")

    password_hash = auth.hash_password("secret1")
    assert auth.verify_password("secret1", password_hash)

    token = auth.create_token(user_id, expires_in=timedelta(days=1), email="a@x.com")
    claims = auth.verify_token(token)
    print(claims["sub"])  # user_id
"""

import base64
import hashlib
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional

import bcrypt as bcrypt_lib
from jose import jwt, JWTError


class JWTAuth:
    """
    JWT + bcrypt authentication provider.

    Holds the signing secret and the bcrypt work factor. User storage is
    handled elsewhere; this class never touches the database.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        bcrypt_rounds: int = 10,
    ):
        """
        Initialize JWT auth provider.

        Args:
            secret: Secret key for JWT signing (keep this secure!)
            algorithm: JWT algorithm (default: HS256)
            bcrypt_rounds: bcrypt cost factor (log2 of iterations)
        """
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self.secret = secret
        self.algorithm = algorithm
        self.bcrypt_rounds = bcrypt_rounds

    def _prehash_password(self, password: str) -> str:
        """
        Pre-hash password with SHA-256 before bcrypt.

        This handles bcrypt's 72-byte limit and ensures consistent
        behavior across all password lengths.
        """
        sha256_hash = hashlib.sha256(password.encode("utf-8")).digest()
        return base64.b64encode(sha256_hash).decode("utf-8")

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt with SHA-256 pre-hashing."""
        prehashed = self._prehash_password(password)
        salt = bcrypt_lib.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt_lib.hashpw(prehashed.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str, hashed: str) -> bool:
        """Verify a password against its hash. Malformed hashes never match."""
        if not hashed:
            return False
        prehashed = self._prehash_password(password)
        try:
            return bcrypt_lib.checkpw(prehashed.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            return False

    def create_token(
        self,
        user_id: str,
        expires_in: timedelta,
        issued_at: Optional[datetime] = None,
        **claims: Any,
    ) -> str:
        """
        Create a signed JWT for the user.

        Args:
            user_id: Stored as the ``sub`` claim
            expires_in: Token lifetime counted from ``issued_at``
            issued_at: Issue time (defaults to now, UTC)
            **claims: Additional claims to embed

        Returns:
            Encoded token string
        """
        issued_at = issued_at or datetime.now(timezone.utc)
        payload = {
            **claims,
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + expires_in,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT.

        Raises:
            ValueError: If the signature, format or expiry is invalid
        """
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
            )
        except JWTError as e:
            raise ValueError(f"Invalid token: {e}")
