"""
Session cookie handling.

Setting and clearing share one attribute set; a cookie cleared with
different path/secure/samesite values survives in most browsers.
"""

from datetime import timedelta
from typing import Optional

from fastapi import Request, Response

from auth_api.config import AuthConfig


class SessionCookie:
    """Reads, sets and clears the HTTP-only session cookie."""

    def __init__(self, config: AuthConfig):
        self._config = config

    @property
    def name(self) -> str:
        return self._config.cookie_name

    def attributes(self) -> dict:
        """Cookie attributes common to setting and clearing."""
        return {
            "path": self._config.cookie_path,
            "httponly": True,
            "secure": self._config.cookie_secure,
            "samesite": self._config.cookie_samesite,
        }

    def set(self, response: Response, token: str, max_age: timedelta) -> None:
        response.set_cookie(
            key=self.name,
            value=token,
            max_age=int(max_age.total_seconds()),
            **self.attributes(),
        )

    def clear(self, response: Response) -> None:
        response.delete_cookie(key=self.name, **self.attributes())

    def extract_token(self, request: Request) -> Optional[str]:
        """
        Token from the session cookie, else from ``Authorization: Bearer <token>``.
        """
        token = request.cookies.get(self.name)
        if token:
            return token

        auth_header = request.headers.get("Authorization")
        if auth_header and auth_header[:7].lower() == "bearer ":
            return auth_header[7:].strip() or None

        return None
