"""
Auth API application code.

- models: User record schema
- schemas: Request bodies
- services: Credential store, auth service, session cookie
- routers: HTTP endpoints under /api/auth
- config: Application settings and the immutable AuthConfig

Uses generic infrastructure from the common/ package.
"""

from auth_api.config import Settings, AuthConfig, get_settings

__all__ = ["Settings", "AuthConfig", "get_settings"]
