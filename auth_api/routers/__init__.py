"""
Auth API Routers.

All routers are imported here for easy access from api.py.
"""

from auth_api.routers.auth import router as auth_router

__all__ = ["auth_router"]
