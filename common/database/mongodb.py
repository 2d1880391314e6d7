"""
Generic MongoDB connection manager using Motor.

This module provides async MongoDB connectivity that works with any database.
Collections are looked up on ``db``, keeping schemas and indexes in the
application layer.

Example:
    from common.database import MongoDB

    db = MongoDB()
    await db.connect(
        uri="mongodb://localhost:27017",
        database_name="myapp",
    )
    users = db.db["users"]
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


def mask_uri(uri: str) -> str:
    """Strip credentials from a connection string for logging."""
    if "@" not in uri:
        return uri
    scheme, sep, rest = uri.partition("://")
    if not sep:
        return uri.split("@")[-1]
    return f"{scheme}://{rest.split('@')[-1]}"


class MongoDB:
    """Generic MongoDB connection manager - works with any database."""

    def __init__(self):
        self._client: Optional[AsyncIOMotorClient] = None
        self._database_name: Optional[str] = None
        self._connected: bool = False

    async def connect(
        self,
        uri: str,
        database_name: str,
        server_selection_timeout_ms: int = 5000,
    ) -> None:
        """
        Connect to MongoDB and verify the server is reachable.

        Args:
            uri: MongoDB connection string
            database_name: Name of the database to use
            server_selection_timeout_ms: How long to wait for a reachable server
        """
        logger.info(f"Connecting to MongoDB: {mask_uri(uri)}")
        logger.debug(f"Database name: {database_name}")

        try:
            self._client = AsyncIOMotorClient(
                uri,
                serverSelectionTimeoutMS=server_selection_timeout_ms,
                tz_aware=True,
            )
            self._database_name = database_name
            await self._client.admin.command("ping")
            self._connected = True
            logger.info(f"Successfully connected to MongoDB database: {database_name}")
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    async def disconnect(self) -> None:
        """Close the MongoDB connection."""
        if self._client:
            logger.info(f"Disconnecting from MongoDB database: {self._database_name}")
            self._client.close()
            self._client = None
            self._database_name = None
            self._connected = False
            logger.debug("MongoDB connection closed")

    @property
    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self._connected

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """Get the underlying Motor database instance."""
        if not self._client or not self._database_name:
            raise RuntimeError("Database not connected")
        return self._client[self._database_name]
