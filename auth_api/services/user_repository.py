"""
User repository backed by a MongoDB collection.

Owns the ``users`` collection: index management, lookup by normalized
email and insertion. Email uniqueness is enforced by a unique index, so a
concurrent duplicate registration fails at insert time.
"""

import asyncio
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from common.utils.exceptions import ConflictException

from auth_api.models import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Uniqueness key for an email address."""
    return email.strip().lower()


class UserRepository:
    """
    Stores and retrieves user records.
    """

    COLLECTION_NAME = "users"

    def __init__(self, collection: AsyncIOMotorCollection, timeout: Optional[float] = None):
        """
        Initialize UserRepository.

        Args:
            collection: The ``users`` collection
            timeout: Seconds allowed for each store round-trip (None = unbounded)
        """
        self._users_collection = collection
        self._timeout = timeout

    async def _call(self, awaitable):
        return await asyncio.wait_for(awaitable, timeout=self._timeout)

    async def ensure_indexes(self) -> None:
        """Create the unique email index. Safe to call on every startup."""
        await self._call(
            self._users_collection.create_index(
                [("email", ASCENDING)],
                unique=True,
                name="email_unique",
            )
        )
        logger.info("Ensured unique index on users.email")

    async def find_by_email(self, email: str) -> Optional[User]:
        """
        Load user by email (normalized before lookup).

        Returns:
            User or None if not found
        """
        doc = await self._call(
            self._users_collection.find_one({"email": normalize_email(email)})
        )
        if not doc:
            return None
        return User.from_document(doc)

    async def insert(self, user: User) -> User:
        """
        Insert a new user record.

        Args:
            user: User without an id; email must already be normalized

        Returns:
            The user with its store-assigned id

        Raises:
            ConflictException: A user with this email already exists
        """
        doc = user.to_document()
        try:
            result = await self._call(self._users_collection.insert_one(doc))
        except DuplicateKeyError:
            logger.warning(f"Duplicate registration rejected for email: {user.email}")
            raise ConflictException(
                message="Email already registered.",
                code="EMAIL_EXISTS",
            )

        logger.info(f"User created: {result.inserted_id}")
        return user.model_copy(update={"id": str(result.inserted_id)})
