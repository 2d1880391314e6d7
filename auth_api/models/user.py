"""
User model for the auth API.

Matches the documents stored in the ``users`` collection. The password
digest lives only in ``passwordHash`` and never leaves this model through
a public projection.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    """Get current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


class User(BaseModel):
    """User account record."""

    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password_hash: str = Field(..., alias="passwordHash", repr=False)
    created_at: datetime = Field(default_factory=_utcnow, alias="createdAt")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_document(cls, doc: dict) -> "User":
        """Build a User from a raw MongoDB document."""
        return cls(
            id=str(doc["_id"]),
            name=doc["name"],
            email=doc["email"],
            passwordHash=doc["passwordHash"],
            createdAt=doc["createdAt"],
        )

    def to_document(self) -> dict:
        """Raw MongoDB document for insertion; the store assigns ``_id``."""
        return {
            "name": self.name,
            "email": self.email,
            "passwordHash": self.password_hash,
            "createdAt": self.created_at,
        }

    def to_identity(self) -> dict:
        """Identity claim embedded in session tokens and login responses."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
        }

    def to_public_dict(self) -> dict:
        """Public projection returned after registration (safe to return to client)."""
        return {
            **self.to_identity(),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
