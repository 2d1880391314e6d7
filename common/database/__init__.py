"""
Database module - Generic async MongoDB connection using Motor.

Usage:
    from common.database import MongoDB

    db = MongoDB()
    await db.connect(uri, database_name)
    collection = db.db["users"]
"""

from common.database.mongodb import MongoDB, mask_uri

__all__ = ["MongoDB", "mask_uri"]
