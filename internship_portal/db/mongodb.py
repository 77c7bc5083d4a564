"""
MongoDB Connection Utility

MongoDB stores:
- Notification inboxes (one document per delivered message)

Used when settings.notification_backend == "mongo".
"""
import logging

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from internship_portal.core.config import get_settings

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the configured database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection."""
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.error(f"MongoDB connection failed: {e}")
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "notifications": "notifications",
}


def init_mongo_indexes():
    """
    Create indexes for inbox lookups.
    Call this once during app startup.
    """
    db = get_mongo_db()
    db[COLLECTIONS["notifications"]].create_index([
        ("recipient_id", 1),
        ("created_at", 1)
    ])
    logger.info("MongoDB indexes created successfully")
