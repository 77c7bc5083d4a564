"""
Database module - SQLAlchemy persistence and MongoDB notification storage.
"""
from internship_portal.db.database import get_db_session, get_engine, test_database_connection
from internship_portal.db.mongodb import get_mongo_db, test_mongo_connection

__all__ = [
    "get_db_session",
    "get_engine",
    "test_database_connection",
    "get_mongo_db",
    "test_mongo_connection"
]
