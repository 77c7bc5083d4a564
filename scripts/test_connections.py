#!/usr/bin/env python3
"""
Connection Test Script

Run this to verify the configured database (and MongoDB, when used as
the notification backend) are reachable.
Usage: python scripts/test_connections.py
"""
import sys
sys.path.insert(0, '.')

from internship_portal.core.config import get_settings
from internship_portal.db import database, mongodb


def main():
    settings = get_settings()
    print("=" * 50)
    print("INTERNSHIP PORTAL - CONNECTION TEST")
    print("=" * 50)

    # Relational database
    print("\n[1] Testing database...")
    print(f"    URL: {settings.database_url}")
    if database.test_database_connection():
        print("    ✅ Database: CONNECTED")
        database.init_schema()
        print("    ✅ Schema: READY")
    else:
        print("    ❌ Database: FAILED")

    # MongoDB (only when it stores notifications)
    print("\n[2] Testing MongoDB...")
    if settings.notification_backend == "mongo":
        print(f"    URI: {settings.mongodb_uri}")
        print(f"    Database: {settings.mongodb_db}")
        if mongodb.test_mongo_connection():
            print("    ✅ MongoDB: CONNECTED")
        else:
            print("    ❌ MongoDB: FAILED")
    else:
        print("    ⚠️  MongoDB: notification backend is in-memory (skip)")

    print("\n" + "=" * 50)
    print("Connection test complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
