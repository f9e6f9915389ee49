#!/usr/bin/env python3
"""
Connection Check Script

Verifies MongoDB is reachable and creates the portal's indexes.
Usage: python scripts/check_connection.py
"""
import sys

from placement_hub.core.config import get_settings
from placement_hub.db.mongodb import COLLECTIONS, get_mongo_db, init_mongo_indexes, test_mongo_connection


def main() -> int:
    settings = get_settings()
    print("=" * 50)
    print("PLACEMENT HUB - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Testing MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if not test_mongo_connection():
        print("    FAILED: MongoDB is not reachable")
        return 1
    print("    MongoDB: CONNECTED")

    print("\n[2] Creating indexes...")
    init_mongo_indexes()
    db = get_mongo_db()
    for name in COLLECTIONS.values():
        print(f"    {name}: {db[name].count_documents({})} documents")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(main())
