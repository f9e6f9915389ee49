"""
Database module - MongoDB connection and collection access.
"""
from placement_hub.db.mongodb import get_collection, get_mongo_db, init_mongo_indexes, test_mongo_connection

__all__ = [
    "get_collection",
    "get_mongo_db",
    "init_mongo_indexes",
    "test_mongo_connection"
]
