"""
MongoDB Connection Utility

Every resource of the portal lives in its own collection:
- accounts, companies: people and recruiter company profiles
- jobs, applications, interviews, saved_jobs: the hiring pipeline
- forum_posts, forum_comments: community content
- notifications, messages, connections, reviews: social features

References between documents are stored as string ids; only `_id`
is a real ObjectId.
"""
import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection

from placement_hub.core.config import get_settings

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
    """Get the portal database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection by its COLLECTIONS key or raw name."""
    db = get_mongo_db()
    return db[COLLECTIONS.get(name, name)]


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
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "accounts": "accounts",
    "companies": "companies",
    "jobs": "jobs",
    "applications": "applications",
    "interviews": "interviews",
    "saved_jobs": "saved_jobs",
    "posts": "forum_posts",
    "comments": "forum_comments",
    "notifications": "notifications",
    "messages": "messages",
    "connections": "connections",
    "reviews": "reviews",
}


def init_mongo_indexes():
    """
    Create indexes. The unique ones carry data invariants
    (one application per job/applicant, one saved list per account,
    one document per connection pair), so call this during startup.
    """
    db = get_mongo_db()

    db[COLLECTIONS["accounts"]].create_index("email", unique=True)
    db[COLLECTIONS["accounts"]].create_index("user_id", unique=True)
    db[COLLECTIONS["companies"]].create_index("owner_id", unique=True)

    db[COLLECTIONS["jobs"]].create_index("owner_id")
    db[COLLECTIONS["jobs"]].create_index([("status", ASCENDING), ("created_at", DESCENDING)])

    db[COLLECTIONS["applications"]].create_index([
        ("job_id", ASCENDING),
        ("applicant_id", ASCENDING)
    ], unique=True)
    db[COLLECTIONS["applications"]].create_index("applicant_id")
    db[COLLECTIONS["interviews"]].create_index("application_id")

    db[COLLECTIONS["saved_jobs"]].create_index("account_id", unique=True)

    db[COLLECTIONS["comments"]].create_index("post_id")
    db[COLLECTIONS["posts"]].create_index("author_id")

    db[COLLECTIONS["notifications"]].create_index([
        ("recipient_id", ASCENDING),
        ("created_at", DESCENDING)
    ])
    db[COLLECTIONS["messages"]].create_index([("sender_id", ASCENDING), ("recipient_id", ASCENDING)])
    db[COLLECTIONS["connections"]].create_index("pair_key", unique=True)
    db[COLLECTIONS["connections"]].create_index("members")
    db[COLLECTIONS["reviews"]].create_index([
        ("company_id", ASCENDING),
        ("author_id", ASCENDING)
    ], unique=True)

    logger.info("MongoDB indexes created successfully")
