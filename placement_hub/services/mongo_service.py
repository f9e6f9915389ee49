"""
Shared helpers for the Mongo-backed services.

Documents keep a real ObjectId in `_id`; every other reference is stored
as the string form of that id, so serialization only has to rename `_id`.
"""

import re
from datetime import datetime
from typing import Iterable, List, Optional
from bson import ObjectId
from pymongo import ASCENDING, DESCENDING

from placement_hub.core.errors import NotFound

# Ties on created_at (same millisecond) fall back to insertion order via _id
NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]
OLDEST_FIRST = [("created_at", ASCENDING), ("_id", ASCENDING)]


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: Optional[dict]) -> Optional[dict]:
    """Convert MongoDB document to JSON-serializable dict (`_id` -> `id`)."""
    if doc is None:
        return None
    doc = dict(doc)
    if "_id" in doc:
        doc["id"] = str(doc.pop("_id"))
    return doc


def serialize_docs(docs: Iterable[dict]) -> List[dict]:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def to_object_id(value: str, label: str = "Resource") -> ObjectId:
    """Parse a path/body id; anything malformed is reported as not found."""
    if isinstance(value, ObjectId):
        return value
    if not value or not ObjectId.is_valid(value):
        raise NotFound(f"{label} not found")
    return ObjectId(value)


def to_object_ids(values: Iterable[str]) -> List[ObjectId]:
    return [ObjectId(v) for v in values if v and ObjectId.is_valid(v)]


def contains_pattern(text: str) -> dict:
    """Case-insensitive substring filter with user input escaped."""
    return {"$regex": re.escape(text.strip()), "$options": "i"}


def exact_pattern(text: str) -> dict:
    return {"$regex": f"^{re.escape(text.strip())}$", "$options": "i"}


def utcnow() -> datetime:
    # Mongo stores millisecond precision; trim so round trips compare equal
    now = datetime.utcnow()
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)
