"""
Connection Service - symmetric contacts between accounts.

A connection is a single document keyed by the unordered pair of account
ids (pair_key = "<smaller id>:<larger id>"). Adding or removing one is a
single-document write, so the relation can never become one-sided.
"""

import logging
from typing import List, Tuple
from pymongo.errors import DuplicateKeyError

from placement_hub.core.auth import Identity
from placement_hub.core.errors import Conflict, NotFound, ValidationError
from placement_hub.db.mongodb import get_collection
from placement_hub.services.account_service import AccountService
from placement_hub.services.mongo_service import NEWEST_FIRST, utcnow
from placement_hub.services.notification_service import NotificationKind, NotificationService

logger = logging.getLogger(__name__)


def pair_of(a: str, b: str) -> Tuple[str, List[str]]:
    members = sorted([a, b])
    return ":".join(members), members


class ConnectionService:

    def __init__(self):
        self.collection = get_collection("connections")
        self.accounts = AccountService()
        self.notifications = NotificationService()

    def connect(self, identity: Identity, other_id: str) -> dict:
        other = self.accounts.get(other_id)
        other_id = str(other["_id"])
        if other_id == identity.id:
            raise ValidationError("You cannot connect with yourself")

        pair_key, members = pair_of(identity.id, other_id)
        doc = {
            "pair_key": pair_key,
            "members": members,
            "requested_by": identity.id,
            "created_at": utcnow(),
        }
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise Conflict("Already connected")

        try:
            self.notifications.create(
                other_id,
                f"{identity.name} connected with you",
                NotificationKind.connection,
                link=f"/users/{identity.id}",
            )
        except Exception:
            self.collection.delete_one({"_id": result.inserted_id})
            raise

        logger.info("Connection %s created", pair_key)
        return {"with_user": self.accounts.summaries([other_id]).get(other_id), "created_at": doc["created_at"]}

    def disconnect(self, identity: Identity, other_id: str) -> None:
        pair_key, _ = pair_of(identity.id, other_id)
        result = self.collection.delete_one({"pair_key": pair_key})
        if result.deleted_count == 0:
            raise NotFound("Connection not found")
        logger.info("Connection %s removed", pair_key)

    def is_connected(self, a: str, b: str) -> bool:
        pair_key, _ = pair_of(a, b)
        return self.collection.find_one({"pair_key": pair_key}, {"_id": 1}) is not None

    def list_for(self, identity: Identity) -> List[dict]:
        others = []
        for doc in self.collection.find({"members": identity.id}).sort(NEWEST_FIRST):
            others.extend(member for member in doc["members"] if member != identity.id)
        return self.accounts.list_public(others)
