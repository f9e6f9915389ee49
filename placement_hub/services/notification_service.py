"""
Notification Service

Notifications are created as side effects of other accounts' actions
(applications, likes, comments, connections, messages) and are only
ever mutated by their recipient.
"""

from enum import Enum
from typing import List, Optional

from placement_hub.core.auth import Identity
from placement_hub.core.errors import NotFound
from placement_hub.core.policy import Action, ResourceKind, enforce
from placement_hub.db.mongodb import get_collection
from placement_hub.services.mongo_service import NEWEST_FIRST, serialize_doc, serialize_docs, to_object_id, utcnow


class NotificationKind(str, Enum):
    application_submitted = "application_submitted"
    application_status = "application_status"
    interview = "interview"
    like = "like"
    comment = "comment"
    connection = "connection"
    message = "message"


class NotificationService:

    def __init__(self):
        self.collection = get_collection("notifications")

    def create(
        self,
        recipient_id: str,
        message: str,
        kind: NotificationKind,
        link: Optional[str] = None,
    ) -> dict:
        doc = {
            "recipient_id": recipient_id,
            "message": message,
            "kind": NotificationKind(kind).value,
            "link": link,
            "read": False,
            "created_at": utcnow(),
        }
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def notify_unless_self(
        self,
        actor_id: str,
        recipient_id: str,
        message: str,
        kind: NotificationKind,
        link: Optional[str] = None,
    ) -> Optional[dict]:
        """Actions on one's own content never notify."""
        if actor_id == recipient_id:
            return None
        return self.create(recipient_id, message, kind, link)

    def list_for(self, account_id: str, limit: Optional[int] = None, unread_only: bool = False) -> List[dict]:
        query = {"recipient_id": account_id}
        if unread_only:
            query["read"] = False
        cursor = self.collection.find(query).sort(NEWEST_FIRST)
        if limit:
            cursor = cursor.limit(limit)
        return serialize_docs(cursor)

    def unread_count(self, account_id: str) -> int:
        return self.collection.count_documents({"recipient_id": account_id, "read": False})

    def mark_read(self, identity: Identity, notification_id: str) -> dict:
        oid = to_object_id(notification_id, "Notification")
        notification = self.collection.find_one({"_id": oid})
        if not notification:
            raise NotFound("Notification not found")
        enforce(identity, ResourceKind.notification, Action.edit, notification)

        self.collection.update_one({"_id": oid}, {"$set": {"read": True}})
        notification["read"] = True
        return serialize_doc(notification)

    def mark_all_read(self, identity: Identity) -> int:
        result = self.collection.update_many(
            {"recipient_id": identity.id, "read": False},
            {"$set": {"read": True}}
        )
        return result.modified_count
