"""
Message Service - direct messages between accounts.
"""

from typing import List

from placement_hub.core.auth import Identity
from placement_hub.core.errors import ValidationError
from placement_hub.db.mongodb import get_collection
from placement_hub.services.account_service import AccountService
from placement_hub.services.mongo_service import NEWEST_FIRST, OLDEST_FIRST, serialize_doc, utcnow
from placement_hub.services.notification_service import NotificationKind, NotificationService


def _between(a: str, b: str) -> dict:
    return {"$or": [
        {"sender_id": a, "recipient_id": b},
        {"sender_id": b, "recipient_id": a},
    ]}


class MessageService:

    def __init__(self):
        self.collection = get_collection("messages")
        self.accounts = AccountService()
        self.notifications = NotificationService()

    def send(self, identity: Identity, recipient_id: str, content: str) -> dict:
        content = (content or "").strip()
        if not content:
            raise ValidationError("Message content is required")
        recipient = self.accounts.get(recipient_id)
        if str(recipient["_id"]) == identity.id:
            raise ValidationError("You cannot message yourself")

        doc = {
            "sender_id": identity.id,
            "recipient_id": str(recipient["_id"]),
            "content": content,
            "read": False,
            "created_at": utcnow(),
        }
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id

        try:
            self.notifications.create(
                doc["recipient_id"],
                f"New message from {identity.name}",
                NotificationKind.message,
                link=f"/messages/history/{identity.id}",
            )
        except Exception:
            self.collection.delete_one({"_id": result.inserted_id})
            raise
        message = serialize_doc(doc)
        message["is_mine"] = True
        return message

    def history(self, identity: Identity, other_id: str) -> List[dict]:
        """Full thread with another account, oldest first. Marks incoming as read."""
        other = self.accounts.get(other_id)
        other_id = str(other["_id"])

        self.collection.update_many(
            {"sender_id": other_id, "recipient_id": identity.id, "read": False},
            {"$set": {"read": True}}
        )
        messages = []
        for doc in self.collection.find(_between(identity.id, other_id)).sort(OLDEST_FIRST):
            message = serialize_doc(doc)
            message["is_mine"] = message["sender_id"] == identity.id
            messages.append(message)
        return messages

    def conversations(self, identity: Identity) -> List[dict]:
        """One entry per counterpart: last message and unread count, newest first."""
        cursor = self.collection.find(
            {"$or": [{"sender_id": identity.id}, {"recipient_id": identity.id}]}
        ).sort(NEWEST_FIRST)

        threads = {}
        for doc in cursor:
            other_id = doc["recipient_id"] if doc["sender_id"] == identity.id else doc["sender_id"]
            thread = threads.get(other_id)
            if thread is None:
                last = serialize_doc(doc)
                last["is_mine"] = last["sender_id"] == identity.id
                thread = threads[other_id] = {"with_user_id": other_id, "last_message": last, "unread_count": 0}
            if doc["recipient_id"] == identity.id and not doc.get("read"):
                thread["unread_count"] += 1

        users = self.accounts.summaries(threads.keys())
        result = []
        for other_id, thread in threads.items():
            thread["with_user"] = users.get(other_id)
            result.append(thread)
        return result

    def unread_count(self, identity: Identity) -> int:
        return self.collection.count_documents({"recipient_id": identity.id, "read": False})
