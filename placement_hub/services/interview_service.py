"""
Interview scheduling collaborator.

Engaged after a recruiter accepts an application. It only receives
(application_id, scheduled_time, meeting_link): it records the slot and
tells the applicant. Calendar invites are outside this service.
"""

from datetime import datetime, timezone
from typing import List

from pymongo import ASCENDING

from placement_hub.db.mongodb import get_collection
from placement_hub.services.mongo_service import serialize_doc, serialize_docs, utcnow
from placement_hub.services.notification_service import NotificationKind, NotificationService


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class InterviewScheduler:

    def __init__(self, notifications: NotificationService = None):
        self.collection = get_collection("interviews")
        self.notifications = notifications or NotificationService()

    def schedule(
        self,
        application_id: str,
        scheduled_time: datetime,
        meeting_link: str,
        *,
        application: dict,
        job: dict,
        scheduled_by: str,
    ) -> dict:
        doc = {
            "application_id": application_id,
            "job_id": application["job_id"],
            "applicant_id": application["applicant_id"],
            "scheduled_time": to_naive_utc(scheduled_time),
            "meeting_link": meeting_link,
            "scheduled_by": scheduled_by,
            "created_at": utcnow(),
        }
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id

        when = doc["scheduled_time"].strftime("%Y-%m-%d %H:%M UTC")
        try:
            self.notifications.create(
                application["applicant_id"],
                f"Interview scheduled for {job.get('title')} at {job.get('company')} on {when}",
                NotificationKind.interview,
                link=meeting_link,
            )
        except Exception:
            self.collection.delete_one({"_id": result.inserted_id})
            raise
        return serialize_doc(doc)

    def list_for_application(self, application_id: str) -> List[dict]:
        cursor = self.collection.find({"application_id": application_id}).sort("scheduled_time", ASCENDING)
        return serialize_docs(cursor)
