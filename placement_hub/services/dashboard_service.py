"""
Dashboard Service - a user's own overview and saved jobs list.

Every entry point takes the `user_id` handle from the URL and checks it
against the caller before touching data, so another user's dashboard is
Forbidden whether or not it exists.
"""

from typing import List
from pymongo import ReturnDocument

from placement_hub.core.auth import Identity
from placement_hub.core.config import get_settings
from placement_hub.core.errors import Conflict
from placement_hub.core.policy import enforce_self
from placement_hub.db.mongodb import get_collection
from placement_hub.services.account_service import AccountService
from placement_hub.services.application_service import ApplicationService
from placement_hub.services.job_service import JobService
from placement_hub.services.mongo_service import utcnow
from placement_hub.services.notification_service import NotificationService


class DashboardService:

    def __init__(self):
        self.saved = get_collection("saved_jobs")
        self.accounts = AccountService()
        self.jobs = JobService()
        self.applications = ApplicationService()
        self.notifications = NotificationService()

    def overview(self, identity: Identity, user_id: str) -> dict:
        enforce_self(identity, user_id)
        account = self.accounts.get(identity.id)
        limit = get_settings().dashboard_recent_limit

        saved_jobs = self._saved_jobs(identity.id)
        return {
            "user_id": account["user_id"],
            "student_info": {
                "name": account.get("name"),
                "email": account.get("email"),
                "department": account.get("department"),
                "cgpa": account.get("cgpa"),
            },
            "applications": self.applications.list_for_applicant(identity.id, limit=limit),
            "saved_jobs_count": len(saved_jobs),
            "saved_jobs": saved_jobs,
            "notifications": self.notifications.list_for(identity.id, limit=limit),
            "unread_notifications": self.notifications.unread_count(identity.id),
        }

    def applications_for(self, identity: Identity, user_id: str) -> List[dict]:
        enforce_self(identity, user_id)
        return self.applications.list_for_applicant(identity.id)

    def notifications_for(self, identity: Identity, user_id: str) -> List[dict]:
        enforce_self(identity, user_id)
        return self.notifications.list_for(identity.id)

    # ============================================================
    # SAVED JOBS
    # ============================================================

    def saved_jobs(self, identity: Identity, user_id: str) -> List[dict]:
        enforce_self(identity, user_id)
        return self._saved_jobs(identity.id)

    def save_job(self, identity: Identity, user_id: str, job_id: str) -> None:
        enforce_self(identity, user_id)
        job_key = str(self.jobs.get(job_id)["_id"])

        # Ensure the list exists, then add only if absent (both atomic)
        self.saved.find_one_and_update(
            {"account_id": identity.id},
            {"$setOnInsert": {"job_ids": [], "created_at": utcnow()}},
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
        result = self.saved.update_one(
            {"account_id": identity.id, "job_ids": {"$ne": job_key}},
            {"$push": {"job_ids": job_key}}
        )
        if result.modified_count == 0:
            raise Conflict("Job already saved")

    def unsave_job(self, identity: Identity, user_id: str, job_id: str) -> None:
        enforce_self(identity, user_id)
        self.saved.update_one({"account_id": identity.id}, {"$pull": {"job_ids": job_id}})

    def _saved_jobs(self, account_id: str) -> List[dict]:
        saved = self.saved.find_one({"account_id": account_id})
        job_ids = saved["job_ids"] if saved else []
        jobs = self.jobs.get_many(job_ids)
        # Keep the order the user saved them in
        return [jobs[job_id] for job_id in job_ids if job_id in jobs]
