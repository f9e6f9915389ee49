"""
Application Service - applying to jobs and reviewing applicants.

Snapshot-on-Apply: when a student applies, their current profile is
copied into the application (profile_snapshot). The copy is written once
and never refreshed, so recruiters see the candidate as they were at the
time of applying, whatever the student edits afterwards.

Status changes go through the application state machine and are only
allowed for the recruiter who owns the job applied to.
"""

import logging
from datetime import datetime
from typing import List, Optional
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from placement_hub.core.auth import Identity
from placement_hub.core.errors import AlreadyApplied, IllegalTransition, JobNotOpen, NotFound, ValidationError
from placement_hub.core.policy import Action, ResourceKind, enforce
from placement_hub.core.status import ApplicationStatus, JobStatus, check_application_transition
from placement_hub.db.mongodb import get_collection
from placement_hub.services.account_service import AccountService
from placement_hub.services.interview_service import InterviewScheduler, to_naive_utc
from placement_hub.services.job_service import JobService
from placement_hub.services.mongo_service import NEWEST_FIRST, serialize_doc, serialize_docs, to_object_id, utcnow
from placement_hub.services.notification_service import NotificationKind, NotificationService

logger = logging.getLogger(__name__)


class ApplicationService:

    def __init__(self):
        self.collection = get_collection("applications")
        self.jobs = JobService()
        self.accounts = AccountService()
        self.notifications = NotificationService()
        self.interviews = InterviewScheduler(self.notifications)

    # ============================================================
    # STUDENT SIDE
    # ============================================================

    def apply(self, identity: Identity, job_id: str, cover_letter: Optional[str] = None) -> dict:
        """Create an application with a frozen profile snapshot."""
        job = self.jobs.get(job_id)
        job_id = str(job["_id"])
        if job["status"] != JobStatus.open.value:
            raise JobNotOpen()
        if self.collection.find_one({"job_id": job_id, "applicant_id": identity.id}, {"_id": 1}):
            raise AlreadyApplied()

        applicant = self.accounts.get(identity.id)
        now = utcnow()
        doc = {
            "job_id": job_id,
            "applicant_id": identity.id,
            "status": ApplicationStatus.pending.value,
            "cover_letter": cover_letter,
            "profile_snapshot": AccountService.snapshot(applicant),
            "created_at": now,
            "updated_at": now,
        }
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise AlreadyApplied()
        doc["_id"] = result.inserted_id

        # Application and confirmation succeed together or not at all
        try:
            self.notifications.create(
                identity.id,
                f"Your application for {job['title']} at {job['company']} has been submitted",
                NotificationKind.application_submitted,
                link=f"/applications/{result.inserted_id}",
            )
        except Exception:
            self.collection.delete_one({"_id": result.inserted_id})
            raise

        logger.info("Account %s applied to job %s", identity.user_id, job_id)
        application = serialize_doc(doc)
        application["job"] = serialize_doc(job)
        return application

    def list_for_applicant(self, account_id: str, limit: Optional[int] = None) -> List[dict]:
        cursor = self.collection.find({"applicant_id": account_id}).sort(NEWEST_FIRST)
        if limit:
            cursor = cursor.limit(limit)
        return self._with_jobs(serialize_docs(cursor))

    def get_for(self, identity: Identity, application_id: str) -> dict:
        application = self._get(application_id)
        job = self._parent_job(application)
        enforce(identity, ResourceKind.application, Action.read, application, parent=job)

        result = serialize_doc(application)
        result["job"] = serialize_doc(job)
        result["interviews"] = self.interviews.list_for_application(result["id"])
        return result

    # ============================================================
    # RECRUITER SIDE
    # ============================================================

    def list_for_job(self, identity: Identity, job_id: str, status: Optional[str] = None) -> List[dict]:
        job = self.jobs.get(job_id)
        enforce(identity, ResourceKind.job, Action.view_applications, job)

        query = {"job_id": str(job["_id"])}
        if status:
            query["status"] = ApplicationStatus(status).value
        return serialize_docs(self.collection.find(query).sort(NEWEST_FIRST))

    def update_status(self, identity: Identity, application_id: str, target) -> dict:
        application = self._get(application_id)
        job = self._parent_job(application)
        enforce(identity, ResourceKind.application, Action.change_status, application, parent=job)
        target = check_application_transition(application["status"], target)

        updated = self.collection.find_one_and_update(
            {"_id": application["_id"], "status": application["status"]},
            {"$set": {"status": target.value, "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        if updated is None:
            raise IllegalTransition("Application status changed concurrently, reload and retry")

        try:
            self.notifications.create(
                application["applicant_id"],
                f"Your application for {job['title']} at {job['company']} is now {target.value}",
                NotificationKind.application_status,
                link=f"/applications/{application_id}",
            )
        except Exception:
            self.collection.update_one(
                {"_id": application["_id"], "status": target.value},
                {"$set": {"status": application["status"], "updated_at": application["updated_at"]}}
            )
            raise

        logger.info(
            "Application %s: %s -> %s by %s",
            application_id, application["status"], target.value, identity.user_id
        )
        return serialize_doc(updated)

    def schedule_interview(
        self,
        identity: Identity,
        application_id: str,
        scheduled_time: datetime,
        meeting_link: str,
    ) -> dict:
        application = self._get(application_id)
        job = self._parent_job(application)
        enforce(identity, ResourceKind.application, Action.change_status, application, parent=job)

        if application["status"] != ApplicationStatus.accepted.value:
            raise IllegalTransition("Interviews can only be scheduled for accepted applications")
        if to_naive_utc(scheduled_time) <= utcnow():
            raise ValidationError("Interview time must be in the future")

        return self.interviews.schedule(
            str(application["_id"]),
            scheduled_time,
            meeting_link,
            application=application,
            job=job,
            scheduled_by=identity.id,
        )

    # ============================================================
    # HELPERS
    # ============================================================

    def _get(self, application_id: str) -> dict:
        application = self.collection.find_one({"_id": to_object_id(application_id, "Application")})
        if not application:
            raise NotFound("Application not found")
        return application

    def _parent_job(self, application: dict) -> Optional[dict]:
        return self.jobs.collection.find_one({"_id": to_object_id(application["job_id"], "Job")})

    def _with_jobs(self, applications: List[dict]) -> List[dict]:
        jobs = self.jobs.get_many([a["job_id"] for a in applications])
        for application in applications:
            application["job"] = jobs.get(application["job_id"])
        return applications
