"""
Job Service - job postings and their lifecycle.

A posting belongs to exactly one recruiter (owner_id). Only the owner
may edit, close, fill or delete it. Status only moves forward:
Open -> Closed | Filled.
"""

import logging
from typing import List, Optional
from pymongo import ReturnDocument

from placement_hub.core.auth import Identity
from placement_hub.core.errors import Conflict, IllegalTransition, NotFound, ValidationError
from placement_hub.core.policy import Action, ResourceKind, enforce
from placement_hub.core.status import JobStatus, check_job_transition
from placement_hub.db.mongodb import get_collection
from placement_hub.services.mongo_service import (
    NEWEST_FIRST, contains_pattern, exact_pattern, serialize_doc, serialize_docs, to_object_id, to_object_ids, utcnow
)

logger = logging.getLogger(__name__)

JOB_FIELDS = (
    "title", "company", "description", "location", "job_type",
    "required_skills", "salary_min", "salary_max",
)


class JobService:

    def __init__(self):
        self.collection = get_collection("jobs")
        self.applications = get_collection("applications")
        self.saved_jobs = get_collection("saved_jobs")
        self.companies = get_collection("companies")

    def create(self, identity: Identity, data: dict) -> dict:
        doc = {field: data.get(field) for field in JOB_FIELDS}
        doc["required_skills"] = doc.get("required_skills") or []

        company = self.companies.find_one({"owner_id": identity.id})
        doc["company_id"] = str(company["_id"]) if company else None
        if not doc.get("company") and company:
            doc["company"] = company.get("name")
        if not doc.get("company"):
            raise ValidationError("company is required")

        now = utcnow()
        doc.update({
            "owner_id": identity.id,
            "status": JobStatus.open.value,
            "created_at": now,
            "updated_at": now,
        })
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info("Recruiter %s posted job %s", identity.user_id, result.inserted_id)
        return serialize_doc(doc)

    def get(self, job_id: str) -> dict:
        job = self.collection.find_one({"_id": to_object_id(job_id, "Job")})
        if not job:
            raise NotFound("Job not found")
        return job

    def get_many(self, job_ids: List[str]) -> dict:
        """Map job id -> serialized job, for populating references."""
        docs = self.collection.find({"_id": {"$in": to_object_ids(set(job_ids))}})
        return {str(doc["_id"]): serialize_doc(doc) for doc in docs}

    def search(
        self,
        keyword: Optional[str] = None,
        location: Optional[str] = None,
        skill: Optional[str] = None,
        job_type: Optional[str] = None,
        include_closed: bool = False,
    ) -> List[dict]:
        query = {}
        if not include_closed:
            query["status"] = JobStatus.open.value
        if keyword and keyword.strip():
            query["title"] = contains_pattern(keyword)
        if location and location.strip():
            query["location"] = contains_pattern(location)
        if skill and skill.strip():
            query["required_skills"] = exact_pattern(skill)
        if job_type:
            query["job_type"] = job_type
        return serialize_docs(self.collection.find(query).sort(NEWEST_FIRST))

    def list_for_owner(self, identity: Identity, status: Optional[str] = None) -> List[dict]:
        query = {"owner_id": identity.id}
        if status:
            query["status"] = JobStatus(status).value
        return serialize_docs(self.collection.find(query).sort(NEWEST_FIRST))

    def update(self, identity: Identity, job_id: str, changes: dict) -> dict:
        job = self.get(job_id)
        enforce(identity, ResourceKind.job, Action.edit, job)

        updates = {k: v for k, v in changes.items() if k in JOB_FIELDS}
        if not updates:
            raise ValidationError("No fields to update")

        salary_min = updates.get("salary_min", job.get("salary_min"))
        salary_max = updates.get("salary_max", job.get("salary_max"))
        if salary_min is not None and salary_max is not None and salary_min > salary_max:
            raise ValidationError("salary_min cannot exceed salary_max")

        updates["updated_at"] = utcnow()
        updated = self.collection.find_one_and_update(
            {"_id": job["_id"]},
            {"$set": updates},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(updated)

    def change_status(self, identity: Identity, job_id: str, target) -> dict:
        job = self.get(job_id)
        enforce(identity, ResourceKind.job, Action.change_status, job)
        target = check_job_transition(job["status"], target)

        # Compare-and-set on the status we validated against
        updated = self.collection.find_one_and_update(
            {"_id": job["_id"], "status": job["status"]},
            {"$set": {"status": target.value, "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        if updated is None:
            raise IllegalTransition("Job status changed concurrently, reload and retry")

        logger.info("Job %s: %s -> %s by %s", job_id, job["status"], target.value, identity.user_id)
        return serialize_doc(updated)

    def delete(self, identity: Identity, job_id: str) -> None:
        job = self.get(job_id)
        enforce(identity, ResourceKind.job, Action.delete, job)

        # Applications are never deleted, so a job that has them stays
        if self.applications.find_one({"job_id": str(job["_id"])}, {"_id": 1}):
            raise Conflict("Job has applications; close it instead of deleting")

        self.collection.delete_one({"_id": job["_id"]})
        self.saved_jobs.update_many({"job_ids": str(job["_id"])}, {"$pull": {"job_ids": str(job["_id"])}})
        logger.info("Job %s deleted by %s", job_id, identity.user_id)
