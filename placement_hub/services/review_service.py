"""
Review Service - student reviews of recruiter companies.

One review per student per company; only the author edits or deletes it.
"""

from typing import List, Optional
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from placement_hub.core.auth import Identity
from placement_hub.core.errors import Conflict, NotFound, ValidationError
from placement_hub.core.policy import Action, ResourceKind, enforce
from placement_hub.db.mongodb import get_collection
from placement_hub.services.company_service import CompanyService
from placement_hub.services.mongo_service import NEWEST_FIRST, serialize_doc, serialize_docs, to_object_id, utcnow

SCORE_FIELDS = ("rating", "work_culture", "salary", "career_growth")


def _average(values: List[float]) -> Optional[float]:
    if not values:
        return None
    return round(sum(values) / len(values), 2)


class ReviewService:

    def __init__(self):
        self.collection = get_collection("reviews")
        self.companies = CompanyService()

    def submit(self, identity: Identity, company_id: str, scores: dict, comment: Optional[str] = None) -> dict:
        company = self.companies.get(company_id)
        company_id = str(company["_id"])

        if self.collection.find_one({"company_id": company_id, "author_id": identity.id}, {"_id": 1}):
            raise Conflict("You have already reviewed this company")

        now = utcnow()
        doc = {field: scores.get(field) for field in SCORE_FIELDS}
        doc.update({
            "company_id": company_id,
            "author_id": identity.id,
            "author_name": identity.name,
            "comment": comment,
            "created_at": now,
            "updated_at": now,
        })
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise Conflict("You have already reviewed this company")
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def update(self, identity: Identity, review_id: str, changes: dict) -> dict:
        review = self._get(review_id)
        enforce(identity, ResourceKind.review, Action.edit, review)

        updates = {k: v for k, v in changes.items() if k in SCORE_FIELDS + ("comment",)}
        if not updates:
            raise ValidationError("No fields to update")
        updates["updated_at"] = utcnow()
        updated = self.collection.find_one_and_update(
            {"_id": review["_id"]},
            {"$set": updates},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(updated)

    def delete(self, identity: Identity, review_id: str) -> None:
        review = self._get(review_id)
        enforce(identity, ResourceKind.review, Action.delete, review)
        self.collection.delete_one({"_id": review["_id"]})

    def list_for_company(self, company_id: str) -> dict:
        company = self.companies.get(company_id)
        reviews = serialize_docs(
            self.collection.find({"company_id": str(company["_id"])}).sort(NEWEST_FIRST)
        )
        stats = {"total_reviews": len(reviews)}
        for field in SCORE_FIELDS:
            key = "average_rating" if field == "rating" else f"average_{field}"
            stats[key] = _average([r[field] for r in reviews if r.get(field) is not None])
        return {"reviews": reviews, "stats": stats}

    def _get(self, review_id: str) -> dict:
        review = self.collection.find_one({"_id": to_object_id(review_id, "Review")})
        if not review:
            raise NotFound("Review not found")
        return review
