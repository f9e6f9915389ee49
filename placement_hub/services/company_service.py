"""
Company Service - recruiter company profiles.

Each recruiter owns at most one company profile; jobs they post and
reviews students write point at it.
"""

from typing import Optional
from pymongo.errors import DuplicateKeyError

from placement_hub.core.auth import Identity
from placement_hub.core.errors import Conflict, NotFound, ValidationError
from placement_hub.core.policy import Action, ResourceKind, enforce
from placement_hub.db.mongodb import get_collection
from placement_hub.services.mongo_service import serialize_doc, to_object_id, utcnow

COMPANY_FIELDS = ("name", "industry", "website", "description", "location")


class CompanyService:

    def __init__(self):
        self.collection = get_collection("companies")

    def create(self, identity: Identity, data: dict) -> dict:
        if self.collection.find_one({"owner_id": identity.id}, {"_id": 1}):
            raise Conflict("Company profile already exists")

        now = utcnow()
        doc = {field: data.get(field) for field in COMPANY_FIELDS}
        doc.update({"owner_id": identity.id, "created_at": now, "updated_at": now})
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise Conflict("Company profile already exists")
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def get(self, company_id: str) -> dict:
        company = self.collection.find_one({"_id": to_object_id(company_id, "Company")})
        if not company:
            raise NotFound("Company not found")
        return company

    def get_for_owner(self, owner_id: str) -> Optional[dict]:
        return self.collection.find_one({"owner_id": owner_id})

    def update(self, identity: Identity, changes: dict) -> dict:
        company = self.get_for_owner(identity.id)
        if not company:
            raise NotFound("Company profile not found. Create profile first.")
        enforce(identity, ResourceKind.company, Action.edit, company)

        updates = {k: v for k, v in changes.items() if k in COMPANY_FIELDS}
        if not updates:
            raise ValidationError("No fields to update")
        updates["updated_at"] = utcnow()
        self.collection.update_one({"_id": company["_id"]}, {"$set": updates})
        return serialize_doc(self.collection.find_one({"_id": company["_id"]}))
