"""
Account Service - registration, login and profile management.

The one domain rule owned here is the registration-time email policy:
students register with the institutional domain, recruiters and admins
with any other domain. It is checked once, at creation.
"""

import copy
import logging
from typing import Dict, Iterable, List, Optional
from pymongo.errors import DuplicateKeyError

from placement_hub.core.auth import Identity, hash_password, verify_password
from placement_hub.core.config import get_settings
from placement_hub.core.errors import Conflict, InvalidRegistration, NotFound, Unauthenticated, ValidationError
from placement_hub.core.policy import Action, ResourceKind, enforce, enforce_self
from placement_hub.db.mongodb import get_collection
from placement_hub.services.mongo_service import serialize_doc, to_object_id, to_object_ids, utcnow

logger = logging.getLogger(__name__)

ROLES = ("student", "recruiter", "admin")

# Fields a user may change about themselves; email and role are fixed
PROFILE_FIELDS = (
    "name", "student_id", "department", "cgpa", "phone", "bio",
    "skills", "interests", "work_experience", "education",
)

# Fields frozen into an application at the moment of applying
SNAPSHOT_FIELDS = (
    "name", "email", "user_id", "student_id", "department", "cgpa", "phone",
    "skills", "interests", "work_experience", "education",
)

SUMMARY_FIELDS = ("user_id", "name", "email", "role", "department")


def email_domain(email: str) -> str:
    return email.rsplit("@", 1)[-1].strip().lower()


def check_domain_role(email: str, role: str) -> None:
    """Raise InvalidRegistration unless the email domain fits the role."""
    institutional = email_domain(email) == get_settings().institutional_email_domain
    if role == "student" and not institutional:
        raise InvalidRegistration("domain-role mismatch")
    if role != "student" and institutional:
        raise InvalidRegistration("domain-role mismatch")


def public_account(doc: Optional[dict]) -> Optional[dict]:
    """Serialized account without credentials."""
    account = serialize_doc(doc)
    if account is not None:
        account.pop("password_hash", None)
    return account


def account_summary(doc: dict) -> dict:
    summary = {"id": str(doc["_id"])}
    summary.update({field: doc.get(field) for field in SUMMARY_FIELDS})
    return summary


class AccountService:
    """Reads and writes the `accounts` collection."""

    def __init__(self):
        self.collection = get_collection("accounts")

    def register(self, name: str, email: str, password: str, role: str = "student") -> dict:
        name = (name or "").strip()
        email = (email or "").strip().lower()
        if not name or not email or not password:
            raise ValidationError("Name, email, and password are required")
        if role not in ROLES:
            raise ValidationError(f"role must be one of {', '.join(ROLES)}")

        check_domain_role(email, role)

        if self.collection.find_one({"email": email}, {"_id": 1}):
            raise Conflict("User with this email already exists")

        now = utcnow()
        doc = {
            "name": name,
            "email": email,
            "password_hash": hash_password(password),
            "role": role,
            "student_id": None,
            "department": None,
            "cgpa": None,
            "phone": None,
            "bio": None,
            "skills": [],
            "interests": [],
            "work_experience": [],
            "education": [],
            "created_at": now,
            "updated_at": now,
        }

        base_handle = email.split("@")[0]
        for attempt in range(1, 50):
            doc["user_id"] = base_handle if attempt == 1 else f"{base_handle}-{attempt}"
            if self.collection.find_one({"user_id": doc["user_id"]}, {"_id": 1}):
                continue
            try:
                result = self.collection.insert_one(doc)
            except DuplicateKeyError:
                if self.collection.find_one({"email": email}, {"_id": 1}):
                    raise Conflict("User with this email already exists")
                doc.pop("_id", None)
                continue
            logger.info("Registered %s account %s", role, doc["user_id"])
            return public_account({**doc, "_id": result.inserted_id})

        raise Conflict("Could not allocate a user id for this email")

    def authenticate(self, email: str, password: str) -> dict:
        """Return the stored account for valid credentials."""
        account = self.collection.find_one({"email": (email or "").strip().lower()})
        if not account or not verify_password(password, account["password_hash"]):
            logger.info("Failed login for %s", email)
            raise Unauthenticated("Invalid email or password")
        return account

    def get(self, account_id: str) -> dict:
        account = self.collection.find_one({"_id": to_object_id(account_id, "User")})
        if not account:
            raise NotFound("User not found")
        return account

    def find_by_email(self, email: str) -> dict:
        account = self.collection.find_one({"email": (email or "").strip().lower()})
        if not account:
            raise NotFound("User not found")
        return account

    def summaries(self, account_ids: Iterable[str]) -> Dict[str, dict]:
        """Map account id -> public summary, for populating references."""
        docs = self.collection.find(
            {"_id": {"$in": to_object_ids(set(account_ids))}},
            {field: 1 for field in SUMMARY_FIELDS}
        )
        return {str(doc["_id"]): account_summary(doc) for doc in docs}

    def update_profile(self, identity: Identity, user_id: str, changes: dict) -> dict:
        enforce_self(identity, user_id)
        account = self.get(identity.id)
        enforce(identity, ResourceKind.profile, Action.edit, account)

        updates = {k: v for k, v in changes.items() if k in PROFILE_FIELDS}
        if "name" in updates and not (updates["name"] or "").strip():
            raise ValidationError("Name cannot be empty")
        if not updates:
            raise ValidationError("No fields to update")

        updates["updated_at"] = utcnow()
        self.collection.update_one({"_id": account["_id"]}, {"$set": updates})
        return public_account(self.collection.find_one({"_id": account["_id"]}))

    def profile_status(self, account_id: str) -> dict:
        account = self.get(account_id)
        has_profile = bool(account.get("skills")) and bool(account.get("interests"))
        return {"has_profile": has_profile, "user_id": account["user_id"]}

    @staticmethod
    def snapshot(account: dict) -> dict:
        """
        Point-in-time copy of the applicant's profile.

        Deep-copied so later edits to nested lists (experience, education)
        can never reach an already submitted application.
        """
        snapshot = {field: copy.deepcopy(account.get(field)) for field in SNAPSHOT_FIELDS}
        for field in ("skills", "interests", "work_experience", "education"):
            if snapshot[field] is None:
                snapshot[field] = []
        snapshot["captured_at"] = utcnow()
        return snapshot

    def list_public(self, account_ids: List[str]) -> List[dict]:
        found = self.summaries(account_ids)
        return [found[account_id] for account_id in account_ids if account_id in found]
