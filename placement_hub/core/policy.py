"""
Resource Ownership Policy

One entry point decides whether a caller may perform an action on a
resource:

    authorize(identity, kind, action, resource, parent=None) -> Decision

Rules are registered per ResourceKind. enforce() is the raising variant
used by services; a denial is always reported as Forbidden, never as an
empty result.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from placement_hub.core.auth import Identity
from placement_hub.core.config import get_settings
from placement_hub.core.errors import Forbidden


class ResourceKind(str, Enum):
    job = "job"
    application = "application"
    post = "post"
    comment = "comment"
    profile = "profile"
    user_scope = "user_scope"
    notification = "notification"
    company = "company"
    review = "review"


class Action(str, Enum):
    read = "read"
    edit = "edit"
    delete = "delete"
    change_status = "change_status"
    view_applications = "view_applications"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = Decision(True)


def deny(reason: str) -> Decision:
    return Decision(False, reason)


def _owner_of(resource: dict, field: str) -> Optional[str]:
    value = resource.get(field)
    return str(value) if value is not None else None


# ============================================================
# RULES PER RESOURCE KIND
# ============================================================

def _job_rule(identity: Identity, action: Action, job: dict, parent: Optional[dict]) -> Decision:
    if action == Action.read:
        return ALLOW
    if identity.role == "recruiter" and _owner_of(job, "owner_id") == identity.id:
        return ALLOW
    return deny("not owner")


def _application_rule(identity: Identity, action: Action, application: dict, job: Optional[dict]) -> Decision:
    # Authority over an application is inherited from its job
    owns_job = (
        job is not None
        and identity.role == "recruiter"
        and _owner_of(job, "owner_id") == identity.id
    )
    if action == Action.read:
        if owns_job or _owner_of(application, "applicant_id") == identity.id:
            return ALLOW
        return deny("not applicant or job owner")
    if action == Action.change_status:
        if owns_job:
            return ALLOW
        return deny("only the job owner can change application status")
    return deny("applications cannot be modified")


def _content_rule(identity: Identity, action: Action, content: dict, parent: Optional[dict]) -> Decision:
    if action == Action.read:
        return ALLOW
    if _owner_of(content, "author_id") == identity.id:
        return ALLOW
    if action == Action.delete and identity.is_admin and get_settings().admin_forum_moderation:
        return ALLOW
    return deny("not author")


def _author_only_rule(identity: Identity, action: Action, content: dict, parent: Optional[dict]) -> Decision:
    if action == Action.read or _owner_of(content, "author_id") == identity.id:
        return ALLOW
    return deny("not author")


def _profile_rule(identity: Identity, action: Action, account: dict, parent: Optional[dict]) -> Decision:
    if action == Action.read:
        return ALLOW
    if _owner_of(account, "_id") == identity.id:
        return ALLOW
    return deny("You can only update your own profile.")


def _user_scope_rule(identity: Identity, action: Action, scope: dict, parent: Optional[dict]) -> Decision:
    # Decided on the requested handle alone, before any lookup, so that
    # "not yours" never leaks whether the user exists
    if scope.get("user_id") == identity.user_id:
        return ALLOW
    return deny("Access denied.")


def _notification_rule(identity: Identity, action: Action, notification: dict, parent: Optional[dict]) -> Decision:
    if _owner_of(notification, "recipient_id") == identity.id:
        return ALLOW
    return deny("not recipient")


def _company_rule(identity: Identity, action: Action, company: dict, parent: Optional[dict]) -> Decision:
    if action == Action.read:
        return ALLOW
    if _owner_of(company, "owner_id") == identity.id:
        return ALLOW
    return deny("not owner")


_RULES: Dict[ResourceKind, Callable[[Identity, Action, dict, Optional[dict]], Decision]] = {
    ResourceKind.job: _job_rule,
    ResourceKind.application: _application_rule,
    ResourceKind.post: _content_rule,
    ResourceKind.comment: _content_rule,
    ResourceKind.review: _author_only_rule,
    ResourceKind.profile: _profile_rule,
    ResourceKind.user_scope: _user_scope_rule,
    ResourceKind.notification: _notification_rule,
    ResourceKind.company: _company_rule,
}


def authorize(
    identity: Identity,
    kind: ResourceKind,
    action: Action,
    resource: dict,
    parent: Optional[dict] = None,
) -> Decision:
    rule = _RULES.get(ResourceKind(kind))
    if rule is None:
        return deny(f"no policy for {kind}")
    return rule(identity, Action(action), resource, parent)


def enforce(
    identity: Identity,
    kind: ResourceKind,
    action: Action,
    resource: dict,
    parent: Optional[dict] = None,
) -> None:
    decision = authorize(identity, kind, action, resource, parent)
    if not decision.allowed:
        raise Forbidden(decision.reason)


def enforce_self(identity: Identity, user_id: str) -> None:
    """Dashboard-style routes scoped by a `user_id` path parameter."""
    enforce(identity, ResourceKind.user_scope, Action.read, {"user_id": user_id})
