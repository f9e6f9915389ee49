import pytest

from placement_hub.core.auth import Identity
from placement_hub.core.errors import Forbidden
from placement_hub.core.policy import Action, ResourceKind, authorize, enforce, enforce_self

STUDENT = Identity(id="s1", user_id="alice", role="student", name="Alice")
OTHER_STUDENT = Identity(id="s2", user_id="bilal", role="student", name="Bilal")
RECRUITER = Identity(id="r1", user_id="hr", role="recruiter", name="Acme")
OTHER_RECRUITER = Identity(id="r2", user_id="talent", role="recruiter", name="Globex")
ADMIN = Identity(id="a1", user_id="admin", role="admin", name="Admin")

JOB = {"_id": "j1", "owner_id": "r1", "status": "Open"}
APPLICATION = {"_id": "ap1", "job_id": "j1", "applicant_id": "s1", "status": "Pending"}
POST = {"_id": "p1", "author_id": "s1"}


def test_job_mutations_require_the_owning_recruiter() -> None:
    for action in (Action.edit, Action.change_status, Action.delete, Action.view_applications):
        assert authorize(RECRUITER, ResourceKind.job, action, JOB)
        decision = authorize(OTHER_RECRUITER, ResourceKind.job, action, JOB)
        assert not decision.allowed
        assert decision.reason == "not owner"


def test_anyone_reads_jobs() -> None:
    assert authorize(STUDENT, ResourceKind.job, Action.read, JOB)


def test_student_with_matching_id_still_cannot_mutate_job() -> None:
    impostor = Identity(id="r1", user_id="x", role="student", name="X")
    assert not authorize(impostor, ResourceKind.job, Action.edit, JOB)


def test_application_status_inherits_job_ownership() -> None:
    assert authorize(RECRUITER, ResourceKind.application, Action.change_status, APPLICATION, parent=JOB)
    assert not authorize(OTHER_RECRUITER, ResourceKind.application, Action.change_status, APPLICATION, parent=JOB)
    assert not authorize(STUDENT, ResourceKind.application, Action.change_status, APPLICATION, parent=JOB)


def test_application_read_by_applicant_or_job_owner() -> None:
    assert authorize(STUDENT, ResourceKind.application, Action.read, APPLICATION, parent=JOB)
    assert authorize(RECRUITER, ResourceKind.application, Action.read, APPLICATION, parent=JOB)
    assert not authorize(OTHER_STUDENT, ResourceKind.application, Action.read, APPLICATION, parent=JOB)


def test_forum_content_author_and_admin_moderation() -> None:
    assert authorize(STUDENT, ResourceKind.post, Action.edit, POST)
    assert not authorize(OTHER_STUDENT, ResourceKind.post, Action.edit, POST)
    assert not authorize(ADMIN, ResourceKind.post, Action.edit, POST)
    assert authorize(ADMIN, ResourceKind.post, Action.delete, POST)
    assert authorize(ADMIN, ResourceKind.comment, Action.delete, POST)


def test_reviews_have_no_moderator() -> None:
    review = {"_id": "rv1", "author_id": "s1"}
    assert authorize(STUDENT, ResourceKind.review, Action.delete, review)
    assert not authorize(ADMIN, ResourceKind.review, Action.delete, review)


def test_enforce_raises_forbidden_with_reason() -> None:
    with pytest.raises(Forbidden) as exc:
        enforce(OTHER_RECRUITER, ResourceKind.job, Action.change_status, JOB)
    assert exc.value.message == "not owner"
    assert exc.value.status_code == 403


def test_user_scope_compares_handles() -> None:
    enforce_self(STUDENT, "alice")
    with pytest.raises(Forbidden):
        enforce_self(STUDENT, "bilal")
    with pytest.raises(Forbidden):
        enforce_self(STUDENT, "nobody-by-this-name")


def test_notifications_belong_to_recipient() -> None:
    notification = {"_id": "n1", "recipient_id": "s1"}
    assert authorize(STUDENT, ResourceKind.notification, Action.edit, notification)
    assert not authorize(OTHER_STUDENT, ResourceKind.notification, Action.edit, notification)
