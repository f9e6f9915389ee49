"""
Job and application lifecycles.

    Job:          Open -> Closed | Filled          (Closed, Filled terminal)
    Application:  Pending -> Reviewed | Accepted | Rejected
                  Reviewed -> Accepted | Rejected  (Accepted, Rejected terminal)

Reviewed is optional: a recruiter may accept or reject straight from Pending.
"""

from enum import Enum
from typing import Dict, FrozenSet

from placement_hub.core.errors import IllegalTransition


class JobStatus(str, Enum):
    open = "Open"
    closed = "Closed"
    filled = "Filled"


class ApplicationStatus(str, Enum):
    pending = "Pending"
    reviewed = "Reviewed"
    accepted = "Accepted"
    rejected = "Rejected"


JOB_TRANSITIONS: Dict[JobStatus, FrozenSet[JobStatus]] = {
    JobStatus.open: frozenset({JobStatus.closed, JobStatus.filled}),
    JobStatus.closed: frozenset(),
    JobStatus.filled: frozenset(),
}

APPLICATION_TRANSITIONS: Dict[ApplicationStatus, FrozenSet[ApplicationStatus]] = {
    ApplicationStatus.pending: frozenset({
        ApplicationStatus.reviewed,
        ApplicationStatus.accepted,
        ApplicationStatus.rejected,
    }),
    ApplicationStatus.reviewed: frozenset({ApplicationStatus.accepted, ApplicationStatus.rejected}),
    ApplicationStatus.accepted: frozenset(),
    ApplicationStatus.rejected: frozenset(),
}


def check_job_transition(current, target) -> JobStatus:
    """Return the target status, or raise IllegalTransition."""
    current, target = JobStatus(current), JobStatus(target)
    if target not in JOB_TRANSITIONS[current]:
        raise IllegalTransition(f"Cannot change job status from {current.value} to {target.value}")
    return target


def check_application_transition(current, target) -> ApplicationStatus:
    """Return the target status, or raise IllegalTransition."""
    current, target = ApplicationStatus(current), ApplicationStatus(target)
    if target not in APPLICATION_TRANSITIONS[current]:
        raise IllegalTransition(
            f"Cannot change application status from {current.value} to {target.value}"
        )
    return target
