"""
Job Routes

GET /jobs/search - Search jobs (open ones by default)
GET /jobs/{job_id} - Get job details
POST /jobs/apply - Apply to a job (student only)
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from placement_hub.core.auth import Identity, get_current_student, get_current_user
from placement_hub.services.application_service import ApplicationService
from placement_hub.services.job_service import JobService
from placement_hub.services.mongo_service import serialize_doc
from placement_hub.schemas.schemas import (
    ApplicationCreate, ApplicationResponse, JobListResponse, JobResponse, JobType
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.get("/search", response_model=JobListResponse)
async def search_jobs(
    keyword: Optional[str] = Query(None, description="Search in title"),
    location: Optional[str] = Query(None),
    skill: Optional[str] = Query(None, description="Filter by required skill"),
    job_type: Optional[JobType] = Query(None),
    include_closed: bool = Query(False),
    user: Identity = Depends(get_current_user)
):
    """List job postings matching the filters, newest first."""
    jobs = JobService().search(
        keyword=keyword,
        location=location,
        skill=skill,
        job_type=job_type.value if job_type else None,
        include_closed=include_closed,
    )
    return JobListResponse(count=len(jobs), jobs=jobs)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, user: Identity = Depends(get_current_user)):
    return JobResponse(job=serialize_doc(JobService().get(job_id)))


@router.post("/apply", response_model=ApplicationResponse, status_code=201)
async def apply_to_job(application: ApplicationCreate, student: Identity = Depends(get_current_student)):
    """
    Apply to a job. Students only, once per job, and only while it is Open.

    The student's current profile is frozen into the application.
    """
    created = ApplicationService().apply(student, application.job_id, application.cover_letter)
    return ApplicationResponse(message="Application submitted", application=created)
