"""
Recruiter Routes

POST /recruiter/jobs - Create job posting
GET /recruiter/jobs - List own job postings
PUT /recruiter/jobs/{job_id} - Edit own job posting
PATCH /recruiter/jobs/{job_id}/status - Close or fill own job posting
DELETE /recruiter/jobs/{job_id} - Delete own job posting (only without applications)
GET /recruiter/jobs/{job_id}/applications - Applications to own job posting
PATCH /recruiter/applications/{application_id}/status - Review, accept or reject
POST /recruiter/applications/{application_id}/interview - Schedule interview for accepted application
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from placement_hub.core.auth import Identity, get_current_recruiter
from placement_hub.core.status import ApplicationStatus, JobStatus
from placement_hub.services.application_service import ApplicationService
from placement_hub.services.job_service import JobService
from placement_hub.schemas.schemas import (
    APIResponse, ApplicationListResponse, ApplicationResponse, ApplicationStatusUpdate,
    InterviewCreate, InterviewResponse, JobCreate, JobListResponse, JobResponse,
    JobStatusUpdate, JobUpdate
)

router = APIRouter(prefix="/recruiter", tags=["Recruiters"])


# ============================================================
# JOB POSTINGS
# ============================================================

@router.post("/jobs", response_model=JobResponse, status_code=201)
async def create_job(job: JobCreate, recruiter: Identity = Depends(get_current_recruiter)):
    """Create a new job posting. It starts Open."""
    created = JobService().create(recruiter, job.model_dump(mode="json"))
    return JobResponse(message="Job created successfully", job=created)


@router.get("/jobs", response_model=JobListResponse)
async def list_my_jobs(
    status: Optional[JobStatus] = Query(None),
    recruiter: Identity = Depends(get_current_recruiter)
):
    jobs = JobService().list_for_owner(recruiter, status.value if status else None)
    return JobListResponse(count=len(jobs), jobs=jobs)


@router.put("/jobs/{job_id}", response_model=JobResponse)
async def update_job(job_id: str, update: JobUpdate, recruiter: Identity = Depends(get_current_recruiter)):
    """Edit a job posting. Status is changed through the status endpoint only."""
    updated = JobService().update(recruiter, job_id, update.model_dump(exclude_unset=True, mode="json"))
    return JobResponse(message="Job updated successfully", job=updated)


@router.patch("/jobs/{job_id}/status", response_model=JobResponse)
async def change_job_status(
    job_id: str,
    update: JobStatusUpdate,
    recruiter: Identity = Depends(get_current_recruiter)
):
    """Open -> Closed or Open -> Filled. Closed and Filled are final."""
    updated = JobService().change_status(recruiter, job_id, update.status)
    return JobResponse(message=f"Job marked as {updated['status']}", job=updated)


@router.delete("/jobs/{job_id}", response_model=APIResponse)
async def delete_job(job_id: str, recruiter: Identity = Depends(get_current_recruiter)):
    JobService().delete(recruiter, job_id)
    return APIResponse(message="Job deleted successfully")


# ============================================================
# APPLICANTS
# ============================================================

@router.get("/jobs/{job_id}/applications", response_model=ApplicationListResponse)
async def list_job_applications(
    job_id: str,
    status: Optional[ApplicationStatus] = Query(None),
    recruiter: Identity = Depends(get_current_recruiter)
):
    """Applications to one of the recruiter's jobs, each with the applicant's snapshot."""
    applications = ApplicationService().list_for_job(recruiter, job_id, status.value if status else None)
    return ApplicationListResponse(count=len(applications), applications=applications)


@router.patch("/applications/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    recruiter: Identity = Depends(get_current_recruiter)
):
    updated = ApplicationService().update_status(recruiter, application_id, update.status)
    return ApplicationResponse(message=f"Application {updated['status']}", application=updated)


@router.post("/applications/{application_id}/interview", response_model=InterviewResponse, status_code=201)
async def schedule_interview(
    application_id: str,
    data: InterviewCreate,
    recruiter: Identity = Depends(get_current_recruiter)
):
    interview = ApplicationService().schedule_interview(
        recruiter, application_id, data.scheduled_time, data.meeting_link
    )
    return InterviewResponse(message="Interview scheduled", interview=interview)
