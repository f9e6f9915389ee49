"""
Dashboard Routes

All paths are scoped by the caller's own `user_id` handle; any other
handle is Forbidden.

GET /dashboard/applications/{user_id} - All own applications
GET /dashboard/notifications/{user_id} - All own notifications
GET /dashboard/saved-jobs/{user_id} - Saved jobs
POST /dashboard/saved-jobs/{user_id} - Save a job
DELETE /dashboard/saved-jobs/{user_id}/{job_id} - Unsave a job
GET /dashboard/{user_id} - Overview
"""

from fastapi import APIRouter, Depends

from placement_hub.core.auth import Identity, get_current_user
from placement_hub.services.dashboard_service import DashboardService
from placement_hub.schemas.schemas import (
    APIResponse, ApplicationListResponse, DashboardResponse, NotificationListResponse,
    SavedJobsResponse, SaveJobRequest
)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/applications/{user_id}", response_model=ApplicationListResponse)
async def dashboard_applications(user_id: str, user: Identity = Depends(get_current_user)):
    applications = DashboardService().applications_for(user, user_id)
    return ApplicationListResponse(count=len(applications), applications=applications)


@router.get("/notifications/{user_id}", response_model=NotificationListResponse)
async def dashboard_notifications(user_id: str, user: Identity = Depends(get_current_user)):
    return NotificationListResponse(notifications=DashboardService().notifications_for(user, user_id))


@router.get("/saved-jobs/{user_id}", response_model=SavedJobsResponse)
async def saved_jobs(user_id: str, user: Identity = Depends(get_current_user)):
    return SavedJobsResponse(saved_jobs=DashboardService().saved_jobs(user, user_id))


@router.post("/saved-jobs/{user_id}", response_model=APIResponse)
async def save_job(user_id: str, data: SaveJobRequest, user: Identity = Depends(get_current_user)):
    """Saving a job that is already saved is reported, not ignored."""
    DashboardService().save_job(user, user_id, data.job_id)
    return APIResponse(message="Job saved successfully")


@router.delete("/saved-jobs/{user_id}/{job_id}", response_model=APIResponse)
async def unsave_job(user_id: str, job_id: str, user: Identity = Depends(get_current_user)):
    DashboardService().unsave_job(user, user_id, job_id)
    return APIResponse(message="Job removed from saved")


@router.get("/{user_id}", response_model=DashboardResponse)
async def dashboard(user_id: str, user: Identity = Depends(get_current_user)):
    return DashboardResponse(data=DashboardService().overview(user, user_id))
