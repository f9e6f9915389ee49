"""
Application Routes

GET /applications/my-applications - The caller's applications with their jobs
GET /applications/{application_id} - One application (applicant or job owner)
"""

from fastapi import APIRouter, Depends

from placement_hub.core.auth import Identity, get_current_user
from placement_hub.services.application_service import ApplicationService
from placement_hub.schemas.schemas import ApplicationListResponse, ApplicationResponse

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("/my-applications", response_model=ApplicationListResponse)
async def my_applications(user: Identity = Depends(get_current_user)):
    applications = ApplicationService().list_for_applicant(user.id)
    return ApplicationListResponse(count=len(applications), applications=applications)


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(application_id: str, user: Identity = Depends(get_current_user)):
    """The stored snapshot is returned as captured at apply time."""
    return ApplicationResponse(application=ApplicationService().get_for(user, application_id))
