"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from placement_hub.api.routes.auth_routes import router as auth_router
from placement_hub.api.routes.profile_routes import router as profile_router
from placement_hub.api.routes.company_routes import router as company_router
from placement_hub.api.routes.job_routes import router as job_router
from placement_hub.api.routes.recruiter_routes import router as recruiter_router
from placement_hub.api.routes.application_routes import router as application_router
from placement_hub.api.routes.dashboard_routes import router as dashboard_router
from placement_hub.api.routes.notification_routes import router as notification_router
from placement_hub.api.routes.forum_routes import router as forum_router
from placement_hub.api.routes.message_routes import router as message_router
from placement_hub.api.routes.connection_routes import router as connection_router
from placement_hub.api.routes.review_routes import router as review_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(profile_router)
api_router.include_router(company_router)
api_router.include_router(job_router)
api_router.include_router(recruiter_router)
api_router.include_router(application_router)
api_router.include_router(dashboard_router)
api_router.include_router(notification_router)
api_router.include_router(forum_router)
api_router.include_router(message_router)
api_router.include_router(connection_router)
api_router.include_router(review_router)
