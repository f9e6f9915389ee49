"""
Placement Hub - Main Application

FastAPI backend with:
- MongoDB for every resource (accounts, jobs, applications, forum, ...)
- JWT authentication with role-scoped access
- A uniform {success, ...} JSON envelope, errors included

Run: uvicorn placement_hub.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from placement_hub import __version__
from placement_hub.api.routes import api_router
from placement_hub.core.config import get_settings
from placement_hub.core.errors import register_exception_handlers
from placement_hub.core.logging_config import configure_logging
from placement_hub.db.mongodb import init_mongo_indexes, test_mongo_connection
from placement_hub.schemas.schemas import HealthResponse

settings = get_settings()
configure_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Placement Hub",
    description="""
    Campus placement portal connecting students with recruiters.

    ## Features
    - **Authentication**: JWT-based auth; institutional emails register as students
    - **Recruiters**: Company profile, job postings, applicant review, interviews
    - **Students**: Profile, job search, applications with a frozen profile snapshot
    - **Dashboard**: Applications, saved jobs and notifications per user
    - **Community**: Forum posts and comments with likes, direct messages, connections
    - **Reviews**: Student ratings of recruiter companies
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
    except Exception as e:
        logger.error("MongoDB index initialization failed: %s", e)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Placement Hub", "version": __version__}


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    return HealthResponse(
        status="healthy",
        mongodb="connected" if test_mongo_connection() else "disconnected"
    )
