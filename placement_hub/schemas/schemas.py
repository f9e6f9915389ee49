"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Every response extends APIResponse, which carries the `success` flag of
the uniform envelope.
"""

from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum

from placement_hub.core.status import ApplicationStatus, JobStatus
from placement_hub.services.forum_service import ForumCategory


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    student = "student"
    recruiter = "recruiter"
    admin = "admin"


class JobType(str, Enum):
    full_time = "full-time"
    part_time = "part-time"
    internship = "internship"
    contract = "contract"


class JobStatusUpdate(BaseModel):
    status: JobStatus


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class APIResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None


class CountResponse(APIResponse):
    count: int


# ============================================================
# AUTH / ACCOUNT SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.student

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class WorkExperience(BaseModel):
    company: Optional[str] = None
    position: Optional[str] = None
    duration: Optional[str] = None
    description: Optional[str] = None

class EducationEntry(BaseModel):
    institution: Optional[str] = None
    degree: Optional[str] = None
    year: Optional[str] = None

class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    student_id: Optional[str] = None
    department: Optional[str] = None
    cgpa: Optional[float] = Field(None, ge=0, le=4)
    phone: Optional[str] = None
    bio: Optional[str] = None
    skills: Optional[List[str]] = None
    interests: Optional[List[str]] = None
    work_experience: Optional[List[WorkExperience]] = None
    education: Optional[List[EducationEntry]] = None

class AccountSummary(BaseModel):
    id: str
    user_id: str
    name: str
    email: str
    role: str
    department: Optional[str] = None

class Account(AccountSummary):
    student_id: Optional[str] = None
    cgpa: Optional[float] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    skills: List[str] = []
    interests: List[str] = []
    work_experience: List[WorkExperience] = []
    education: List[EducationEntry] = []
    created_at: datetime
    updated_at: Optional[datetime] = None

class RegisterResponse(APIResponse):
    user_id: str

class TokenResponse(APIResponse):
    token: str
    token_type: str = "bearer"
    user: AccountSummary

class AccountResponse(APIResponse):
    user: Account

class AccountSummaryResponse(APIResponse):
    user: AccountSummary

class AccountListResponse(APIResponse):
    users: List[AccountSummary]

class ProfileStatusResponse(APIResponse):
    has_profile: bool
    user_id: str


# ============================================================
# COMPANY SCHEMAS
# ============================================================

class CompanyCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=200)
    industry: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None

class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=200)
    industry: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None

class Company(BaseModel):
    id: str
    owner_id: str
    name: str
    industry: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    created_at: datetime

class CompanyResponse(APIResponse):
    company: Company


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    company: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    location: Optional[str] = None
    job_type: JobType = JobType.full_time
    required_skills: List[str] = []
    salary_min: Optional[float] = Field(None, ge=0)
    salary_max: Optional[float] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_salary_range(self):
        if self.salary_min is not None and self.salary_max is not None and self.salary_min > self.salary_max:
            raise ValueError("salary_min cannot exceed salary_max")
        return self

class JobUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=200)
    company: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[JobType] = None
    required_skills: Optional[List[str]] = None
    salary_min: Optional[float] = Field(None, ge=0)
    salary_max: Optional[float] = Field(None, ge=0)

class Job(BaseModel):
    id: str
    title: str
    company: str
    company_id: Optional[str] = None
    owner_id: str
    status: JobStatus
    description: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[str] = None
    required_skills: List[str] = []
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

class JobResponse(APIResponse):
    job: Job

class JobListResponse(APIResponse):
    count: int
    jobs: List[Job]


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(BaseModel):
    job_id: str
    cover_letter: Optional[str] = None

class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus

class InterviewCreate(BaseModel):
    scheduled_time: datetime
    meeting_link: str = Field(..., min_length=1)

class ProfileSnapshot(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    user_id: Optional[str] = None
    student_id: Optional[str] = None
    department: Optional[str] = None
    cgpa: Optional[float] = None
    phone: Optional[str] = None
    skills: List[str] = []
    interests: List[str] = []
    work_experience: List[WorkExperience] = []
    education: List[EducationEntry] = []
    captured_at: datetime

class Interview(BaseModel):
    id: str
    application_id: str
    job_id: str
    applicant_id: str
    scheduled_time: datetime
    meeting_link: str
    created_at: datetime

class Application(BaseModel):
    id: str
    job_id: str
    applicant_id: str
    status: ApplicationStatus
    cover_letter: Optional[str] = None
    profile_snapshot: ProfileSnapshot
    job: Optional[Job] = None
    interviews: Optional[List[Interview]] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

class ApplicationResponse(APIResponse):
    application: Application

class ApplicationListResponse(APIResponse):
    count: int
    applications: List[Application]

class InterviewResponse(APIResponse):
    interview: Interview


# ============================================================
# NOTIFICATION SCHEMAS
# ============================================================

class Notification(BaseModel):
    id: str
    recipient_id: str
    message: str
    kind: str
    link: Optional[str] = None
    read: bool
    created_at: datetime

class NotificationResponse(APIResponse):
    notification: Notification

class NotificationListResponse(APIResponse):
    notifications: List[Notification]


# ============================================================
# DASHBOARD SCHEMAS
# ============================================================

class SaveJobRequest(BaseModel):
    job_id: str

class StudentInfo(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    department: Optional[str] = None
    cgpa: Optional[float] = None

class DashboardData(BaseModel):
    user_id: str
    student_info: StudentInfo
    applications: List[Application]
    saved_jobs_count: int
    saved_jobs: List[Job]
    notifications: List[Notification]
    unread_notifications: int

class DashboardResponse(APIResponse):
    data: DashboardData

class SavedJobsResponse(APIResponse):
    saved_jobs: List[Job]


# ============================================================
# FORUM SCHEMAS
# ============================================================

class PostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    category: ForumCategory = ForumCategory.general
    tags: List[str] = []

class PostUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    category: Optional[ForumCategory] = None
    tags: Optional[List[str]] = None

class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1)

class Comment(BaseModel):
    id: str
    post_id: str
    author_id: str
    author_name: str
    content: str
    like_count: int
    is_liked: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

class Post(BaseModel):
    id: str
    author_id: str
    author_name: str
    title: str
    content: str
    category: ForumCategory
    tags: List[str] = []
    like_count: int
    is_liked: bool
    view_count: int
    comment_count: int
    created_at: datetime
    updated_at: Optional[datetime] = None

class PostDetail(Post):
    comments: List[Comment] = []

class PostResponse(APIResponse):
    post: Post

class PostDetailResponse(APIResponse):
    post: PostDetail
    comments: List[Comment]

class PostListResponse(APIResponse):
    count: int
    posts: List[Post]

class CommentResponse(APIResponse):
    comment: Comment

class CommentListResponse(APIResponse):
    count: int
    comments: List[Comment]

class LikeResponse(APIResponse):
    like_count: int
    is_liked: bool


# ============================================================
# MESSAGE SCHEMAS
# ============================================================

class MessageCreate(BaseModel):
    recipient_id: str
    content: str = Field(..., min_length=1, max_length=5000)

class Message(BaseModel):
    id: str
    sender_id: str
    recipient_id: str
    content: str
    read: bool
    is_mine: bool
    created_at: datetime

class Conversation(BaseModel):
    with_user_id: str
    with_user: Optional[AccountSummary] = None
    last_message: Message
    unread_count: int

class MessageSentResponse(APIResponse):
    message_data: Message

class MessageHistoryResponse(APIResponse):
    messages: List[Message]

class ConversationListResponse(APIResponse):
    conversations: List[Conversation]


# ============================================================
# CONNECTION SCHEMAS
# ============================================================

class ConnectionCreate(BaseModel):
    user_id: str = Field(..., description="Account id to connect with")

class ConnectionResponse(APIResponse):
    with_user: Optional[AccountSummary] = None
    created_at: datetime

class ConnectionStatusResponse(APIResponse):
    connected: bool


# ============================================================
# REVIEW SCHEMAS
# ============================================================

class ReviewCreate(BaseModel):
    company_id: str
    rating: int = Field(..., ge=1, le=5)
    work_culture: int = Field(..., ge=1, le=5)
    salary: int = Field(..., ge=1, le=5)
    career_growth: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)

class ReviewUpdate(BaseModel):
    rating: Optional[int] = Field(None, ge=1, le=5)
    work_culture: Optional[int] = Field(None, ge=1, le=5)
    salary: Optional[int] = Field(None, ge=1, le=5)
    career_growth: Optional[int] = Field(None, ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)

class Review(BaseModel):
    id: str
    company_id: str
    author_id: str
    author_name: str
    rating: int
    work_culture: int
    salary: int
    career_growth: int
    comment: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

class ReviewStats(BaseModel):
    total_reviews: int
    average_rating: Optional[float] = None
    average_work_culture: Optional[float] = None
    average_salary: Optional[float] = None
    average_career_growth: Optional[float] = None

class ReviewResponse(APIResponse):
    review: Review

class CompanyReviewsResponse(APIResponse):
    reviews: List[Review]
    stats: ReviewStats


# ============================================================
# HEALTH
# ============================================================

class HealthResponse(BaseModel):
    status: str
    mongodb: str
