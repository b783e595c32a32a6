"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    student = "student"
    recruiter = "recruiter"


class JobStatus(str, Enum):
    open = "ABIERTA"
    closed = "CERRADA"


class SenderType(str, Enum):
    recruiter = "RECRUITER"
    student = "STUDENT"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class StudentRegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=2, max_length=200)
    enrollment_number: Optional[str] = Field(None, pattern=r"^[A-Za-z0-9]{8}$")
    degree: Optional[str] = None

class RecruiterRegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    company_name: str = Field(..., min_length=2, max_length=200)
    position: Optional[str] = None

class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    role: UserRole

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    role: str

class UserResponse(BaseModel):
    user_id: int
    email: str
    role: str

class PasswordUpdateRequest(BaseModel):
    new_password: str = Field(..., min_length=6)

class ForgotPasswordRequest(BaseModel):
    email: EmailStr

class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class StudentUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=2, max_length=200)
    degree: Optional[str] = None
    enrollment_number: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    phone: Optional[str] = None
    expected_salary_range: Optional[str] = None
    education_level: Optional[str] = None
    experience: Optional[str] = None
    soft_skills: Optional[List[str]] = None
    tech_skills: Optional[List[str]] = None
    average: Optional[float] = None
    status: Optional[str] = None
    service_social_status: Optional[str] = None
    practices_status: Optional[str] = None

class AcademicPathCreate(BaseModel):
    school: str = Field(..., min_length=1, max_length=200)
    level: str = Field(..., min_length=1, max_length=100)
    start_year: int = Field(..., ge=1950, le=2100)
    end_year: Optional[int] = Field(None, ge=1950, le=2100)

class AcademicPathResponse(BaseModel):
    id: int
    student_id: int
    school: str
    level: str
    start_year: int
    end_year: Optional[int] = None

class SkillAdd(BaseModel):
    skill_name: str = Field(..., min_length=1, max_length=100)

class SkillResponse(BaseModel):
    id: int
    name: str

class StudentResponse(BaseModel):
    id: int
    full_name: Optional[str] = None
    degree: Optional[str] = None
    enrollment_number: Optional[str] = None
    contact_email: Optional[str] = None
    phone: Optional[str] = None
    expected_salary_range: Optional[str] = None
    education_level: Optional[str] = None
    experience: Optional[str] = None
    soft_skills: List[str] = []
    tech_skills: List[str] = []
    average: Optional[float] = None
    status: Optional[str] = None
    service_social_status: Optional[str] = None
    practices_status: Optional[str] = None
    academic_paths: List[AcademicPathResponse] = []
    skills: List[SkillResponse] = []
    created_at: Optional[datetime] = None

class StudentSettings(BaseModel):
    email_notifications: bool = True
    status_change_notifications: bool = True
    weekly_summary: bool = False

class StudentSummaryResponse(BaseModel):
    total: int
    accepted: int
    rejected: int
    pending: int


# ============================================================
# RECRUITER SCHEMAS
# ============================================================

class RecruiterUpdate(BaseModel):
    company_name: Optional[str] = Field(None, min_length=2, max_length=200)
    position: Optional[str] = None
    contact_email: Optional[EmailStr] = None

class RecruiterResponse(BaseModel):
    id: int
    company_name: str
    position: Optional[str] = None
    contact_email: Optional[str] = None
    created_at: Optional[datetime] = None

class InterestCreate(BaseModel):
    interest: str = Field(..., min_length=1, max_length=200)

    @field_validator("interest")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("interest cannot be blank")
        return v.strip()

class InterestResponse(BaseModel):
    id: int
    recruiter_id: int
    interest: str
    created_at: Optional[datetime] = None

class RecruiterSettings(BaseModel):
    email_notifications: bool = True
    application_notifications: bool = True
    weekly_summary: bool = False


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    position: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    degree_required: Optional[str] = None
    salary: Optional[float] = Field(None, ge=0)
    available_slots: Optional[int] = Field(None, ge=0)
    status: JobStatus = JobStatus.open
    tags: List[str] = []

class JobUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    position: Optional[str] = None
    description: Optional[str] = None
    degree_required: Optional[str] = None
    salary: Optional[float] = Field(None, ge=0)
    tags: Optional[List[str]] = None

class JobAvailabilityUpdate(BaseModel):
    available_slots: int = Field(..., ge=0)

class JobStatusUpdate(BaseModel):
    status: JobStatus
    delete_applications: bool = False
    keep_application_id: Optional[int] = None

class JobResponse(BaseModel):
    id: int
    recruiter_id: int
    company_name: Optional[str] = None
    title: str
    position: Optional[str] = None
    description: Optional[str] = None
    degree_required: Optional[str] = None
    salary: Optional[float] = None
    available_slots: Optional[int] = None
    status: str
    tags: List[str] = []
    created_at: Optional[datetime] = None

class JobStatusResponse(BaseModel):
    message: str
    success: bool = True
    deleted_applications: int = 0


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationStatusUpdate(BaseModel):
    # Free text; PENDIENTE / ACEPTADO / RECHAZADO in practice but any value is stored
    status: str = Field(..., min_length=1, max_length=20)

class ApplicationStatusResponse(BaseModel):
    message: str
    success: bool = True
    notification_sent: Optional[bool] = None

class ApplicationResponse(BaseModel):
    id: int
    job_id: int
    student_id: int
    status: str
    created_at: Optional[datetime] = None
    job_title: Optional[str] = None
    job_position: Optional[str] = None
    recruiter_id: Optional[int] = None
    company_name: Optional[str] = None
    student_name: Optional[str] = None
    student_degree: Optional[str] = None
    student_phone: Optional[str] = None
    student_email: Optional[str] = None
    expected_salary_range: Optional[str] = None
    education_level: Optional[str] = None
    experience: Optional[str] = None

class ApplicantDetailResponse(BaseModel):
    student: StudentResponse
    applications: List[ApplicationResponse]


# ============================================================
# ANALYTICS SCHEMAS
# ============================================================

class JobStatsResponse(BaseModel):
    job_id: int
    title: str
    status: str
    available_slots: Optional[int] = None
    total_applications: int
    accepted: int
    rejected: int

class RecruiterAnalyticsResponse(BaseModel):
    total_jobs: int
    open_jobs: int
    closed_jobs: int
    total_applications: int
    accepted_applications: int
    rejected_applications: int
    acceptance_rate: int
    jobs: List[JobStatsResponse] = []

class PublicRecruiterProfileResponse(BaseModel):
    recruiter: RecruiterResponse
    jobs: List[JobResponse] = []
    interests: List[InterestResponse] = []


# ============================================================
# MESSAGING SCHEMAS
# ============================================================

class ConversationResponse(BaseModel):
    recruiter_id: int
    student_id: int
    job_id: int
    job_title: Optional[str] = None
    student_name: Optional[str] = None
    company_name: Optional[str] = None
    status: Optional[str] = None

class ChatMessageCreate(BaseModel):
    recruiter_id: Optional[int] = None
    student_id: Optional[int] = None
    job_id: int
    content: str = Field(..., max_length=5000)

class ChatMessageResponse(BaseModel):
    id: int
    recruiter_id: int
    student_id: int
    job_id: int
    content: str
    sender_type: SenderType
    created_at: Optional[datetime] = None


# ============================================================
# NOTIFICATION SCHEMAS
# ============================================================

class ApplicationAcceptedRequest(BaseModel):
    applicationId: Optional[int] = None

class ApplicationAcceptedResponse(BaseModel):
    ok: bool
    applicationId: int
    studentEmail: str


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class CreatedResponse(BaseModel):
    id: int
    message: str
    success: bool = True
