"""
Recruiter Routes

GET /recruiters/profile - Get own profile
PUT /recruiters/profile - Update profile
GET /recruiters/{recruiter_id}/public - Public profile (company, jobs, interests)
GET /recruiters/interests - List interests
POST /recruiters/interests - Add interest
DELETE /recruiters/interests/{interest_id} - Remove interest
GET /recruiters/settings - Notification settings
PUT /recruiters/settings - Save notification settings
GET /recruiters/applications - Applications to my jobs
GET /recruiters/applicants/{student_id} - Applicant profile
PUT /recruiters/applications/{application_id}/status - Accept / reject applicant
GET /recruiters/analytics - Job and application statistics
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Depends

from upiconnect.core.auth import get_current_user, get_current_recruiter
from upiconnect.core.errors import DomainError
from upiconnect.services import (
    recruiter_service, application_service, job_service, notification_service
)
from upiconnect.schemas.schemas import (
    RecruiterResponse, RecruiterUpdate, PublicRecruiterProfileResponse,
    InterestCreate, InterestResponse, RecruiterSettings, ApplicationResponse,
    ApplicantDetailResponse, ApplicationStatusUpdate, ApplicationStatusResponse,
    RecruiterAnalyticsResponse, MessageResponse, CreatedResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recruiters", tags=["Recruiters"])


@router.get("/profile", response_model=RecruiterResponse)
async def get_profile(recruiter: dict = Depends(get_current_recruiter)):
    profile = recruiter_service.get_recruiter(recruiter["recruiter_id"])
    if not profile:
        raise HTTPException(status_code=404, detail="Recruiter profile not found")
    return profile


@router.put("/profile", response_model=MessageResponse)
async def update_profile(data: RecruiterUpdate, recruiter: dict = Depends(get_current_recruiter)):
    """Update recruiter profile. Only provided fields are updated."""
    fields = data.model_dump(exclude_none=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")

    recruiter_service.update_recruiter_profile(recruiter["recruiter_id"], fields)
    return MessageResponse(message="Profile updated successfully")


@router.get("/{recruiter_id}/public", response_model=PublicRecruiterProfileResponse)
async def get_public_profile(recruiter_id: int, user: dict = Depends(get_current_user)):
    """Recruiter card visible to any signed-in user."""
    profile = recruiter_service.get_public_profile(recruiter_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Recruiter not found")
    return profile


# ============================================================
# INTERESTS
# ============================================================

@router.get("/interests", response_model=List[InterestResponse])
async def list_interests(recruiter: dict = Depends(get_current_recruiter)):
    return recruiter_service.list_interests(recruiter["recruiter_id"])


@router.post("/interests", response_model=CreatedResponse, status_code=201)
async def add_interest(data: InterestCreate, recruiter: dict = Depends(get_current_recruiter)):
    interest_id = recruiter_service.add_interest(recruiter["recruiter_id"], data.interest)
    return CreatedResponse(id=interest_id, message=f"Interest '{data.interest}' added")


@router.delete("/interests/{interest_id}", response_model=MessageResponse)
async def delete_interest(interest_id: int, recruiter: dict = Depends(get_current_recruiter)):
    deleted = recruiter_service.delete_interest(recruiter["recruiter_id"], interest_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Interest not found")
    return MessageResponse(message="Interest removed")


# ============================================================
# SETTINGS
# ============================================================

@router.get("/settings", response_model=RecruiterSettings)
async def get_settings(recruiter: dict = Depends(get_current_recruiter)):
    return recruiter_service.get_recruiter_settings(recruiter["recruiter_id"])


@router.put("/settings", response_model=MessageResponse)
async def save_settings(data: RecruiterSettings, recruiter: dict = Depends(get_current_recruiter)):
    recruiter_service.save_recruiter_settings(recruiter["recruiter_id"], data.model_dump())
    return MessageResponse(message="Settings saved")


# ============================================================
# APPLICATIONS
# ============================================================

@router.get("/applications", response_model=List[ApplicationResponse])
async def list_applications(recruiter: dict = Depends(get_current_recruiter)):
    """All applications to the recruiter's jobs, newest first."""
    return application_service.list_recruiter_applications(recruiter["recruiter_id"])


@router.get("/applicants/{student_id}", response_model=ApplicantDetailResponse)
async def get_applicant(student_id: int, recruiter: dict = Depends(get_current_recruiter)):
    """Profile of a student who applied to one of the recruiter's jobs."""
    detail = application_service.get_applicant_detail(recruiter["recruiter_id"], student_id)
    if not detail:
        raise HTTPException(status_code=404, detail="Applicant not found")
    return detail


@router.put("/applications/{application_id}/status", response_model=ApplicationStatusResponse)
async def update_application_status(application_id: int, data: ApplicationStatusUpdate,
                                    recruiter: dict = Depends(get_current_recruiter)):
    """
    Set the applicant status. Accepting also emails the student; if that
    email fails the status change still stands.
    """
    application = application_service.get_application(application_id)
    if not application or job_service.get_job_owner(application["job_id"]) != recruiter["recruiter_id"]:
        raise HTTPException(status_code=404, detail="Application not found or access denied")

    job_service.set_application_status(application_id, data.status)

    if data.status != job_service.APPLICATION_ACCEPTED:
        return ApplicationStatusResponse(message=f"Status updated to {data.status}")

    try:
        notification_service.notify_application_accepted(application_id)
    except DomainError as e:
        logger.error("application-accepted notify error: %s", e)
        return ApplicationStatusResponse(
            message="Status updated, but the email notification could not be sent.",
            notification_sent=False,
        )

    return ApplicationStatusResponse(
        message="Status updated and the student was notified by email.",
        notification_sent=True,
    )


@router.get("/analytics", response_model=RecruiterAnalyticsResponse)
async def get_analytics(recruiter: dict = Depends(get_current_recruiter)):
    return recruiter_service.get_recruiter_analytics(recruiter["recruiter_id"])
