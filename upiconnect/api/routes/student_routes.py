"""
Student Routes

GET /students/profile - Get own profile (with academic paths and skills)
PUT /students/profile - Update profile
GET /students/applications - Get my applications
GET /students/summary - Accepted / rejected / pending counts
GET /students/academic-paths - List academic paths
POST /students/academic-paths - Add academic path
DELETE /students/academic-paths/{path_id} - Remove academic path
GET /students/skills - Get skills
POST /students/skills - Add skill
DELETE /students/skills/{skill_id} - Remove skill
GET /students/settings - Notification settings
PUT /students/settings - Save notification settings
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from upiconnect.core.auth import get_current_student
from upiconnect.services import student_service, application_service
from upiconnect.schemas.schemas import (
    StudentResponse, StudentUpdate, ApplicationResponse, StudentSummaryResponse,
    AcademicPathCreate, AcademicPathResponse, SkillAdd, SkillResponse,
    StudentSettings, MessageResponse, CreatedResponse
)

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("/profile", response_model=StudentResponse)
async def get_profile(student: dict = Depends(get_current_student)):
    """Get current student's profile with academic paths and skills."""
    profile = student_service.get_student(student["student_id"])
    if not profile:
        raise HTTPException(status_code=404, detail="Student profile not found")
    return profile


@router.put("/profile", response_model=MessageResponse)
async def update_profile(data: StudentUpdate, student: dict = Depends(get_current_student)):
    """
    Update student profile. Only provided fields are updated; an empty
    body changes nothing.
    """
    fields = data.model_dump(exclude_unset=True)
    student_service.update_student_profile(student["student_id"], fields)
    return MessageResponse(message="Profile updated successfully")


@router.get("/applications", response_model=List[ApplicationResponse])
async def get_my_applications(student: dict = Depends(get_current_student)):
    """Get all applications by current student, newest first."""
    return application_service.list_student_applications(student["student_id"])


@router.get("/summary", response_model=StudentSummaryResponse)
async def get_summary(student: dict = Depends(get_current_student)):
    return student_service.get_student_summary(student["student_id"])


# ============================================================
# ACADEMIC PATHS
# ============================================================

@router.get("/academic-paths", response_model=List[AcademicPathResponse])
async def list_academic_paths(student: dict = Depends(get_current_student)):
    return student_service.list_academic_paths(student["student_id"])


@router.post("/academic-paths", response_model=CreatedResponse, status_code=201)
async def add_academic_path(data: AcademicPathCreate, student: dict = Depends(get_current_student)):
    if data.end_year is not None and data.end_year < data.start_year:
        raise HTTPException(status_code=400, detail="end_year cannot be before start_year")

    path_id = student_service.add_academic_path(
        student["student_id"], data.school, data.level, data.start_year, data.end_year
    )
    return CreatedResponse(id=path_id, message="Academic path added")


@router.delete("/academic-paths/{path_id}", response_model=MessageResponse)
async def delete_academic_path(path_id: int, student: dict = Depends(get_current_student)):
    deleted = student_service.delete_academic_path(student["student_id"], path_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Academic path not found")
    return MessageResponse(message="Academic path removed")


# ============================================================
# SKILLS
# ============================================================

@router.get("/skills", response_model=List[SkillResponse])
async def get_skills(student: dict = Depends(get_current_student)):
    return student_service.list_student_skills(student["student_id"])


@router.post("/skills", response_model=CreatedResponse, status_code=201)
async def add_skill(data: SkillAdd, student: dict = Depends(get_current_student)):
    """Add skill to profile. Creates the skill if it doesn't exist."""
    skill_id = student_service.add_skill_to_student(student["student_id"], data.skill_name)
    return CreatedResponse(id=skill_id, message=f"Skill '{data.skill_name}' added")


@router.delete("/skills/{skill_id}", response_model=MessageResponse)
async def remove_skill(skill_id: int, student: dict = Depends(get_current_student)):
    deleted = student_service.remove_skill_from_student(student["student_id"], skill_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Skill not found in profile")
    return MessageResponse(message="Skill removed")


# ============================================================
# SETTINGS
# ============================================================

@router.get("/settings", response_model=StudentSettings)
async def get_settings(student: dict = Depends(get_current_student)):
    return student_service.get_student_settings(student["student_id"])


@router.put("/settings", response_model=MessageResponse)
async def save_settings(data: StudentSettings, student: dict = Depends(get_current_student)):
    student_service.save_student_settings(student["student_id"], data.model_dump())
    return MessageResponse(message="Settings saved")
