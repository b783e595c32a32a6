"""
Authentication Routes

POST /auth/register/student - Create a student account and profile
POST /auth/register/recruiter - Create a recruiter account and profile
POST /auth/login - Login as student or recruiter and get JWT token
GET /auth/me - Get current user info
PUT /auth/password - Change password
POST /auth/forgot-password - Email a password reset link
POST /auth/reset-password - Set a new password from a reset link
"""

from fastapi import APIRouter, Depends

from upiconnect.core.auth import get_current_user
from upiconnect.services import identity_service, student_service, recruiter_service
from upiconnect.schemas.schemas import (
    StudentRegisterRequest, RecruiterRegisterRequest, LoginRequest, TokenResponse,
    UserResponse, PasswordUpdateRequest, ForgotPasswordRequest, ResetPasswordRequest,
    MessageResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register/student", response_model=MessageResponse, status_code=201)
async def register_student(request: StudentRegisterRequest):
    """
    Register a student account together with the student profile.

    After registration, login to get access token.
    """
    student_service.register_student(
        email=request.email,
        password=request.password,
        full_name=request.full_name,
        enrollment_number=request.enrollment_number,
        degree=request.degree,
    )
    return MessageResponse(message="Registered successfully as student. Please login.")


@router.post("/register/recruiter", response_model=MessageResponse, status_code=201)
async def register_recruiter(request: RecruiterRegisterRequest):
    """Register a recruiter account together with the recruiter profile."""
    recruiter_service.register_recruiter(
        email=request.email,
        password=request.password,
        company_name=request.company_name,
        position=request.position,
    )
    return MessageResponse(message="Registered successfully as recruiter. Please login.")


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    session = student_service.login(request.email, request.password, request.role.value)
    return TokenResponse(
        access_token=session["access_token"],
        user_id=session["user_id"],
        role=session["role"],
    )


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user info."""
    return UserResponse(**user)


@router.put("/password", response_model=MessageResponse)
async def update_password(request: PasswordUpdateRequest, user: dict = Depends(get_current_user)):
    identity_service.update_password(user["user_id"], request.new_password)
    return MessageResponse(message="Password updated successfully")


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(request: ForgotPasswordRequest):
    """Always answers the same way, whether or not the email is registered."""
    identity_service.request_password_reset(request.email)
    return MessageResponse(message="If the email is registered, a reset link has been sent.")


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(request: ResetPasswordRequest):
    identity_service.reset_password(request.token, request.new_password)
    return MessageResponse(message="Password has been reset. Please login.")
