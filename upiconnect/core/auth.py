"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies for protected routes
"""

import hashlib
import secrets
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from passlib.context import CryptContext

from upiconnect.core.config import get_settings
from upiconnect.db.postgres import get_db_session
from upiconnect.repositories import users as users_repo
from upiconnect.repositories import students as students_repo
from upiconnect.repositories import recruiters as recruiters_repo

settings = get_settings()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor
bearer_scheme = HTTPBearer()


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def generate_reset_token() -> str:
    """Random URL-safe token sent by email; only its hash is stored."""
    return secrets.token_urlsafe(32)


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(credentials.credentials)
    if not payload:
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise credentials_exception

    # Verify user exists
    with get_db_session() as db:
        user = users_repo.get_user_by_id(db, int(user_id))

    if not user:
        raise credentials_exception

    if not user["is_active"]:
        raise HTTPException(status_code=403, detail="Account deactivated")

    return {"user_id": user["id"], "email": user["email"], "role": user["role"]}


async def get_current_student(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require student role and an existing student profile."""
    if user["role"] != "student":
        raise HTTPException(status_code=403, detail="Students only")

    with get_db_session() as db:
        exists = students_repo.student_exists(db, user["user_id"])

    if not exists:
        raise HTTPException(status_code=404, detail="Student profile not found. Register as a student first.")

    user["student_id"] = user["user_id"]
    return user


async def get_current_recruiter(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require recruiter role and an existing recruiter profile."""
    if user["role"] != "recruiter":
        raise HTTPException(status_code=403, detail="Recruiters only")

    with get_db_session() as db:
        exists = recruiters_repo.recruiter_exists(db, user["user_id"])

    if not exists:
        raise HTTPException(status_code=404, detail="Recruiter profile not found. Register as a recruiter first.")

    user["recruiter_id"] = user["user_id"]
    return user
