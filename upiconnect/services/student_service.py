"""
Student Service

Registration, login for either role, the student profile, academic paths,
skills, notification settings and the application summary.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from upiconnect.core.errors import DomainError, ErrorCode
from upiconnect.db.postgres import get_db_session
from upiconnect.repositories import dump_tags
from upiconnect.repositories import students as students_repo
from upiconnect.repositories import recruiters as recruiters_repo
from upiconnect.repositories import applications as applications_repo
from upiconnect.repositories import settings as settings_repo
from upiconnect.services import identity_service
from upiconnect.services.job_service import (
    APPLICATION_ACCEPTED, APPLICATION_REJECTED, APPLICATION_PENDING
)

logger = logging.getLogger(__name__)

ENROLLMENT_PATTERN = re.compile(r"^[A-Za-z0-9]{8}$")

DEFAULT_STUDENT_SETTINGS = {
    "email_notifications": True,
    "status_change_notifications": True,
    "weekly_summary": False,
}


def validate_enrollment_number(value: str) -> bool:
    """Enrollment numbers are exactly 8 letters or digits."""
    return bool(ENROLLMENT_PATTERN.match(value or ""))


def register_student(email: str, password: str, full_name: str,
                     enrollment_number: Optional[str] = None,
                     degree: Optional[str] = None) -> int:
    """
    Create the account and the student row in one transaction.
    A duplicate enrollment number fails with STUDENT_INSERT_ERROR and
    leaves no account behind.
    """
    with get_db_session() as db:
        user_id = identity_service.sign_up(db, email, password, "student")
        try:
            students_repo.insert_student(
                db, user_id, full_name, enrollment_number, email.lower().strip(), degree
            )
        except SQLAlchemyError as e:
            logger.error("insert student error: %s", e)
            raise DomainError(ErrorCode.STUDENT_INSERT_ERROR, str(e)) from e
    logger.info("Registered student %s", user_id)
    return user_id


def login(email: str, password: str, role: str) -> dict:
    """
    Sign in and make sure the account has a profile for the requested role.
    """
    session = identity_service.sign_in_with_password(email, password)
    if session["role"] != role:
        raise DomainError(ErrorCode.LOGIN_ERROR, f"account is not a {role}")

    try:
        with get_db_session() as db:
            if role == "student":
                has_profile = students_repo.student_exists(db, session["user_id"])
            else:
                has_profile = recruiters_repo.recruiter_exists(db, session["user_id"])
    except SQLAlchemyError as e:
        raise DomainError(ErrorCode.LOGIN_ERROR, str(e)) from e

    if not has_profile:
        raise DomainError(ErrorCode.LOGIN_ERROR, f"no {role} profile for this account")
    return session


# ============================================================
# PROFILE
# ============================================================

def get_student(student_id: int) -> Optional[dict]:
    """Profile plus academic paths and linked skills."""
    try:
        with get_db_session() as db:
            student = students_repo.get_student(db, student_id)
            if not student:
                return None
            student["academic_paths"] = students_repo.list_academic_paths(db, student_id)
            student["skills"] = students_repo.list_student_skills(db, student_id)
    except SQLAlchemyError as e:
        logger.error("load student error: %s", e)
        raise DomainError(ErrorCode.STUDENT_LOAD_ERROR, str(e)) from e
    return student


def update_student_profile(student_id: int, fields: Dict[str, Any]) -> int:
    """
    Write only the provided fields. An empty payload is a no-op.
    Invalid enrollment numbers or averages are rejected before the update.
    """
    if not fields:
        return 0

    if fields.get("enrollment_number") is not None:
        if not validate_enrollment_number(fields["enrollment_number"]):
            raise DomainError(
                ErrorCode.STUDENT_UPDATE_ERROR,
                "enrollment_number must be 8 alphanumeric characters"
            )

    average = fields.get("average")
    if average is not None and not 0 <= float(average) <= 10:
        raise DomainError(ErrorCode.STUDENT_UPDATE_ERROR, "average must be between 0 and 10")

    values = dict(fields)
    for key in ("soft_skills", "tech_skills"):
        if key in values:
            values[key] = dump_tags(values[key])

    try:
        with get_db_session() as db:
            return students_repo.update_student(db, student_id, values)
    except SQLAlchemyError as e:
        logger.error("update student error: %s", e)
        raise DomainError(ErrorCode.STUDENT_UPDATE_ERROR, str(e)) from e


# ============================================================
# ACADEMIC PATHS
# ============================================================

def add_academic_path(student_id: int, school: str, level: str,
                      start_year: int, end_year: Optional[int] = None) -> int:
    try:
        with get_db_session() as db:
            return students_repo.insert_academic_path(db, student_id, school, level, start_year, end_year)
    except SQLAlchemyError as e:
        logger.error("add academic path error: %s", e)
        raise DomainError(ErrorCode.ACADEMIC_PATH_ERROR, str(e)) from e


def list_academic_paths(student_id: int) -> List[dict]:
    try:
        with get_db_session() as db:
            return students_repo.list_academic_paths(db, student_id)
    except SQLAlchemyError as e:
        raise DomainError(ErrorCode.STUDENT_LOAD_ERROR, str(e)) from e


def delete_academic_path(student_id: int, path_id: int) -> int:
    try:
        with get_db_session() as db:
            return students_repo.delete_academic_path(db, path_id, student_id)
    except SQLAlchemyError as e:
        logger.error("delete academic path error: %s", e)
        raise DomainError(ErrorCode.ACADEMIC_PATH_DELETE_ERROR, str(e)) from e


# ============================================================
# SKILLS
# ============================================================

def add_skill_to_student(student_id: int, skill_name: str) -> int:
    """Find or create the skill by name, then link it. Returns the skill id."""
    name = skill_name.strip()
    try:
        with get_db_session() as db:
            skill_id = students_repo.find_skill_id(db, name)
            if skill_id is None:
                skill_id = students_repo.insert_skill(db, name)
            students_repo.link_skill(db, student_id, skill_id)
    except SQLAlchemyError as e:
        logger.error("link skill error: %s", e)
        raise DomainError(ErrorCode.STUDENT_SKILL_LINK_ERROR, str(e)) from e
    return skill_id


def remove_skill_from_student(student_id: int, skill_id: int) -> int:
    try:
        with get_db_session() as db:
            return students_repo.unlink_skill(db, student_id, skill_id)
    except SQLAlchemyError as e:
        logger.error("delete skill error: %s", e)
        raise DomainError(ErrorCode.STUDENT_SKILL_DELETE_ERROR, str(e)) from e


def list_student_skills(student_id: int) -> List[dict]:
    try:
        with get_db_session() as db:
            return students_repo.list_student_skills(db, student_id)
    except SQLAlchemyError as e:
        raise DomainError(ErrorCode.STUDENT_LOAD_ERROR, str(e)) from e


# ============================================================
# SETTINGS & SUMMARY
# ============================================================

def get_student_settings(student_id: int) -> dict:
    try:
        with get_db_session() as db:
            stored = settings_repo.get_student_settings(db, student_id)
    except SQLAlchemyError as e:
        logger.error("load settings error: %s", e)
        raise DomainError(ErrorCode.SETTINGS_LOAD_ERROR, str(e)) from e

    if stored is None:
        return dict(DEFAULT_STUDENT_SETTINGS)
    return {flag: stored[flag] for flag in settings_repo.STUDENT_FLAGS}


def save_student_settings(student_id: int, values: Dict[str, bool]) -> None:
    try:
        with get_db_session() as db:
            settings_repo.upsert_student_settings(db, student_id, values)
    except SQLAlchemyError as e:
        logger.error("save settings error: %s", e)
        raise DomainError(ErrorCode.SETTINGS_SAVE_ERROR, str(e)) from e


def get_student_summary(student_id: int) -> dict:
    """Counts of the student's applications per status."""
    try:
        with get_db_session() as db:
            applications = applications_repo.list_for_student(db, student_id)
    except SQLAlchemyError as e:
        logger.error("load summary error: %s", e)
        raise DomainError(ErrorCode.APPLICATION_LOAD_ERROR, str(e)) from e

    return {
        "total": len(applications),
        "accepted": sum(1 for a in applications if a["status"] == APPLICATION_ACCEPTED),
        "rejected": sum(1 for a in applications if a["status"] == APPLICATION_REJECTED),
        "pending": sum(1 for a in applications if a["status"] == APPLICATION_PENDING),
    }
