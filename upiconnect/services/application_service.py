"""Read-side views over applications for recruiters and students."""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from upiconnect.core.errors import DomainError, ErrorCode
from upiconnect.db.postgres import get_db_session
from upiconnect.repositories import applications as applications_repo
from upiconnect.repositories import students as students_repo

logger = logging.getLogger(__name__)


def get_application(application_id: int) -> Optional[dict]:
    try:
        with get_db_session() as db:
            return applications_repo.get_application(db, application_id)
    except SQLAlchemyError as e:
        raise DomainError(ErrorCode.APPLICATION_LOAD_ERROR, str(e)) from e


def list_recruiter_applications(recruiter_id: int) -> List[dict]:
    """Every application to the recruiter's jobs, newest first."""
    try:
        with get_db_session() as db:
            return applications_repo.list_for_recruiter(db, recruiter_id)
    except SQLAlchemyError as e:
        logger.error("load applications error: %s", e)
        raise DomainError(ErrorCode.APPLICATION_LOAD_ERROR, str(e)) from e


def list_job_applications(job_id: int) -> List[dict]:
    try:
        with get_db_session() as db:
            return applications_repo.list_for_job(db, job_id)
    except SQLAlchemyError as e:
        logger.error("load job applications error: %s", e)
        raise DomainError(ErrorCode.APPLICATION_LOAD_ERROR, str(e)) from e


def list_student_applications(student_id: int) -> List[dict]:
    try:
        with get_db_session() as db:
            return applications_repo.list_for_student(db, student_id)
    except SQLAlchemyError as e:
        logger.error("load student applications error: %s", e)
        raise DomainError(ErrorCode.APPLICATION_LOAD_ERROR, str(e)) from e


def get_applicant_detail(recruiter_id: int, student_id: int) -> Optional[dict]:
    """
    Student profile as seen by a recruiter, with the applications that
    student made to this recruiter's jobs. None when the student never
    applied to the recruiter.
    """
    try:
        with get_db_session() as db:
            if not applications_repo.student_applied_to_recruiter(db, student_id, recruiter_id):
                return None
            student = students_repo.get_student(db, student_id)
            if not student:
                return None
            student["academic_paths"] = students_repo.list_academic_paths(db, student_id)
            student["skills"] = students_repo.list_student_skills(db, student_id)
            applications = [
                a for a in applications_repo.list_for_student(db, student_id)
                if a["recruiter_id"] == recruiter_id
            ]
    except SQLAlchemyError as e:
        logger.error("load applicant error: %s", e)
        raise DomainError(ErrorCode.APPLICATION_LOAD_ERROR, str(e)) from e

    return {"student": student, "applications": applications}
