"""
Job Service - job postings and the applications attached to them.

Every function opens its own session and tags store failures with the
ErrorCode of the operation, so routes never see a raw SQLAlchemy error.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from upiconnect.core.errors import DomainError, ErrorCode
from upiconnect.db.postgres import get_db_session
from upiconnect.repositories import jobs as jobs_repo
from upiconnect.repositories import applications as applications_repo

logger = logging.getLogger(__name__)

JOB_OPEN = "ABIERTA"
JOB_CLOSED = "CERRADA"

APPLICATION_PENDING = "PENDIENTE"
APPLICATION_ACCEPTED = "ACEPTADO"
APPLICATION_REJECTED = "RECHAZADO"

DEFAULT_AVAILABLE_SLOTS = 1


def create_job(job: Dict[str, Any]) -> dict:
    """
    Insert a job posting and return the stored row.

    available_slots defaults to 1 and status to ABIERTA when not supplied.
    """
    slots = job.get("available_slots")
    payload = {
        "recruiter_id": job["recruiter_id"],
        "title": job["title"],
        "position": job.get("position"),
        "description": job.get("description"),
        "degree_required": job.get("degree_required"),
        "salary": job.get("salary"),
        "available_slots": DEFAULT_AVAILABLE_SLOTS if slots is None else slots,
        "status": job.get("status") or JOB_OPEN,
        "tags": job.get("tags") or [],
    }
    try:
        with get_db_session() as db:
            return jobs_repo.insert_job(db, payload)
    except SQLAlchemyError as e:
        logger.error("create job error: %s", e)
        raise DomainError(ErrorCode.JOB_CREATE_ERROR, str(e)) from e


def get_job(job_id: int) -> Optional[dict]:
    try:
        with get_db_session() as db:
            return jobs_repo.get_job(db, job_id)
    except SQLAlchemyError as e:
        raise DomainError(ErrorCode.JOB_LOAD_ERROR, str(e)) from e


def get_job_owner(job_id: int) -> Optional[int]:
    try:
        with get_db_session() as db:
            return jobs_repo.get_job_owner(db, job_id)
    except SQLAlchemyError as e:
        raise DomainError(ErrorCode.JOB_LOAD_ERROR, str(e)) from e


def list_open_jobs(search_title: Optional[str] = None, search_tag: Optional[str] = None) -> List[dict]:
    """Open jobs, newest first, optionally filtered by title and tag (case-insensitive)."""
    try:
        with get_db_session() as db:
            jobs = jobs_repo.list_jobs_by_status(db, JOB_OPEN)
    except SQLAlchemyError as e:
        logger.error("load jobs error: %s", e)
        raise DomainError(ErrorCode.JOB_LOAD_ERROR, str(e)) from e

    if search_title and search_title.strip():
        needle = search_title.strip().lower()
        jobs = [j for j in jobs if needle in (j["title"] or "").lower()]

    if search_tag and search_tag.strip():
        needle = search_tag.strip().lower()
        jobs = [j for j in jobs if any(needle in tag.lower() for tag in j["tags"])]

    return jobs


def list_recruiter_jobs(recruiter_id: int) -> List[dict]:
    try:
        with get_db_session() as db:
            return jobs_repo.list_recruiter_jobs(db, recruiter_id)
    except SQLAlchemyError as e:
        logger.error("load recruiter jobs error: %s", e)
        raise DomainError(ErrorCode.JOB_LOAD_ERROR, str(e)) from e


def update_job(job_id: int, fields: Dict[str, Any]) -> int:
    """Partial update; only keys present in fields are written."""
    try:
        with get_db_session() as db:
            return jobs_repo.update_job(db, job_id, fields)
    except SQLAlchemyError as e:
        logger.error("update job error: %s", e)
        raise DomainError(ErrorCode.JOB_UPDATE_ERROR, str(e)) from e


def update_job_availability(job_id: int, available_slots: int) -> int:
    """
    Overwrite available_slots. Last write wins; the value is not compared
    with the number of accepted applications.
    """
    try:
        with get_db_session() as db:
            return jobs_repo.set_available_slots(db, job_id, available_slots)
    except SQLAlchemyError as e:
        logger.error("update availability error: %s", e)
        raise DomainError(ErrorCode.JOB_AVAILABILITY_ERROR, str(e)) from e


def set_job_status(job_id: int, status: str, delete_applications: bool = False,
                   keep_application_id: Optional[int] = None) -> int:
    """
    Update the job status. When closing with delete_applications, the job's
    applications are removed (except keep_application_id) in the same
    transaction. Returns how many applications were deleted.
    """
    try:
        with get_db_session() as db:
            jobs_repo.set_status(db, job_id, status)
            if status == JOB_CLOSED and delete_applications:
                return applications_repo.delete_for_job(db, job_id, keep_application_id)
            return 0
    except SQLAlchemyError as e:
        logger.error("update job status error: %s", e)
        raise DomainError(ErrorCode.JOB_STATUS_ERROR, str(e)) from e


def delete_job(job_id: int) -> None:
    """Delete the job and its applications together. Messages are kept."""
    try:
        with get_db_session() as db:
            applications_repo.delete_for_job(db, job_id)
            jobs_repo.delete_job(db, job_id)
    except SQLAlchemyError as e:
        logger.error("delete job error: %s", e)
        raise DomainError(ErrorCode.JOB_DELETE_ERROR, str(e)) from e


def apply_to_job(job_id: int, student_id: int) -> dict:
    """Create a PENDIENTE application. A second attempt for the same pair fails."""
    try:
        with get_db_session() as db:
            return applications_repo.insert_application(db, job_id, student_id)
    except SQLAlchemyError as e:
        logger.error("apply error: %s", e)
        raise DomainError(ErrorCode.JOB_APPLICATION_ERROR, str(e)) from e


def set_application_status(application_id: int, status: str) -> int:
    """
    Single UPDATE filtered by id. Any status string is accepted from any
    prior status.
    """
    try:
        with get_db_session() as db:
            return applications_repo.set_status(db, application_id, status)
    except SQLAlchemyError as e:
        logger.error("update status error: %s", e)
        raise DomainError(ErrorCode.APPLICATION_STATUS_ERROR, str(e)) from e
