"""
Recruiter Service

Registration, profile, interests, notification settings and the numbers
shown on the recruiter analytics page.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from upiconnect.core.errors import DomainError, ErrorCode
from upiconnect.db.postgres import get_db_session
from upiconnect.repositories import recruiters as recruiters_repo
from upiconnect.repositories import jobs as jobs_repo
from upiconnect.repositories import applications as applications_repo
from upiconnect.repositories import settings as settings_repo
from upiconnect.services import identity_service
from upiconnect.services.job_service import (
    JOB_OPEN, JOB_CLOSED, APPLICATION_ACCEPTED, APPLICATION_REJECTED
)

logger = logging.getLogger(__name__)

DEFAULT_RECRUITER_SETTINGS = {
    "email_notifications": True,
    "application_notifications": True,
    "weekly_summary": False,
}


def register_recruiter(email: str, password: str, company_name: str,
                       position: Optional[str] = None) -> int:
    """
    Create the account and the recruiter row in one transaction.
    The recruiter id is the user id.
    """
    with get_db_session() as db:
        user_id = identity_service.sign_up(db, email, password, "recruiter")
        try:
            recruiters_repo.insert_recruiter(db, user_id, company_name, position, email.lower().strip())
        except SQLAlchemyError as e:
            logger.error("insert recruiter error: %s", e)
            raise DomainError(ErrorCode.RECRUITER_INSERT_ERROR, str(e)) from e
    logger.info("Registered recruiter %s (%s)", user_id, company_name)
    return user_id


def get_recruiter(recruiter_id: int) -> Optional[dict]:
    try:
        with get_db_session() as db:
            return recruiters_repo.get_recruiter(db, recruiter_id)
    except SQLAlchemyError as e:
        logger.error("load recruiter error: %s", e)
        raise DomainError(ErrorCode.RECRUITER_LOAD_ERROR, str(e)) from e


def update_recruiter_profile(recruiter_id: int, fields: Dict[str, Any]) -> int:
    try:
        with get_db_session() as db:
            return recruiters_repo.update_recruiter(db, recruiter_id, fields)
    except SQLAlchemyError as e:
        logger.error("update recruiter error: %s", e)
        raise DomainError(ErrorCode.RECRUITER_UPDATE_ERROR, str(e)) from e


# ============================================================
# INTERESTS
# ============================================================

def add_interest(recruiter_id: int, interest: str) -> int:
    try:
        with get_db_session() as db:
            return recruiters_repo.insert_interest(db, recruiter_id, interest.strip())
    except SQLAlchemyError as e:
        logger.error("add interest error: %s", e)
        raise DomainError(ErrorCode.RECRUITER_INTEREST_ERROR, str(e)) from e


def delete_interest(recruiter_id: int, interest_id: int) -> int:
    try:
        with get_db_session() as db:
            return recruiters_repo.delete_interest(db, interest_id, recruiter_id)
    except SQLAlchemyError as e:
        logger.error("delete interest error: %s", e)
        raise DomainError(ErrorCode.RECRUITER_INTEREST_DELETE_ERROR, str(e)) from e


def list_interests(recruiter_id: int) -> List[dict]:
    try:
        with get_db_session() as db:
            return recruiters_repo.list_interests(db, recruiter_id)
    except SQLAlchemyError as e:
        raise DomainError(ErrorCode.RECRUITER_LOAD_ERROR, str(e)) from e


# ============================================================
# SETTINGS
# ============================================================

def get_recruiter_settings(recruiter_id: int) -> dict:
    """Stored preferences, or the defaults when the recruiter never saved any."""
    try:
        with get_db_session() as db:
            stored = settings_repo.get_recruiter_settings(db, recruiter_id)
    except SQLAlchemyError as e:
        logger.error("load settings error: %s", e)
        raise DomainError(ErrorCode.SETTINGS_LOAD_ERROR, str(e)) from e

    if stored is None:
        return dict(DEFAULT_RECRUITER_SETTINGS)
    return {flag: stored[flag] for flag in settings_repo.RECRUITER_FLAGS}


def save_recruiter_settings(recruiter_id: int, values: Dict[str, bool]) -> None:
    try:
        with get_db_session() as db:
            settings_repo.upsert_recruiter_settings(db, recruiter_id, values)
    except SQLAlchemyError as e:
        logger.error("save settings error: %s", e)
        raise DomainError(ErrorCode.SETTINGS_SAVE_ERROR, str(e)) from e


# ============================================================
# PUBLIC PROFILE & ANALYTICS
# ============================================================

def get_public_profile(recruiter_id: int) -> Optional[dict]:
    """Recruiter card shown to students: company, jobs and interests."""
    try:
        with get_db_session() as db:
            recruiter = recruiters_repo.get_recruiter(db, recruiter_id)
            if not recruiter:
                return None
            jobs = jobs_repo.list_recruiter_jobs(db, recruiter_id)
            interests = recruiters_repo.list_interests(db, recruiter_id)
    except SQLAlchemyError as e:
        logger.error("load public profile error: %s", e)
        raise DomainError(ErrorCode.RECRUITER_LOAD_ERROR, str(e)) from e

    return {"recruiter": recruiter, "jobs": jobs, "interests": interests}


def get_recruiter_analytics(recruiter_id: int) -> dict:
    try:
        with get_db_session() as db:
            jobs = jobs_repo.list_recruiter_jobs(db, recruiter_id)
            applications = applications_repo.list_for_jobs(db, [j["id"] for j in jobs])
    except SQLAlchemyError as e:
        logger.error("load analytics error: %s", e)
        raise DomainError(ErrorCode.APPLICATION_LOAD_ERROR, str(e)) from e

    accepted = sum(1 for a in applications if a["status"] == APPLICATION_ACCEPTED)
    rejected = sum(1 for a in applications if a["status"] == APPLICATION_REJECTED)
    acceptance_rate = round(accepted * 100 / len(applications)) if applications else 0

    per_job = []
    for job in jobs:
        job_apps = [a for a in applications if a["job_id"] == job["id"]]
        per_job.append({
            "job_id": job["id"],
            "title": job["title"],
            "status": job["status"],
            "available_slots": job["available_slots"],
            "total_applications": len(job_apps),
            "accepted": sum(1 for a in job_apps if a["status"] == APPLICATION_ACCEPTED),
            "rejected": sum(1 for a in job_apps if a["status"] == APPLICATION_REJECTED),
        })

    return {
        "total_jobs": len(jobs),
        "open_jobs": sum(1 for j in jobs if j["status"] == JOB_OPEN),
        "closed_jobs": sum(1 for j in jobs if j["status"] == JOB_CLOSED),
        "total_applications": len(applications),
        "accepted_applications": accepted,
        "rejected_applications": rejected,
        "acceptance_rate": acceptance_rate,
        "jobs": per_job,
    }
