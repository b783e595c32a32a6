"""
Message Service

Conversations are not stored: they are the distinct pairs found in the
application rows. A thread is every message sharing the
(recruiter, student, job) key, oldest first, without pagination.
"""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from upiconnect.core.errors import DomainError, ErrorCode
from upiconnect.db.postgres import get_db_session
from upiconnect.repositories import applications as applications_repo
from upiconnect.repositories import jobs as jobs_repo
from upiconnect.repositories import messages as messages_repo

logger = logging.getLogger(__name__)

SENDER_RECRUITER = "RECRUITER"
SENDER_STUDENT = "STUDENT"


def list_conversations_for_recruiter(recruiter_id: int) -> List[dict]:
    """One entry per distinct (student, job) pair that applied to the recruiter."""
    try:
        with get_db_session() as db:
            applications = applications_repo.list_for_recruiter(db, recruiter_id)
    except SQLAlchemyError as e:
        logger.error("load conversations error: %s", e)
        raise DomainError(ErrorCode.CONVERSATION_LOAD_ERROR, str(e)) from e

    seen = set()
    conversations = []
    for app in applications:
        key = (app["student_id"], app["job_id"])
        if key in seen:
            continue
        seen.add(key)
        conversations.append({
            "recruiter_id": recruiter_id,
            "student_id": app["student_id"],
            "job_id": app["job_id"],
            "job_title": app["job_title"],
            "student_name": app["student_name"],
            "status": app["status"],
        })
    return conversations


def list_conversations_for_student(student_id: int) -> List[dict]:
    """One entry per distinct (job, recruiter) pair the student applied to."""
    try:
        with get_db_session() as db:
            applications = applications_repo.list_for_student(db, student_id)
    except SQLAlchemyError as e:
        logger.error("load conversations error: %s", e)
        raise DomainError(ErrorCode.CONVERSATION_LOAD_ERROR, str(e)) from e

    seen = set()
    conversations = []
    for app in applications:
        key = (app["job_id"], app["recruiter_id"])
        if key in seen:
            continue
        seen.add(key)
        conversations.append({
            "recruiter_id": app["recruiter_id"],
            "student_id": student_id,
            "job_id": app["job_id"],
            "job_title": app["job_title"],
            "company_name": app["company_name"],
            "status": app["status"],
        })
    return conversations


def list_messages(recruiter_id: int, student_id: int, job_id: int) -> List[dict]:
    try:
        with get_db_session() as db:
            return messages_repo.list_thread(db, recruiter_id, student_id, job_id)
    except SQLAlchemyError as e:
        logger.error("load messages error: %s", e)
        raise DomainError(ErrorCode.MESSAGE_LOAD_ERROR, str(e)) from e


def send_message(recruiter_id: int, student_id: int, job_id: int,
                 content: str, sender_type: str) -> dict:
    """Append one message to the thread. Blank text is rejected."""
    text_value = (content or "").strip()
    if not text_value:
        raise DomainError(ErrorCode.MESSAGE_SEND_ERROR, "message text is empty")

    try:
        with get_db_session() as db:
            return messages_repo.insert_message(db, recruiter_id, student_id, job_id, text_value, sender_type)
    except SQLAlchemyError as e:
        logger.error("send message error: %s", e)
        raise DomainError(ErrorCode.MESSAGE_SEND_ERROR, str(e)) from e


def can_message(recruiter_id: int, student_id: int, job_id: int) -> bool:
    """A thread exists only where the student applied to the recruiter's job."""
    try:
        with get_db_session() as db:
            if jobs_repo.get_job_owner(db, job_id) != recruiter_id:
                return False
            return applications_repo.find_application(db, job_id, student_id) is not None
    except SQLAlchemyError as e:
        raise DomainError(ErrorCode.CONVERSATION_LOAD_ERROR, str(e)) from e
