"""
Notification Service

Tells a student by email that their application was accepted.
Single shot: no retry, no queue.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from upiconnect.core.errors import DomainError, ErrorCode
from upiconnect.db.postgres import get_db_session
from upiconnect.repositories import applications as applications_repo
from upiconnect.repositories import jobs as jobs_repo
from upiconnect.services import identity_service
from upiconnect.services.email_client import get_email_client, EmailSendError

logger = logging.getLogger(__name__)

FALLBACK_JOB_TITLE = "una vacante"

ACCEPTED_TEMPLATE = """Hola,

Tu perfil ha sido ACEPTADO como prospecto para {job_title} en UPICONNECT.
La empresa se pondra en contacto contigo usando los datos que registraste en la plataforma.

Identificador de tu postulacion: {application_id}

-- Equipo UPICONNECT"""


def notify_application_accepted(application_id) -> dict:
    """
    Email the student behind application_id.

    Raises DomainError with:
    - NOTIFICATION_REQUEST_ERROR when no id is given
    - APPLICATION_NOT_FOUND when the application does not exist
    - NOTIFICATION_LOOKUP_ERROR when the application or email cannot be read
    - NOTIFICATION_EMAIL_ERROR when the provider rejects the message
    """
    if not application_id:
        raise DomainError(ErrorCode.NOTIFICATION_REQUEST_ERROR, "applicationId is required")

    # 1. Application (job_id, student_id)
    try:
        with get_db_session() as db:
            application = applications_repo.get_application(db, application_id)
    except SQLAlchemyError as e:
        logger.error("application-accepted: fetch application error: %s", e)
        raise DomainError(ErrorCode.NOTIFICATION_LOOKUP_ERROR, str(e)) from e

    if not application:
        raise DomainError(ErrorCode.APPLICATION_NOT_FOUND, f"application {application_id}")

    # 2. Student email from the identity store
    try:
        user = identity_service.get_user_by_id(application["student_id"])
    except DomainError as e:
        logger.error("application-accepted: get user error: %s", e)
        raise DomainError(ErrorCode.NOTIFICATION_LOOKUP_ERROR, str(e)) from e

    if not user or not user.get("email"):
        logger.error("application-accepted: no email for student %s", application["student_id"])
        raise DomainError(ErrorCode.NOTIFICATION_LOOKUP_ERROR, "student email not found")

    student_email = user["email"]

    # 3. Job title for the subject; a failure here only degrades the text
    job_title = None
    try:
        with get_db_session() as db:
            job_title = jobs_repo.get_job_title(db, application["job_id"])
    except SQLAlchemyError as e:
        logger.error("application-accepted: fetch job error: %s", e)
    job_title = job_title or FALLBACK_JOB_TITLE

    try:
        get_email_client().send(
            to=student_email,
            subject=f"Has sido preseleccionado para {job_title}",
            text=ACCEPTED_TEMPLATE.format(job_title=job_title, application_id=application["id"]),
        )
    except EmailSendError as e:
        logger.error("application-accepted: resend error: %s", e)
        raise DomainError(ErrorCode.NOTIFICATION_EMAIL_ERROR, str(e)) from e

    logger.info("Acceptance email sent for application %s", application["id"])
    return {"ok": True, "applicationId": application["id"], "studentEmail": student_email}
