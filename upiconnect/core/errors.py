"""
Domain errors.

Every failure reported by the record store or the identity layer is wrapped
in a DomainError tagged with an ErrorCode. str(error) keeps the
"CODE: detail" shape so log lines and callers can still match on the tag.

The API layer turns a DomainError into a JSON response with a generic,
user-facing message; the backend detail only goes to the log.
"""

import logging
from enum import Enum
from typing import Dict, Tuple

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    # Identity
    AUTH_ERROR = "AUTH_ERROR"
    LOGIN_ERROR = "LOGIN_ERROR"
    PASSWORD_UPDATE_ERROR = "PASSWORD_UPDATE_ERROR"
    PASSWORD_RESET_ERROR = "PASSWORD_RESET_ERROR"

    # Jobs & applications
    JOB_CREATE_ERROR = "JOB_CREATE_ERROR"
    JOB_UPDATE_ERROR = "JOB_UPDATE_ERROR"
    JOB_AVAILABILITY_ERROR = "JOB_AVAILABILITY_ERROR"
    JOB_STATUS_ERROR = "JOB_STATUS_ERROR"
    JOB_DELETE_ERROR = "JOB_DELETE_ERROR"
    JOB_LOAD_ERROR = "JOB_LOAD_ERROR"
    JOB_APPLICATION_ERROR = "JOB_APPLICATION_ERROR"
    APPLICATION_STATUS_ERROR = "APPLICATION_STATUS_ERROR"
    APPLICATION_LOAD_ERROR = "APPLICATION_LOAD_ERROR"

    # Recruiters
    RECRUITER_INSERT_ERROR = "RECRUITER_INSERT_ERROR"
    RECRUITER_UPDATE_ERROR = "RECRUITER_UPDATE_ERROR"
    RECRUITER_LOAD_ERROR = "RECRUITER_LOAD_ERROR"
    RECRUITER_INTEREST_ERROR = "RECRUITER_INTEREST_ERROR"
    RECRUITER_INTEREST_DELETE_ERROR = "RECRUITER_INTEREST_DELETE_ERROR"

    # Students
    STUDENT_INSERT_ERROR = "STUDENT_INSERT_ERROR"
    STUDENT_UPDATE_ERROR = "STUDENT_UPDATE_ERROR"
    STUDENT_LOAD_ERROR = "STUDENT_LOAD_ERROR"
    ACADEMIC_PATH_ERROR = "ACADEMIC_PATH_ERROR"
    ACADEMIC_PATH_DELETE_ERROR = "ACADEMIC_PATH_DELETE_ERROR"
    STUDENT_SKILL_LINK_ERROR = "STUDENT_SKILL_LINK_ERROR"
    STUDENT_SKILL_DELETE_ERROR = "STUDENT_SKILL_DELETE_ERROR"

    # Settings
    SETTINGS_LOAD_ERROR = "SETTINGS_LOAD_ERROR"
    SETTINGS_SAVE_ERROR = "SETTINGS_SAVE_ERROR"

    # Messaging
    CONVERSATION_LOAD_ERROR = "CONVERSATION_LOAD_ERROR"
    MESSAGE_LOAD_ERROR = "MESSAGE_LOAD_ERROR"
    MESSAGE_SEND_ERROR = "MESSAGE_SEND_ERROR"

    # Notifications
    NOTIFICATION_REQUEST_ERROR = "NOTIFICATION_REQUEST_ERROR"
    APPLICATION_NOT_FOUND = "APPLICATION_NOT_FOUND"
    NOTIFICATION_LOOKUP_ERROR = "NOTIFICATION_LOOKUP_ERROR"
    NOTIFICATION_EMAIL_ERROR = "NOTIFICATION_EMAIL_ERROR"


class DomainError(Exception):
    """A store or identity failure tagged with the operation that failed."""

    def __init__(self, code: ErrorCode, detail: str = ""):
        self.code = code
        self.detail = detail
        super().__init__(f"{code.value}: {detail}")


# code -> (HTTP status, message shown to the user)
ERROR_RESPONSES: Dict[ErrorCode, Tuple[int, str]] = {
    ErrorCode.AUTH_ERROR: (400, "Could not create the account."),
    ErrorCode.LOGIN_ERROR: (401, "Invalid email or password."),
    ErrorCode.PASSWORD_UPDATE_ERROR: (400, "Could not update the password."),
    ErrorCode.PASSWORD_RESET_ERROR: (400, "The reset link is invalid or has expired."),
    ErrorCode.JOB_CREATE_ERROR: (400, "Could not create the job."),
    ErrorCode.JOB_UPDATE_ERROR: (400, "Could not update the job."),
    ErrorCode.JOB_AVAILABILITY_ERROR: (400, "Could not update the availability."),
    ErrorCode.JOB_STATUS_ERROR: (400, "Could not update the job status."),
    ErrorCode.JOB_DELETE_ERROR: (400, "Could not delete the job. Try again."),
    ErrorCode.JOB_LOAD_ERROR: (500, "Could not load jobs."),
    ErrorCode.JOB_APPLICATION_ERROR: (409, "Could not complete your application."),
    ErrorCode.APPLICATION_STATUS_ERROR: (400, "Could not update the applicant status."),
    ErrorCode.APPLICATION_LOAD_ERROR: (500, "Could not load applications."),
    ErrorCode.RECRUITER_INSERT_ERROR: (400, "Could not save the recruiter profile."),
    ErrorCode.RECRUITER_UPDATE_ERROR: (400, "Could not update the recruiter profile."),
    ErrorCode.RECRUITER_LOAD_ERROR: (500, "Could not load the recruiter profile."),
    ErrorCode.RECRUITER_INTEREST_ERROR: (400, "Could not add the interest."),
    ErrorCode.RECRUITER_INTEREST_DELETE_ERROR: (400, "Could not delete the interest."),
    ErrorCode.STUDENT_INSERT_ERROR: (400, "Could not save the student profile. The enrollment number may already be registered."),
    ErrorCode.STUDENT_UPDATE_ERROR: (400, "Could not update your profile."),
    ErrorCode.STUDENT_LOAD_ERROR: (500, "Could not load the student profile."),
    ErrorCode.ACADEMIC_PATH_ERROR: (400, "Could not add the academic path."),
    ErrorCode.ACADEMIC_PATH_DELETE_ERROR: (400, "Could not delete the academic path."),
    ErrorCode.STUDENT_SKILL_LINK_ERROR: (400, "Could not add the skill."),
    ErrorCode.STUDENT_SKILL_DELETE_ERROR: (400, "Could not remove the skill."),
    ErrorCode.SETTINGS_LOAD_ERROR: (500, "Could not load the settings."),
    ErrorCode.SETTINGS_SAVE_ERROR: (400, "Could not save the settings."),
    ErrorCode.CONVERSATION_LOAD_ERROR: (500, "Could not load the conversations."),
    ErrorCode.MESSAGE_LOAD_ERROR: (500, "Could not load the messages."),
    ErrorCode.MESSAGE_SEND_ERROR: (400, "Could not send the message."),
    ErrorCode.NOTIFICATION_REQUEST_ERROR: (400, "applicationId is required"),
    ErrorCode.APPLICATION_NOT_FOUND: (404, "Application not found"),
    ErrorCode.NOTIFICATION_LOOKUP_ERROR: (500, "Could not load the data for the notification"),
    ErrorCode.NOTIFICATION_EMAIL_ERROR: (502, "Could not send the notification email"),
}


def error_response(error: DomainError) -> Tuple[int, str]:
    return ERROR_RESPONSES.get(error.code, (500, "Unexpected error."))


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code, message = error_response(exc)
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"error": message, "code": exc.code.value})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
