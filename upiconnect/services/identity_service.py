"""
Identity Service

Accounts, password sign-in, sessions and password recovery.

The rest of the code only needs a stable user id, so everything that
touches credentials lives here:
- sign_up / sign_in_with_password
- get_user_by_id (email lookup used by notifications)
- update_password
- request_password_reset / reset_password (emailed one-time link)
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from upiconnect.core.auth import (
    hash_password, verify_password, create_access_token,
    generate_reset_token, hash_reset_token
)
from upiconnect.core.config import get_settings
from upiconnect.core.errors import DomainError, ErrorCode
from upiconnect.db.postgres import get_db_session
from upiconnect.repositories import users as users_repo
from upiconnect.services.email_client import get_email_client, EmailSendError

logger = logging.getLogger(__name__)

settings = get_settings()

ROLES = ("student", "recruiter")


def sign_up(db: Session, email: str, password: str, role: str) -> int:
    """
    Create an account inside the caller's session and return its user id.
    Profile rows are inserted by the caller in the same transaction.
    """
    email = email.lower().strip()
    if role not in ROLES:
        raise DomainError(ErrorCode.AUTH_ERROR, f"invalid role '{role}'")

    try:
        if users_repo.get_user_by_email(db, email):
            raise DomainError(ErrorCode.AUTH_ERROR, "User already registered")
        user_id = users_repo.insert_user(db, email, hash_password(password), role)
    except SQLAlchemyError as e:
        raise DomainError(ErrorCode.AUTH_ERROR, str(e)) from e

    if not user_id:
        raise DomainError(ErrorCode.AUTH_ERROR, "no user id returned after sign up")
    return user_id


def sign_in_with_password(email: str, password: str) -> dict:
    """Verify credentials and return a session (access token + user)."""
    email = email.lower().strip()
    try:
        with get_db_session() as db:
            user = users_repo.get_user_by_email(db, email)
    except SQLAlchemyError as e:
        raise DomainError(ErrorCode.LOGIN_ERROR, str(e)) from e

    if not user or not verify_password(password, user["password_hash"]):
        raise DomainError(ErrorCode.LOGIN_ERROR, "Invalid login credentials")
    if not user["is_active"]:
        raise DomainError(ErrorCode.LOGIN_ERROR, "Account deactivated")

    token = create_access_token(data={"sub": str(user["id"]), "role": user["role"]})
    return {
        "access_token": token,
        "user_id": user["id"],
        "email": user["email"],
        "role": user["role"],
    }


def get_user_by_id(user_id: int) -> Optional[dict]:
    """Admin lookup: user record without the password hash."""
    try:
        with get_db_session() as db:
            user = users_repo.get_user_by_id(db, user_id)
    except SQLAlchemyError as e:
        raise DomainError(ErrorCode.AUTH_ERROR, str(e)) from e
    if user:
        user.pop("password_hash", None)
    return user


def update_password(user_id: int, new_password: str) -> None:
    try:
        with get_db_session() as db:
            updated = users_repo.update_password_hash(db, user_id, hash_password(new_password))
    except SQLAlchemyError as e:
        raise DomainError(ErrorCode.PASSWORD_UPDATE_ERROR, str(e)) from e
    if updated == 0:
        raise DomainError(ErrorCode.PASSWORD_UPDATE_ERROR, "user not found")


def request_password_reset(email: str) -> None:
    """
    Email a one-time reset link. Unknown addresses are ignored silently so
    the endpoint does not reveal which emails are registered.
    """
    email = email.lower().strip()
    token = generate_reset_token()
    expires_at = datetime.utcnow() + timedelta(minutes=settings.password_reset_expire_minutes)

    try:
        with get_db_session() as db:
            user = users_repo.get_user_by_email(db, email)
            if user:
                users_repo.insert_password_reset(db, user["id"], hash_reset_token(token), expires_at)
    except SQLAlchemyError as e:
        logger.error("password reset request error: %s", e)
        raise DomainError(ErrorCode.PASSWORD_RESET_ERROR, str(e)) from e

    if not user:
        logger.info("Password reset requested for unknown email")
        return

    link = f"{settings.app_base_url.rstrip('/')}/auth/reset-password?token={token}"
    body = (
        "Hola,\n\n"
        "Recibimos una solicitud para restablecer tu contrasena de UPICONNECT.\n"
        f"Abre este enlace para elegir una nueva: {link}\n\n"
        f"El enlace expira en {settings.password_reset_expire_minutes} minutos.\n\n"
        "-- Equipo UPICONNECT"
    )
    try:
        get_email_client().send(email, "Restablece tu contrasena de UPICONNECT", body)
    except EmailSendError as e:
        logger.error("password reset email error: %s", e)


def reset_password(token: str, new_password: str) -> None:
    try:
        with get_db_session() as db:
            reset = users_repo.get_valid_password_reset(db, hash_reset_token(token), datetime.utcnow())
            if not reset:
                raise DomainError(ErrorCode.PASSWORD_RESET_ERROR, "invalid or expired token")
            users_repo.update_password_hash(db, reset["user_id"], hash_password(new_password))
            users_repo.consume_password_reset(db, reset["id"])
    except SQLAlchemyError as e:
        raise DomainError(ErrorCode.PASSWORD_RESET_ERROR, str(e)) from e
