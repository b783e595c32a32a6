"""Identity tables: users and password_resets."""

from datetime import datetime
from typing import Optional

from sqlalchemy import text, bindparam, DateTime, Boolean
from sqlalchemy.orm import Session

from upiconnect.repositories import row_to_dict


def get_user_by_email(db: Session, email: str) -> Optional[dict]:
    result = db.execute(
        text("SELECT id, email, password_hash, role, is_active, created_at FROM users WHERE email = :email"),
        {"email": email}
    )
    return row_to_dict(result.mappings().first())


def get_user_by_id(db: Session, user_id: int) -> Optional[dict]:
    result = db.execute(
        text("SELECT id, email, password_hash, role, is_active, created_at FROM users WHERE id = :id"),
        {"id": user_id}
    )
    return row_to_dict(result.mappings().first())


def insert_user(db: Session, email: str, password_hash: str, role: str) -> int:
    result = db.execute(
        text("""
            INSERT INTO users (email, password_hash, role)
            VALUES (:email, :password_hash, :role)
            RETURNING id
        """),
        {"email": email, "password_hash": password_hash, "role": role}
    )
    return result.scalar_one()


def update_password_hash(db: Session, user_id: int, password_hash: str) -> int:
    result = db.execute(
        text("UPDATE users SET password_hash = :password_hash WHERE id = :id"),
        {"id": user_id, "password_hash": password_hash}
    )
    return result.rowcount


def insert_password_reset(db: Session, user_id: int, token_hash: str, expires_at: datetime) -> None:
    stmt = text("""
        INSERT INTO password_resets (user_id, token_hash, expires_at, consumed)
        VALUES (:user_id, :token_hash, :expires_at, :consumed)
    """).bindparams(
        bindparam("expires_at", type_=DateTime()),
        bindparam("consumed", type_=Boolean()),
    )
    db.execute(stmt, {"user_id": user_id, "token_hash": token_hash, "expires_at": expires_at, "consumed": False})


def get_valid_password_reset(db: Session, token_hash: str, now: datetime) -> Optional[dict]:
    """Unconsumed reset row for this token that has not expired yet."""
    stmt = text("""
        SELECT id, user_id FROM password_resets
        WHERE token_hash = :token_hash AND consumed = :consumed AND expires_at > :now
    """).bindparams(
        bindparam("now", type_=DateTime()),
        bindparam("consumed", type_=Boolean()),
    )
    result = db.execute(stmt, {"token_hash": token_hash, "now": now, "consumed": False})
    return row_to_dict(result.mappings().first())


def consume_password_reset(db: Session, reset_id: int) -> None:
    stmt = text("UPDATE password_resets SET consumed = :consumed WHERE id = :id").bindparams(
        bindparam("consumed", type_=Boolean())
    )
    db.execute(stmt, {"id": reset_id, "consumed": True})
