"""Notification preferences for recruiters and students."""

from typing import Optional

from sqlalchemy import text, bindparam, Boolean
from sqlalchemy.orm import Session

from upiconnect.repositories import row_to_dict

RECRUITER_FLAGS = ("email_notifications", "application_notifications", "weekly_summary")
STUDENT_FLAGS = ("email_notifications", "status_change_notifications", "weekly_summary")


def _normalise(row, flags) -> Optional[dict]:
    settings = row_to_dict(row)
    if settings is None:
        return None
    for flag in flags:
        settings[flag] = bool(settings[flag])
    return settings


def _upsert(db: Session, table: str, owner_column: str, owner_id: int, flags, values: dict) -> None:
    """INSERT ... ON CONFLICT (owner) DO UPDATE; works on PostgreSQL and SQLite."""
    columns = ", ".join((owner_column,) + flags)
    placeholders = ", ".join(f":{c}" for c in (owner_column,) + flags)
    assignments = ", ".join(f"{f} = excluded.{f}" for f in flags)
    stmt = text(f"""
        INSERT INTO {table} ({columns}) VALUES ({placeholders})
        ON CONFLICT ({owner_column}) DO UPDATE SET {assignments}
    """).bindparams(*[bindparam(f, type_=Boolean()) for f in flags])
    db.execute(stmt, {owner_column: owner_id, **{f: bool(values[f]) for f in flags}})


def get_recruiter_settings(db: Session, recruiter_id: int) -> Optional[dict]:
    result = db.execute(
        text(f"SELECT recruiter_id, {', '.join(RECRUITER_FLAGS)} FROM recruiter_settings WHERE recruiter_id = :id"),
        {"id": recruiter_id}
    )
    return _normalise(result.mappings().first(), RECRUITER_FLAGS)


def upsert_recruiter_settings(db: Session, recruiter_id: int, values: dict) -> None:
    _upsert(db, "recruiter_settings", "recruiter_id", recruiter_id, RECRUITER_FLAGS, values)


def get_student_settings(db: Session, student_id: int) -> Optional[dict]:
    result = db.execute(
        text(f"SELECT student_id, {', '.join(STUDENT_FLAGS)} FROM student_settings WHERE student_id = :id"),
        {"id": student_id}
    )
    return _normalise(result.mappings().first(), STUDENT_FLAGS)


def upsert_student_settings(db: Session, student_id: int, values: dict) -> None:
    _upsert(db, "student_settings", "student_id", student_id, STUDENT_FLAGS, values)
