"""
Table definitions for the record store.

Queries are written as plain SQL in the repositories; these definitions only
exist so the schema (columns, defaults and uniqueness constraints) can be
created on startup with metadata.create_all().

Uniqueness rules the application relies on:
- applications: one row per (job_id, student_id)
- students.enrollment_number, users.email, skills.name
- recruiter_settings.recruiter_id / student_settings.student_id (upsert key)
- student_academic_paths: one row per (student_id, school, level)

messages.job_id deliberately has no foreign key: deleting a job removes its
applications but leaves the conversation rows in place.
"""

import logging

from sqlalchemy import (
    MetaData, Table, Column, Integer, String, Text, Boolean, Numeric,
    DateTime, ForeignKey, UniqueConstraint, Index, func
)

logger = logging.getLogger(__name__)

metadata = MetaData()


users = Table(
    "users", metadata,
    Column("id", Integer, primary_key=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("role", String(20), nullable=False),  # 'student' | 'recruiter'
    Column("is_active", Boolean, nullable=False, server_default="1"),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

password_resets = Table(
    "password_resets", metadata,
    Column("id", Integer, primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("token_hash", String(64), nullable=False, unique=True),
    Column("expires_at", DateTime, nullable=False),
    Column("consumed", Boolean, nullable=False, server_default="0"),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

students = Table(
    "students", metadata,
    Column("id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("full_name", String(200)),
    Column("degree", String(200)),
    Column("enrollment_number", String(20), unique=True),
    Column("contact_email", String(255)),
    Column("phone", String(50)),
    Column("expected_salary_range", String(100)),
    Column("education_level", String(100)),
    Column("experience", Text),
    Column("soft_skills", Text),   # JSON-encoded list of tags
    Column("tech_skills", Text),   # JSON-encoded list of tags
    Column("average", Numeric(4, 2)),
    Column("status", String(50)),
    Column("service_social_status", String(50)),
    Column("practices_status", String(50)),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

recruiters = Table(
    "recruiters", metadata,
    Column("id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("company_name", String(200), nullable=False),
    Column("position", String(200)),
    Column("contact_email", String(255)),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

jobs = Table(
    "jobs", metadata,
    Column("id", Integer, primary_key=True),
    Column("recruiter_id", Integer, ForeignKey("recruiters.id"), nullable=False, index=True),
    Column("title", String(200), nullable=False),
    Column("position", String(200), nullable=False),
    Column("description", Text),
    Column("degree_required", String(200)),
    Column("salary", Numeric(10, 2)),
    Column("available_slots", Integer, server_default="1"),
    Column("status", String(20), nullable=False, server_default="ABIERTA"),
    Column("tags", Text),  # JSON-encoded list of tags
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

applications = Table(
    "applications", metadata,
    Column("id", Integer, primary_key=True),
    Column("job_id", Integer, ForeignKey("jobs.id"), nullable=False, index=True),
    Column("student_id", Integer, ForeignKey("students.id"), nullable=False, index=True),
    Column("status", String(20), nullable=False, server_default="PENDIENTE"),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    UniqueConstraint("job_id", "student_id", name="uq_applications_job_student"),
)

messages = Table(
    "messages", metadata,
    Column("id", Integer, primary_key=True),
    Column("recruiter_id", Integer, nullable=False),
    Column("student_id", Integer, nullable=False),
    Column("job_id", Integer, nullable=False),
    Column("content", Text, nullable=False),
    Column("sender_type", String(20), nullable=False),  # 'RECRUITER' | 'STUDENT'
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    Index("ix_messages_thread", "recruiter_id", "student_id", "job_id"),
)

recruiter_interests = Table(
    "recruiter_interests", metadata,
    Column("id", Integer, primary_key=True),
    Column("recruiter_id", Integer, ForeignKey("recruiters.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("interest", String(200), nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

recruiter_settings = Table(
    "recruiter_settings", metadata,
    Column("id", Integer, primary_key=True),
    Column("recruiter_id", Integer, ForeignKey("recruiters.id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("email_notifications", Boolean, nullable=False, server_default="1"),
    Column("application_notifications", Boolean, nullable=False, server_default="1"),
    Column("weekly_summary", Boolean, nullable=False, server_default="0"),
)

student_settings = Table(
    "student_settings", metadata,
    Column("id", Integer, primary_key=True),
    Column("student_id", Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("email_notifications", Boolean, nullable=False, server_default="1"),
    Column("status_change_notifications", Boolean, nullable=False, server_default="1"),
    Column("weekly_summary", Boolean, nullable=False, server_default="0"),
)

skills = Table(
    "skills", metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(100), nullable=False, unique=True),
)

student_skills = Table(
    "student_skills", metadata,
    Column("id", Integer, primary_key=True),
    Column("student_id", Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False),
    Column("skill_id", Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False),
    UniqueConstraint("student_id", "skill_id", name="uq_student_skills"),
)

student_academic_paths = Table(
    "student_academic_paths", metadata,
    Column("id", Integer, primary_key=True),
    Column("student_id", Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False),
    Column("school", String(200), nullable=False),
    Column("level", String(100), nullable=False),
    Column("start_year", Integer, nullable=False),
    Column("end_year", Integer),
    UniqueConstraint("student_id", "school", "level", name="uq_student_academic_paths"),
)


def init_schema(bind) -> None:
    """Create any missing tables. Existing tables are left untouched."""
    metadata.create_all(bind=bind)
    logger.info("Database schema ready (%d tables)", len(metadata.tables))
