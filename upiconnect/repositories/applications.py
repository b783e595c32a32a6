"""Applications of students to jobs."""

from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from upiconnect.repositories import row_to_dict


def insert_application(db: Session, job_id: int, student_id: int) -> dict:
    """Relies on the (job_id, student_id) unique constraint to reject duplicates."""
    result = db.execute(
        text("""
            INSERT INTO applications (job_id, student_id)
            VALUES (:job_id, :student_id)
            RETURNING id, job_id, student_id, status, created_at
        """),
        {"job_id": job_id, "student_id": student_id}
    )
    return dict(result.mappings().one())


def get_application(db: Session, application_id: int) -> Optional[dict]:
    result = db.execute(
        text("SELECT id, job_id, student_id, status, created_at FROM applications WHERE id = :id"),
        {"id": application_id}
    )
    return row_to_dict(result.mappings().first())


def set_status(db: Session, application_id: int, status: str) -> int:
    result = db.execute(
        text("UPDATE applications SET status = :status WHERE id = :id"),
        {"id": application_id, "status": status}
    )
    return result.rowcount


def delete_for_job(db: Session, job_id: int, keep_application_id: Optional[int] = None) -> int:
    if keep_application_id is None:
        result = db.execute(text("DELETE FROM applications WHERE job_id = :job_id"), {"job_id": job_id})
    else:
        result = db.execute(
            text("DELETE FROM applications WHERE job_id = :job_id AND id <> :keep_id"),
            {"job_id": job_id, "keep_id": keep_application_id}
        )
    return result.rowcount


def list_for_job(db: Session, job_id: int) -> List[dict]:
    result = db.execute(
        text("""
            SELECT a.id, a.job_id, a.student_id, a.status, a.created_at,
                   s.full_name AS student_name, s.degree AS student_degree
            FROM applications a LEFT JOIN students s ON a.student_id = s.id
            WHERE a.job_id = :job_id
            ORDER BY a.id DESC
        """),
        {"job_id": job_id}
    )
    return [dict(r) for r in result.mappings().all()]


def list_for_recruiter(db: Session, recruiter_id: int) -> List[dict]:
    result = db.execute(
        text("""
            SELECT a.id, a.job_id, a.student_id, a.status, a.created_at,
                   j.title AS job_title,
                   s.full_name AS student_name, s.degree AS student_degree,
                   s.phone AS student_phone, s.contact_email AS student_email,
                   s.expected_salary_range, s.education_level, s.experience
            FROM applications a
            JOIN jobs j ON a.job_id = j.id
            LEFT JOIN students s ON a.student_id = s.id
            WHERE j.recruiter_id = :recruiter_id
            ORDER BY a.id DESC
        """),
        {"recruiter_id": recruiter_id}
    )
    return [dict(r) for r in result.mappings().all()]


def list_for_student(db: Session, student_id: int) -> List[dict]:
    result = db.execute(
        text("""
            SELECT a.id, a.job_id, a.student_id, a.status, a.created_at,
                   j.title AS job_title, j.position AS job_position,
                   j.recruiter_id, r.company_name
            FROM applications a
            JOIN jobs j ON a.job_id = j.id
            LEFT JOIN recruiters r ON j.recruiter_id = r.id
            WHERE a.student_id = :student_id
            ORDER BY a.id DESC
        """),
        {"student_id": student_id}
    )
    return [dict(r) for r in result.mappings().all()]


def list_for_jobs(db: Session, job_ids: List[int]) -> List[dict]:
    if not job_ids:
        return []
    placeholders = ", ".join(f":j{i}" for i in range(len(job_ids)))
    params = {f"j{i}": job_id for i, job_id in enumerate(job_ids)}
    result = db.execute(
        text(f"SELECT id, job_id, status FROM applications WHERE job_id IN ({placeholders})"),
        params
    )
    return [dict(r) for r in result.mappings().all()]


def student_applied_to_recruiter(db: Session, student_id: int, recruiter_id: int) -> bool:
    result = db.execute(
        text("""
            SELECT a.id FROM applications a JOIN jobs j ON a.job_id = j.id
            WHERE a.student_id = :student_id AND j.recruiter_id = :recruiter_id
            LIMIT 1
        """),
        {"student_id": student_id, "recruiter_id": recruiter_id}
    )
    return result.fetchone() is not None


def find_application(db: Session, job_id: int, student_id: int) -> Optional[dict]:
    result = db.execute(
        text("""
            SELECT id, job_id, student_id, status, created_at FROM applications
            WHERE job_id = :job_id AND student_id = :student_id
        """),
        {"job_id": job_id, "student_id": student_id}
    )
    return row_to_dict(result.mappings().first())
