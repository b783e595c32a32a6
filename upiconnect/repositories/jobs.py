"""Job postings."""

from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from upiconnect.repositories import row_to_dict, dump_tags, load_tags

JOB_COLUMNS = """
    j.id, j.recruiter_id, j.title, j.position, j.description, j.degree_required,
    j.salary, j.available_slots, j.status, j.tags, j.created_at
"""

UPDATABLE_COLUMNS = ("title", "position", "description", "degree_required", "salary", "status", "tags")


def _decode(row) -> Optional[dict]:
    job = row_to_dict(row)
    if job is None:
        return None
    job["tags"] = load_tags(job.get("tags"))
    if job.get("salary") is not None:
        job["salary"] = float(job["salary"])
    return job


def insert_job(db: Session, payload: Dict[str, Any]) -> dict:
    result = db.execute(
        text("""
            INSERT INTO jobs (recruiter_id, title, position, description, degree_required,
                              salary, available_slots, status, tags)
            VALUES (:recruiter_id, :title, :position, :description, :degree_required,
                    :salary, :available_slots, :status, :tags)
            RETURNING id
        """),
        {**payload, "tags": dump_tags(payload.get("tags"))}
    )
    job_id = result.scalar_one()
    return get_job(db, job_id)


def get_job(db: Session, job_id: int) -> Optional[dict]:
    result = db.execute(
        text(f"""
            SELECT {JOB_COLUMNS}, r.company_name
            FROM jobs j LEFT JOIN recruiters r ON j.recruiter_id = r.id
            WHERE j.id = :id
        """),
        {"id": job_id}
    )
    return _decode(result.mappings().first())


def get_job_owner(db: Session, job_id: int) -> Optional[int]:
    result = db.execute(text("SELECT recruiter_id FROM jobs WHERE id = :id"), {"id": job_id})
    row = result.fetchone()
    return row[0] if row else None


def get_job_title(db: Session, job_id: int) -> Optional[str]:
    result = db.execute(text("SELECT title FROM jobs WHERE id = :id"), {"id": job_id})
    row = result.fetchone()
    return row[0] if row else None


def list_jobs_by_status(db: Session, status: str) -> List[dict]:
    result = db.execute(
        text(f"""
            SELECT {JOB_COLUMNS}, r.company_name
            FROM jobs j LEFT JOIN recruiters r ON j.recruiter_id = r.id
            WHERE j.status = :status
            ORDER BY j.created_at DESC, j.id DESC
        """),
        {"status": status}
    )
    return [_decode(r) for r in result.mappings().all()]


def list_recruiter_jobs(db: Session, recruiter_id: int) -> List[dict]:
    result = db.execute(
        text(f"""
            SELECT {JOB_COLUMNS}, r.company_name
            FROM jobs j LEFT JOIN recruiters r ON j.recruiter_id = r.id
            WHERE j.recruiter_id = :id
            ORDER BY j.id DESC
        """),
        {"id": recruiter_id}
    )
    return [_decode(r) for r in result.mappings().all()]


def update_job(db: Session, job_id: int, fields: Dict[str, Any]) -> int:
    updates = []
    params: Dict[str, Any] = {"id": job_id}
    for column in UPDATABLE_COLUMNS:
        if column in fields:
            updates.append(f"{column} = :{column}")
            params[column] = dump_tags(fields[column]) if column == "tags" else fields[column]
    if not updates:
        return 0
    result = db.execute(
        text(f"UPDATE jobs SET {', '.join(updates)} WHERE id = :id"),
        params
    )
    return result.rowcount


def set_available_slots(db: Session, job_id: int, available_slots: int) -> int:
    result = db.execute(
        text("UPDATE jobs SET available_slots = :slots WHERE id = :id"),
        {"id": job_id, "slots": available_slots}
    )
    return result.rowcount


def set_status(db: Session, job_id: int, status: str) -> int:
    result = db.execute(
        text("UPDATE jobs SET status = :status WHERE id = :id"),
        {"id": job_id, "status": status}
    )
    return result.rowcount


def delete_job(db: Session, job_id: int) -> int:
    result = db.execute(text("DELETE FROM jobs WHERE id = :id"), {"id": job_id})
    return result.rowcount
