"""Messages exchanged between a recruiter and a student about one job."""

from typing import List

from sqlalchemy import text
from sqlalchemy.orm import Session


def insert_message(db: Session, recruiter_id: int, student_id: int, job_id: int,
                   content: str, sender_type: str) -> dict:
    result = db.execute(
        text("""
            INSERT INTO messages (recruiter_id, student_id, job_id, content, sender_type)
            VALUES (:recruiter_id, :student_id, :job_id, :content, :sender_type)
            RETURNING id, recruiter_id, student_id, job_id, content, sender_type, created_at
        """),
        {
            "recruiter_id": recruiter_id,
            "student_id": student_id,
            "job_id": job_id,
            "content": content,
            "sender_type": sender_type,
        }
    )
    return dict(result.mappings().one())


def list_thread(db: Session, recruiter_id: int, student_id: int, job_id: int) -> List[dict]:
    """Whole thread, oldest first. Rows sharing a timestamp fall back to insertion order."""
    result = db.execute(
        text("""
            SELECT id, recruiter_id, student_id, job_id, content, sender_type, created_at
            FROM messages
            WHERE recruiter_id = :recruiter_id AND student_id = :student_id AND job_id = :job_id
            ORDER BY created_at ASC, id ASC
        """),
        {"recruiter_id": recruiter_id, "student_id": student_id, "job_id": job_id}
    )
    return [dict(r) for r in result.mappings().all()]
