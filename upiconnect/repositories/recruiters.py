"""Recruiter profile and interests."""

from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from upiconnect.repositories import row_to_dict


def insert_recruiter(db: Session, recruiter_id: int, company_name: str,
                     position: Optional[str], contact_email: str) -> None:
    db.execute(
        text("""
            INSERT INTO recruiters (id, company_name, position, contact_email)
            VALUES (:id, :company_name, :position, :contact_email)
        """),
        {
            "id": recruiter_id,
            "company_name": company_name,
            "position": position,
            "contact_email": contact_email,
        }
    )


def get_recruiter(db: Session, recruiter_id: int) -> Optional[dict]:
    result = db.execute(
        text("SELECT id, company_name, position, contact_email, created_at FROM recruiters WHERE id = :id"),
        {"id": recruiter_id}
    )
    return row_to_dict(result.mappings().first())


def recruiter_exists(db: Session, recruiter_id: int) -> bool:
    result = db.execute(text("SELECT id FROM recruiters WHERE id = :id"), {"id": recruiter_id})
    return result.fetchone() is not None


def update_recruiter(db: Session, recruiter_id: int, fields: Dict[str, Any]) -> int:
    updates = []
    params: Dict[str, Any] = {"id": recruiter_id}
    for column in ("company_name", "position", "contact_email"):
        if fields.get(column) is not None:
            updates.append(f"{column} = :{column}")
            params[column] = fields[column]
    if not updates:
        return 0
    result = db.execute(
        text(f"UPDATE recruiters SET {', '.join(updates)} WHERE id = :id"),
        params
    )
    return result.rowcount


# ============================================================
# INTERESTS
# ============================================================

def insert_interest(db: Session, recruiter_id: int, interest: str) -> int:
    result = db.execute(
        text("""
            INSERT INTO recruiter_interests (recruiter_id, interest)
            VALUES (:recruiter_id, :interest)
            RETURNING id
        """),
        {"recruiter_id": recruiter_id, "interest": interest}
    )
    return result.scalar_one()


def delete_interest(db: Session, interest_id: int, recruiter_id: int) -> int:
    result = db.execute(
        text("DELETE FROM recruiter_interests WHERE id = :id AND recruiter_id = :recruiter_id"),
        {"id": interest_id, "recruiter_id": recruiter_id}
    )
    return result.rowcount


def list_interests(db: Session, recruiter_id: int) -> List[dict]:
    result = db.execute(
        text("""
            SELECT id, recruiter_id, interest, created_at FROM recruiter_interests
            WHERE recruiter_id = :id ORDER BY id DESC
        """),
        {"id": recruiter_id}
    )
    return [dict(r) for r in result.mappings().all()]
