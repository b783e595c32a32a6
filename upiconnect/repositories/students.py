"""Student profile, academic paths and skills."""

from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from upiconnect.repositories import row_to_dict, load_tags

STUDENT_COLUMNS = """
    s.id, s.full_name, s.degree, s.enrollment_number, s.contact_email, s.phone,
    s.expected_salary_range, s.education_level, s.experience, s.soft_skills,
    s.tech_skills, s.average, s.status, s.service_social_status,
    s.practices_status, s.created_at
"""

# payload key -> column, for partial updates
UPDATABLE_COLUMNS = (
    "full_name", "degree", "enrollment_number", "contact_email", "phone",
    "expected_salary_range", "education_level", "experience", "soft_skills",
    "tech_skills", "average", "status", "service_social_status", "practices_status",
)


def _decode(row) -> Optional[dict]:
    student = row_to_dict(row)
    if student is None:
        return None
    student["soft_skills"] = load_tags(student.get("soft_skills"))
    student["tech_skills"] = load_tags(student.get("tech_skills"))
    if student.get("average") is not None:
        student["average"] = float(student["average"])
    return student


def insert_student(db: Session, student_id: int, full_name: str, enrollment_number: Optional[str],
                   contact_email: Optional[str], degree: Optional[str] = None) -> None:
    db.execute(
        text("""
            INSERT INTO students (id, full_name, enrollment_number, contact_email, degree)
            VALUES (:id, :full_name, :enrollment_number, :contact_email, :degree)
        """),
        {
            "id": student_id,
            "full_name": full_name,
            "enrollment_number": enrollment_number,
            "contact_email": contact_email,
            "degree": degree,
        }
    )


def get_student(db: Session, student_id: int) -> Optional[dict]:
    result = db.execute(
        text(f"SELECT {STUDENT_COLUMNS} FROM students s WHERE s.id = :id"),
        {"id": student_id}
    )
    return _decode(result.mappings().first())


def student_exists(db: Session, student_id: int) -> bool:
    result = db.execute(text("SELECT id FROM students WHERE id = :id"), {"id": student_id})
    return result.fetchone() is not None


def update_student(db: Session, student_id: int, fields: Dict[str, Any]) -> int:
    """Update only the given columns. Unknown keys are ignored."""
    updates = []
    params: Dict[str, Any] = {"id": student_id}
    for column in UPDATABLE_COLUMNS:
        if column in fields:
            updates.append(f"{column} = :{column}")
            params[column] = fields[column]
    if not updates:
        return 0
    result = db.execute(
        text(f"UPDATE students SET {', '.join(updates)} WHERE id = :id"),
        params
    )
    return result.rowcount


# ============================================================
# ACADEMIC PATHS
# ============================================================

def insert_academic_path(db: Session, student_id: int, school: str, level: str,
                         start_year: int, end_year: Optional[int]) -> int:
    result = db.execute(
        text("""
            INSERT INTO student_academic_paths (student_id, school, level, start_year, end_year)
            VALUES (:student_id, :school, :level, :start_year, :end_year)
            RETURNING id
        """),
        {
            "student_id": student_id,
            "school": school,
            "level": level,
            "start_year": start_year,
            "end_year": end_year,
        }
    )
    return result.scalar_one()


def list_academic_paths(db: Session, student_id: int) -> List[dict]:
    result = db.execute(
        text("""
            SELECT id, student_id, school, level, start_year, end_year
            FROM student_academic_paths WHERE student_id = :id ORDER BY start_year, id
        """),
        {"id": student_id}
    )
    return [dict(r) for r in result.mappings().all()]


def delete_academic_path(db: Session, path_id: int, student_id: int) -> int:
    result = db.execute(
        text("DELETE FROM student_academic_paths WHERE id = :id AND student_id = :student_id"),
        {"id": path_id, "student_id": student_id}
    )
    return result.rowcount


# ============================================================
# SKILLS
# ============================================================

def find_skill_id(db: Session, name: str) -> Optional[int]:
    result = db.execute(text("SELECT id FROM skills WHERE name = :name"), {"name": name})
    row = result.fetchone()
    return row[0] if row else None


def insert_skill(db: Session, name: str) -> int:
    result = db.execute(
        text("INSERT INTO skills (name) VALUES (:name) RETURNING id"),
        {"name": name}
    )
    return result.scalar_one()


def link_skill(db: Session, student_id: int, skill_id: int) -> None:
    db.execute(
        text("INSERT INTO student_skills (student_id, skill_id) VALUES (:student_id, :skill_id)"),
        {"student_id": student_id, "skill_id": skill_id}
    )


def unlink_skill(db: Session, student_id: int, skill_id: int) -> int:
    result = db.execute(
        text("DELETE FROM student_skills WHERE student_id = :student_id AND skill_id = :skill_id"),
        {"student_id": student_id, "skill_id": skill_id}
    )
    return result.rowcount


def list_student_skills(db: Session, student_id: int) -> List[dict]:
    result = db.execute(
        text("""
            SELECT sk.id, sk.name FROM student_skills ss
            JOIN skills sk ON ss.skill_id = sk.id
            WHERE ss.student_id = :id ORDER BY sk.name
        """),
        {"id": student_id}
    )
    return [dict(r) for r in result.mappings().all()]
