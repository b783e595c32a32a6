import re

from sqlalchemy.exc import OperationalError

from conftest import PASSWORD, count_rows, login


def test_register_and_login_student(client, student):
    resp = client.get("/api/auth/me", headers=student["headers"])
    assert resp.status_code == 200
    assert resp.json() == {"user_id": student["id"], "email": "ana@upi.edu.mx", "role": "student"}


def test_student_id_is_the_user_id(client, student):
    resp = client.get("/api/students/profile", headers=student["headers"])
    assert resp.status_code == 200
    assert resp.json()["id"] == student["id"]
    assert resp.json()["contact_email"] == "ana@upi.edu.mx"


def test_duplicate_email_is_rejected(client, student):
    resp = client.post("/api/auth/register/recruiter", json={
        "email": "ana@upi.edu.mx", "password": PASSWORD, "company_name": "Acme",
    })
    assert resp.status_code == 400
    assert resp.json()["code"] == "AUTH_ERROR"


def test_duplicate_enrollment_number_leaves_no_account(client, make_student):
    make_student(enrollment_number="2020A001")
    resp = client.post("/api/auth/register/student", json={
        "email": "beto@upi.edu.mx", "password": PASSWORD,
        "full_name": "Beto Ruiz", "enrollment_number": "2020A001",
    })
    assert resp.status_code == 400
    assert resp.json()["code"] == "STUDENT_INSERT_ERROR"
    assert count_rows("users", "email = :e", {"e": "beto@upi.edu.mx"}) == 0


def test_enrollment_number_format_is_validated(client):
    resp = client.post("/api/auth/register/student", json={
        "email": "beto@upi.edu.mx", "password": PASSWORD,
        "full_name": "Beto Ruiz", "enrollment_number": "ABC-123",
    })
    assert resp.status_code == 422


def test_wrong_password(client, student):
    resp = client.post("/api/auth/login", json={
        "email": "ana@upi.edu.mx", "password": "nope-nope", "role": "student",
    })
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid email or password.", "code": "LOGIN_ERROR"}


def test_login_with_the_other_role_fails(client, student):
    resp = client.post("/api/auth/login", json={
        "email": "ana@upi.edu.mx", "password": PASSWORD, "role": "recruiter",
    })
    assert resp.status_code == 401
    assert resp.json()["code"] == "LOGIN_ERROR"


def test_student_cannot_use_recruiter_routes(client, student):
    resp = client.get("/api/recruiters/profile", headers=student["headers"])
    assert resp.status_code == 403


def test_missing_or_bad_token(client):
    assert client.get("/api/auth/me").status_code in (401, 403)
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401


def test_update_password(client, student):
    resp = client.put("/api/auth/password", json={"new_password": "brand-new-pass"},
                      headers=student["headers"])
    assert resp.status_code == 200
    login(client, "ana@upi.edu.mx", "student", password="brand-new-pass")


def test_forgot_password_for_unknown_email_sends_nothing(client, resend_post):
    resp = client.post("/api/auth/forgot-password", json={"email": "nadie@upi.edu.mx"})
    assert resp.status_code == 200
    resend_post.assert_not_called()


def test_forgot_password_store_failure_is_tagged(client, monkeypatch, resend_post):
    def db_down(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("db down"))

    monkeypatch.setattr("upiconnect.repositories.users.get_user_by_email", db_down)

    resp = client.post("/api/auth/forgot-password", json={"email": "ana@upi.edu.mx"})
    assert resp.status_code == 400
    assert resp.json()["code"] == "PASSWORD_RESET_ERROR"
    assert "db down" not in resp.text
    resend_post.assert_not_called()


def test_password_reset_flow(client, student, resend_post):
    resp = client.post("/api/auth/forgot-password", json={"email": "ana@upi.edu.mx"})
    assert resp.status_code == 200
    resend_post.assert_called_once()

    payload = resend_post.call_args.kwargs["json"]
    assert payload["to"] == ["ana@upi.edu.mx"]
    match = re.search(r"/auth/reset-password\?token=([\w-]+)", payload["text"])
    assert match
    token = match.group(1)

    resp = client.post("/api/auth/reset-password", json={"token": token, "new_password": "reset-pass-1"})
    assert resp.status_code == 200
    login(client, "ana@upi.edu.mx", "student", password="reset-pass-1")

    # one-time token
    resp = client.post("/api/auth/reset-password", json={"token": token, "new_password": "again-pass-2"})
    assert resp.status_code == 400
    assert resp.json()["code"] == "PASSWORD_RESET_ERROR"


def test_reset_with_unknown_token(client):
    resp = client.post("/api/auth/reset-password", json={"token": "bogus", "new_password": "whatever1"})
    assert resp.status_code == 400
    assert resp.json()["code"] == "PASSWORD_RESET_ERROR"
