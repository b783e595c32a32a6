import os
import tempfile

# Point the app at a throwaway SQLite file before anything imports the settings
_DB_DIR = tempfile.mkdtemp(prefix="upiconnect-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["RESEND_API_KEY"] = "re_test_key"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["APP_BASE_URL"] = "http://localhost:3000"

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from upiconnect.db.postgres import engine, execute_raw_sql
from upiconnect.db.schema import metadata
from upiconnect.main import app

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def fresh_db():
    metadata.drop_all(bind=engine)
    metadata.create_all(bind=engine)
    yield


@pytest.fixture(autouse=True)
def resend_post(monkeypatch):
    """Every outgoing Resend call is captured here; nothing leaves the process."""
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = {"id": "email_123"}
    post = MagicMock(return_value=response)
    monkeypatch.setattr("upiconnect.services.email_client.requests.post", post)
    return post


@pytest.fixture
def client():
    return TestClient(app)


def login(client, email, role, password=PASSWORD):
    resp = client.post("/api/auth/login", json={"email": email, "password": password, "role": role})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    return {"id": body["user_id"], "email": email,
            "headers": {"Authorization": f"Bearer {body['access_token']}"}}


@pytest.fixture
def make_student(client):
    def _make(email="ana@upi.edu.mx", full_name="Ana Lopez", enrollment_number=None, degree="ISC"):
        payload = {"email": email, "password": PASSWORD, "full_name": full_name, "degree": degree}
        if enrollment_number:
            payload["enrollment_number"] = enrollment_number
        resp = client.post("/api/auth/register/student", json=payload)
        assert resp.status_code == 201, resp.text
        return login(client, email, "student")
    return _make


@pytest.fixture
def make_recruiter(client):
    def _make(email="rh@acme.com.mx", company_name="Acme", position="HR"):
        resp = client.post("/api/auth/register/recruiter", json={
            "email": email, "password": PASSWORD, "company_name": company_name, "position": position,
        })
        assert resp.status_code == 201, resp.text
        return login(client, email, "recruiter")
    return _make


@pytest.fixture
def student(make_student):
    return make_student()


@pytest.fixture
def recruiter(make_recruiter):
    return make_recruiter()


@pytest.fixture
def make_job(client, recruiter):
    def _make(owner=None, **fields):
        owner = owner or recruiter
        payload = {"title": "Backend Intern", "position": "Intern", "tags": ["Python", "SQL"]}
        payload.update(fields)
        resp = client.post("/api/jobs", json=payload, headers=owner["headers"])
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make


@pytest.fixture
def job(make_job):
    return make_job()


@pytest.fixture
def application(client, job, student):
    resp = client.post(f"/api/jobs/{job['id']}/apply", headers=student["headers"])
    assert resp.status_code == 201, resp.text
    return {"id": resp.json()["id"], "job_id": job["id"], "student_id": student["id"]}


def count_rows(table, where="1=1", params=None):
    rows = execute_raw_sql(f"SELECT COUNT(*) AS n FROM {table} WHERE {where}", params)
    return rows[0]["n"]
