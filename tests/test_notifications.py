import pytest
from sqlalchemy.exc import OperationalError

from upiconnect.core.errors import DomainError, ErrorCode
from upiconnect.db.postgres import execute_raw_sql
from upiconnect.services import notification_service

URL = "/api/notifications/application-accepted"


def test_missing_application_id(client, recruiter, resend_post):
    resp = client.post(URL, json={}, headers=recruiter["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"] == "applicationId is required"
    resend_post.assert_not_called()


def test_unknown_application(client, recruiter):
    resp = client.post(URL, json={"applicationId": 999}, headers=recruiter["headers"])
    assert resp.status_code == 404
    assert resp.json()["error"] == "Application not found"


def test_requires_authentication(client, application, resend_post):
    resp = client.post(URL, json={"applicationId": application["id"]})
    assert resp.status_code in (401, 403)
    resend_post.assert_not_called()


def test_student_cannot_trigger_email(client, application, student, resend_post):
    resp = client.post(URL, json={"applicationId": application["id"]}, headers=student["headers"])
    assert resp.status_code == 403
    resend_post.assert_not_called()


def test_other_recruiter_cannot_trigger_email(client, application, make_recruiter, resend_post):
    other = make_recruiter(email="rh@globex.com.mx", company_name="Globex")
    resp = client.post(URL, json={"applicationId": application["id"]}, headers=other["headers"])
    assert resp.status_code == 404
    resend_post.assert_not_called()


def test_sends_the_acceptance_email(client, recruiter, application, resend_post):
    resp = client.post(URL, json={"applicationId": application["id"]}, headers=recruiter["headers"])
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "applicationId": application["id"], "studentEmail": "ana@upi.edu.mx"}

    args, kwargs = resend_post.call_args
    assert args[0] == "https://api.resend.com/emails"
    assert kwargs["headers"] == {"Authorization": "Bearer re_test_key"}
    assert kwargs["timeout"] == 10.0

    payload = kwargs["json"]
    assert payload["from"] == "onboarding@resend.dev"
    assert payload["subject"] == "Has sido preseleccionado para Backend Intern"
    assert "ACEPTADO como prospecto para Backend Intern" in payload["text"]
    assert f"Identificador de tu postulacion: {application['id']}" in payload["text"]


def test_missing_job_falls_back_to_generic_title(application, resend_post):
    execute_raw_sql("DELETE FROM jobs WHERE id = :id", {"id": application["job_id"]})

    result = notification_service.notify_application_accepted(application["id"])
    assert result["ok"] is True
    assert resend_post.call_args.kwargs["json"]["subject"] == "Has sido preseleccionado para una vacante"


def test_student_email_lookup_failure(client, recruiter, application, resend_post):
    execute_raw_sql("DELETE FROM users WHERE id = :id", {"id": application["student_id"]})

    resp = client.post(URL, json={"applicationId": application["id"]}, headers=recruiter["headers"])
    assert resp.status_code == 500
    assert resp.json()["code"] == "NOTIFICATION_LOOKUP_ERROR"
    resend_post.assert_not_called()


def test_identity_store_failure_is_tagged(monkeypatch, application, resend_post):
    def db_down(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("db down"))

    monkeypatch.setattr("upiconnect.repositories.users.get_user_by_id", db_down)

    with pytest.raises(DomainError) as exc:
        notification_service.notify_application_accepted(application["id"])
    assert exc.value.code == ErrorCode.NOTIFICATION_LOOKUP_ERROR
    resend_post.assert_not_called()


def test_provider_failure_maps_to_502(client, recruiter, application, resend_post):
    resend_post.return_value.status_code = 422
    resend_post.return_value.text = '{"message": "invalid from"}'

    resp = client.post(URL, json={"applicationId": application["id"]}, headers=recruiter["headers"])
    assert resp.status_code == 502
    assert resp.json()["code"] == "NOTIFICATION_EMAIL_ERROR"
    assert "invalid from" not in resp.text


def test_service_raises_tagged_errors():
    with pytest.raises(DomainError) as exc:
        notification_service.notify_application_accepted(None)
    assert exc.value.code == ErrorCode.NOTIFICATION_REQUEST_ERROR
    assert str(exc.value).startswith("NOTIFICATION_REQUEST_ERROR: ")

    with pytest.raises(DomainError) as exc:
        notification_service.notify_application_accepted(12345)
    assert exc.value.code == ErrorCode.APPLICATION_NOT_FOUND
