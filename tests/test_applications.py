from upiconnect.db.postgres import execute_raw_sql
from upiconnect.services import job_service


def _statuses():
    rows = execute_raw_sql("SELECT id, status FROM applications ORDER BY id")
    return {r["id"]: r["status"] for r in rows}


def test_new_application_is_pending(application):
    assert _statuses() == {application["id"]: "PENDIENTE"}


def test_status_update_touches_only_the_given_row():
    for app_id, student_id in ((41, 1), (42, 2), (43, 3)):
        execute_raw_sql(
            "INSERT INTO applications (id, job_id, student_id, status) VALUES (:id, 1, :s, 'PENDIENTE')",
            {"id": app_id, "s": student_id},
        )

    assert job_service.set_application_status(42, "ACEPTADO") == 1
    assert _statuses() == {41: "PENDIENTE", 42: "ACEPTADO", 43: "PENDIENTE"}


def test_any_status_value_is_stored(client, recruiter, application):
    resp = client.put(f"/api/recruiters/applications/{application['id']}/status",
                      json={"status": "ENTREVISTA"}, headers=recruiter["headers"])
    assert resp.status_code == 200
    assert resp.json()["notification_sent"] is None
    assert _statuses()[application["id"]] == "ENTREVISTA"

    # no transition guard: back to pending is allowed
    job_service.set_application_status(application["id"], "RECHAZADO")
    job_service.set_application_status(application["id"], "PENDIENTE")
    assert _statuses()[application["id"]] == "PENDIENTE"


def test_accepting_notifies_the_student(client, recruiter, application, resend_post):
    resp = client.put(f"/api/recruiters/applications/{application['id']}/status",
                      json={"status": "ACEPTADO"}, headers=recruiter["headers"])
    assert resp.status_code == 200
    assert resp.json()["notification_sent"] is True

    payload = resend_post.call_args.kwargs["json"]
    assert payload["to"] == ["ana@upi.edu.mx"]
    assert payload["subject"] == "Has sido preseleccionado para Backend Intern"


def test_failed_notification_keeps_the_status(client, recruiter, application, resend_post):
    resend_post.return_value.status_code = 500
    resend_post.return_value.text = "boom"

    resp = client.put(f"/api/recruiters/applications/{application['id']}/status",
                      json={"status": "ACEPTADO"}, headers=recruiter["headers"])
    assert resp.status_code == 200
    assert resp.json()["notification_sent"] is False
    assert "could not be sent" in resp.json()["message"]
    assert _statuses()[application["id"]] == "ACEPTADO"


def test_rejecting_sends_no_email(client, recruiter, application, resend_post):
    client.put(f"/api/recruiters/applications/{application['id']}/status",
               json={"status": "RECHAZADO"}, headers=recruiter["headers"])
    resend_post.assert_not_called()


def test_other_recruiter_cannot_change_status(client, make_recruiter, application):
    other = make_recruiter(email="rh@globex.com.mx", company_name="Globex")
    resp = client.put(f"/api/recruiters/applications/{application['id']}/status",
                      json={"status": "ACEPTADO"}, headers=other["headers"])
    assert resp.status_code == 404
    assert _statuses()[application["id"]] == "PENDIENTE"


def test_recruiter_applications_view(client, recruiter, student, application):
    client.put("/api/students/profile", json={"phone": "5550001111", "experience": "1 year"},
               headers=student["headers"])

    resp = client.get("/api/recruiters/applications", headers=recruiter["headers"])
    [row] = resp.json()
    assert row["job_title"] == "Backend Intern"
    assert row["student_name"] == "Ana Lopez"
    assert row["student_phone"] == "5550001111"
    assert row["student_email"] == "ana@upi.edu.mx"
    assert row["experience"] == "1 year"


def test_student_applications_view_newest_first(client, make_job, student):
    first = make_job(title="First")
    second = make_job(title="Second")
    client.post(f"/api/jobs/{first['id']}/apply", headers=student["headers"])
    client.post(f"/api/jobs/{second['id']}/apply", headers=student["headers"])

    rows = client.get("/api/students/applications", headers=student["headers"]).json()
    assert [r["job_title"] for r in rows] == ["Second", "First"]
    assert rows[0]["company_name"] == "Acme"
    assert rows[0]["job_position"] == "Intern"


def test_student_summary(client, make_job, recruiter, student):
    ids = []
    for title in ("A", "B", "C"):
        job = make_job(title=title)
        ids.append(client.post(f"/api/jobs/{job['id']}/apply", headers=student["headers"]).json()["id"])
    job_service.set_application_status(ids[0], "ACEPTADO")
    job_service.set_application_status(ids[1], "RECHAZADO")

    resp = client.get("/api/students/summary", headers=student["headers"])
    assert resp.json() == {"total": 3, "accepted": 1, "rejected": 1, "pending": 1}


def test_applicant_detail(client, recruiter, student, application, make_recruiter):
    resp = client.get(f"/api/recruiters/applicants/{student['id']}", headers=recruiter["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["student"]["full_name"] == "Ana Lopez"
    assert [a["id"] for a in body["applications"]] == [application["id"]]

    other = make_recruiter(email="rh@globex.com.mx", company_name="Globex")
    resp = client.get(f"/api/recruiters/applicants/{student['id']}", headers=other["headers"])
    assert resp.status_code == 404


def test_applicant_detail_with_several_applications(client, recruiter, student, application, make_job):
    second = make_job(title="Data Intern")
    client.post(f"/api/jobs/{second['id']}/apply", headers=student["headers"])

    resp = client.get(f"/api/recruiters/applicants/{student['id']}", headers=recruiter["headers"])
    assert resp.status_code == 200
    assert len(resp.json()["applications"]) == 2
