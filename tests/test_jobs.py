from conftest import count_rows

from upiconnect.db.postgres import execute_raw_sql
from upiconnect.services import job_service


def test_available_slots_default_to_one(job):
    assert job["available_slots"] == 1
    assert job["status"] == "ABIERTA"
    assert job["company_name"] == "Acme"
    assert job["tags"] == ["Python", "SQL"]


def test_available_slots_keep_supplied_value(make_job):
    job = make_job(available_slots=3)
    assert job["available_slots"] == 3


def test_service_defaults_when_fields_are_missing(recruiter):
    job = job_service.create_job({"recruiter_id": recruiter["id"], "title": "QA", "position": "QA"})
    assert job["available_slots"] == 1
    assert job["status"] == "ABIERTA"
    assert job["tags"] == []


def test_list_open_jobs_filters(client, make_job, recruiter):
    make_job(title="Backend Intern", tags=["Python"])
    make_job(title="Data Analyst", tags=["SQL", "PowerBI"])
    closed = make_job(title="Backend Senior", tags=["Go"])
    client.put(f"/api/jobs/{closed['id']}/status", json={"status": "CERRADA"}, headers=recruiter["headers"])

    titles = [j["title"] for j in client.get("/api/jobs").json()]
    assert titles == ["Data Analyst", "Backend Intern"]

    resp = client.get("/api/jobs", params={"search_title": "backend"})
    assert [j["title"] for j in resp.json()] == ["Backend Intern"]

    resp = client.get("/api/jobs", params={"search_tag": "power"})
    assert [j["title"] for j in resp.json()] == ["Data Analyst"]


def test_get_missing_job(client):
    assert client.get("/api/jobs/999").status_code == 404


def test_update_job_fields(client, job, recruiter):
    resp = client.put(f"/api/jobs/{job['id']}", json={"title": "Backend Trainee", "salary": 12000},
                      headers=recruiter["headers"])
    assert resp.status_code == 200

    updated = client.get(f"/api/jobs/{job['id']}").json()
    assert updated["title"] == "Backend Trainee"
    assert updated["salary"] == 12000
    assert updated["position"] == "Intern"


def test_other_recruiter_cannot_touch_job(client, job, make_recruiter):
    other = make_recruiter(email="rh@globex.com.mx", company_name="Globex")
    resp = client.put(f"/api/jobs/{job['id']}/availability", json={"available_slots": 9},
                      headers=other["headers"])
    assert resp.status_code == 404
    assert client.delete(f"/api/jobs/{job['id']}", headers=other["headers"]).status_code == 404


def test_availability_is_overwritten(client, job, recruiter, application):
    # accepted applications are not taken into account
    client.put(f"/api/recruiters/applications/{application['id']}/status",
               json={"status": "ACEPTADO"}, headers=recruiter["headers"])

    for slots in (5, 0):
        resp = client.put(f"/api/jobs/{job['id']}/availability", json={"available_slots": slots},
                          headers=recruiter["headers"])
        assert resp.status_code == 200
        assert client.get(f"/api/jobs/{job['id']}").json()["available_slots"] == slots


def test_availability_must_be_a_non_negative_integer(client, job, recruiter):
    for bad in (-1, "many", 2.5):
        resp = client.put(f"/api/jobs/{job['id']}/availability", json={"available_slots": bad},
                          headers=recruiter["headers"])
        assert resp.status_code == 422


def test_accepting_does_not_decrement_slots(client, make_job, recruiter, student):
    job = make_job(available_slots=2)
    app_id = client.post(f"/api/jobs/{job['id']}/apply", headers=student["headers"]).json()["id"]
    client.put(f"/api/recruiters/applications/{app_id}/status",
               json={"status": "ACEPTADO"}, headers=recruiter["headers"])
    assert client.get(f"/api/jobs/{job['id']}").json()["available_slots"] == 2


def test_duplicate_application_is_rejected(client, job, student, application):
    resp = client.post(f"/api/jobs/{job['id']}/apply", headers=student["headers"])
    assert resp.status_code == 409
    assert resp.json()["code"] == "JOB_APPLICATION_ERROR"
    assert count_rows("applications", "job_id = :j AND student_id = :s",
                      {"j": job["id"], "s": student["id"]}) == 1


def test_cannot_apply_to_closed_job(client, job, recruiter, student):
    client.put(f"/api/jobs/{job['id']}/status", json={"status": "CERRADA"}, headers=recruiter["headers"])
    resp = client.post(f"/api/jobs/{job['id']}/apply", headers=student["headers"])
    assert resp.status_code == 400


def test_cannot_apply_without_slots(client, make_job, student):
    full = make_job(title="Full", available_slots=0)
    resp = client.post(f"/api/jobs/{full['id']}/apply", headers=student["headers"])
    assert resp.status_code == 400
    assert resp.json()["detail"] == "No slots available"
    assert count_rows("applications", "job_id = :j", {"j": full["id"]}) == 0


def test_recruiter_cannot_apply(client, job, recruiter):
    assert client.post(f"/api/jobs/{job['id']}/apply", headers=recruiter["headers"]).status_code == 403


def test_close_job_and_delete_other_applications(client, job, recruiter, make_student, application):
    other = make_student(email="beto@upi.edu.mx", full_name="Beto Ruiz")
    client.post(f"/api/jobs/{job['id']}/apply", headers=other["headers"])
    third = make_student(email="caro@upi.edu.mx", full_name="Caro Diaz")
    client.post(f"/api/jobs/{job['id']}/apply", headers=third["headers"])

    resp = client.put(f"/api/jobs/{job['id']}/status", json={
        "status": "CERRADA", "delete_applications": True, "keep_application_id": application["id"],
    }, headers=recruiter["headers"])
    assert resp.status_code == 200
    assert resp.json()["deleted_applications"] == 2

    remaining = execute_raw_sql("SELECT id FROM applications WHERE job_id = :j", {"j": job["id"]})
    assert [r["id"] for r in remaining] == [application["id"]]
    assert client.get(f"/api/jobs/{job['id']}").json()["status"] == "CERRADA"


def test_closing_without_flag_keeps_applications(client, job, recruiter, application):
    resp = client.put(f"/api/jobs/{job['id']}/status", json={"status": "CERRADA"},
                      headers=recruiter["headers"])
    assert resp.json()["deleted_applications"] == 0
    assert count_rows("applications", "job_id = :j", {"j": job["id"]}) == 1


def test_delete_job_removes_applications_but_keeps_messages(client, job, recruiter, student, application):
    resp = client.post("/api/messages", json={
        "student_id": student["id"], "job_id": job["id"], "content": "Hola Ana",
    }, headers=recruiter["headers"])
    assert resp.status_code == 201

    resp = client.delete(f"/api/jobs/{job['id']}", headers=recruiter["headers"])
    assert resp.status_code == 200

    assert client.get(f"/api/jobs/{job['id']}").status_code == 404
    assert count_rows("applications", "job_id = :j", {"j": job["id"]}) == 0
    assert count_rows("messages", "job_id = :j", {"j": job["id"]}) == 1


def test_list_my_jobs(client, make_job, recruiter, make_recruiter):
    make_job(title="One")
    make_job(title="Two")
    other = make_recruiter(email="rh@globex.com.mx", company_name="Globex")
    make_job(owner=other, title="Three")

    resp = client.get("/api/jobs/mine", headers=recruiter["headers"])
    assert [j["title"] for j in resp.json()] == ["Two", "One"]


def test_job_applications_list(client, job, recruiter, application):
    resp = client.get(f"/api/jobs/{job['id']}/applications", headers=recruiter["headers"])
    assert resp.status_code == 200
    [row] = resp.json()
    assert row["student_name"] == "Ana Lopez"
    assert row["status"] == "PENDIENTE"
