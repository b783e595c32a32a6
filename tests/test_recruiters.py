from conftest import count_rows

from upiconnect.services import job_service


def test_profile_update(client, recruiter):
    resp = client.put("/api/recruiters/profile", json={"position": "Talent Lead"}, headers=recruiter["headers"])
    assert resp.status_code == 200

    profile = client.get("/api/recruiters/profile", headers=recruiter["headers"]).json()
    assert profile["id"] == recruiter["id"]
    assert profile["company_name"] == "Acme"
    assert profile["position"] == "Talent Lead"


def test_profile_update_needs_fields(client, recruiter):
    assert client.put("/api/recruiters/profile", json={}, headers=recruiter["headers"]).status_code == 400


def test_interests(client, recruiter):
    for interest in ("Backend", "Data"):
        resp = client.post("/api/recruiters/interests", json={"interest": interest}, headers=recruiter["headers"])
        assert resp.status_code == 201

    rows = client.get("/api/recruiters/interests", headers=recruiter["headers"]).json()
    assert [r["interest"] for r in rows] == ["Data", "Backend"]

    resp = client.delete(f"/api/recruiters/interests/{rows[0]['id']}", headers=recruiter["headers"])
    assert resp.status_code == 200
    assert count_rows("recruiter_interests") == 1


def test_blank_interest(client, recruiter):
    resp = client.post("/api/recruiters/interests", json={"interest": "   "}, headers=recruiter["headers"])
    assert resp.status_code == 422


def test_cannot_delete_someone_elses_interest(client, recruiter, make_recruiter):
    interest_id = client.post("/api/recruiters/interests", json={"interest": "Backend"},
                              headers=recruiter["headers"]).json()["id"]
    other = make_recruiter(email="rh@globex.com.mx", company_name="Globex")
    resp = client.delete(f"/api/recruiters/interests/{interest_id}", headers=other["headers"])
    assert resp.status_code == 404
    assert count_rows("recruiter_interests") == 1


def test_recruiter_settings_defaults_and_save(client, recruiter):
    resp = client.get("/api/recruiters/settings", headers=recruiter["headers"])
    assert resp.json() == {"email_notifications": True, "application_notifications": True,
                           "weekly_summary": False}

    new = {"email_notifications": True, "application_notifications": False, "weekly_summary": True}
    client.put("/api/recruiters/settings", json=new, headers=recruiter["headers"])
    client.put("/api/recruiters/settings", json=new, headers=recruiter["headers"])
    assert client.get("/api/recruiters/settings", headers=recruiter["headers"]).json() == new
    assert count_rows("recruiter_settings") == 1


def test_public_profile(client, recruiter, student, make_job):
    make_job(title="Backend Intern")
    client.post("/api/recruiters/interests", json={"interest": "Cloud"}, headers=recruiter["headers"])

    resp = client.get(f"/api/recruiters/{recruiter['id']}/public", headers=student["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["recruiter"]["company_name"] == "Acme"
    assert [j["title"] for j in body["jobs"]] == ["Backend Intern"]
    assert [i["interest"] for i in body["interests"]] == ["Cloud"]

    assert client.get("/api/recruiters/999/public", headers=student["headers"]).status_code == 404


def test_analytics(client, recruiter, make_job, make_student):
    open_job = make_job(title="Open", available_slots=2)
    closed_job = make_job(title="Closed")
    client.put(f"/api/jobs/{closed_job['id']}/status", json={"status": "CERRADA"}, headers=recruiter["headers"])

    ids = []
    for n, email in enumerate(("a@upi.edu.mx", "b@upi.edu.mx", "c@upi.edu.mx")):
        s = make_student(email=email, full_name=f"Student {n}")
        ids.append(job_service.apply_to_job(open_job["id"], s["id"])["id"])
    job_service.set_application_status(ids[0], "ACEPTADO")
    job_service.set_application_status(ids[1], "RECHAZADO")

    body = client.get("/api/recruiters/analytics", headers=recruiter["headers"]).json()
    assert body["total_jobs"] == 2
    assert body["open_jobs"] == 1
    assert body["closed_jobs"] == 1
    assert body["total_applications"] == 3
    assert body["accepted_applications"] == 1
    assert body["rejected_applications"] == 1
    assert body["acceptance_rate"] == 33

    per_job = {j["title"]: j for j in body["jobs"]}
    assert per_job["Open"]["total_applications"] == 3
    assert per_job["Open"]["available_slots"] == 2
    assert per_job["Closed"]["total_applications"] == 0


def test_analytics_without_applications(client, recruiter):
    body = client.get("/api/recruiters/analytics", headers=recruiter["headers"]).json()
    assert body["acceptance_rate"] == 0
    assert body["jobs"] == []
