"""
Tests for the CRUD API, dashboard endpoint and HTML page.

Each test gets a fresh in-memory store through the ``client`` fixture.
"""

from datetime import datetime, timedelta

import pytest

from jobdeck.schemas import ApplicationStatus


RESUME = {
    "header": {"name": "Jordan Lee", "email": "jordan@example.com"},
    "experience": [
        {"company": "Initech", "title": "Backend Engineer", "bullets": ["Built billing APIs"]}
    ],
    "skills": {"languages": ["Python"]},
}


def _create_application(client, **overrides):
    body = {"company": "Acme", "role": "Engineer"}
    body.update(overrides)
    response = client.post("/api/applications/", json=body)
    assert response.status_code == 200, response.text
    return response.json()


# ============================================================
# System
# ============================================================


class TestSystem:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == "1.0.0"
        assert isinstance(body["ai_configured"], bool)
        assert body["timestamp"].endswith("+00:00")

    def test_security_headers(self, client):
        response = client.get("/api/health")
        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "DENY"
        assert response.headers["access-control-allow-origin"] == "*"


# ============================================================
# Master resume
# ============================================================


class TestResumeApi:
    def test_default_resume_is_incomplete(self, client):
        assert client.get("/api/resume/").json()["header"]["name"] == ""
        status = client.get("/api/resume/status").json()
        assert status == {"complete": False, "has_name": False, "experience_count": 0}

    def test_replace_resume(self, client, store):
        response = client.put("/api/resume/", json=RESUME)
        assert response.status_code == 200
        assert response.json()["header"]["name"] == "Jordan Lee"
        assert store.master_resume.is_complete
        assert client.get("/api/resume/status").json()["complete"] is True

    def test_malformed_resume_is_400(self, client):
        response = client.put("/api/resume/", json={"experience": "lots"})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"


# ============================================================
# Job descriptions
# ============================================================


class TestJobsApi:
    def test_create_get_delete(self, client):
        created = client.post("/api/jobs/", json={
            "company": "Globex", "position": "Platform Engineer",
            "required_skills": ["Python"],
        }).json()
        assert created["id"]

        fetched = client.get(f"/api/jobs/{created['id']}").json()
        assert fetched["required_skills"] == ["Python"]

        assert client.delete(f"/api/jobs/{created['id']}").status_code == 200
        assert client.get(f"/api/jobs/{created['id']}").status_code == 404

    def test_search(self, client):
        client.post("/api/jobs/", json={"company": "Globex", "position": "Platform Engineer"})
        client.post("/api/jobs/", json={"company": "Hooli", "position": "Data Scientist"})
        results = client.get("/api/jobs/", params={"search": "hoo"}).json()
        assert [j["company"] for j in results] == ["Hooli"]

    def test_missing_company_is_400(self, client):
        response = client.post("/api/jobs/", json={"position": "Engineer"})
        assert response.status_code == 400

    def test_delete_unknown_is_404(self, client):
        response = client.delete("/api/jobs/missing")
        assert response.status_code == 404
        assert response.json()["error"] == "Not found"


# ============================================================
# Applications
# ============================================================


class TestApplicationsApi:
    def test_create_with_children(self, client, store):
        created = _create_application(
            client,
            interviews=[{"date": "2026-10-20", "time": "9:30", "type": "video"}],
            reminders=[{"date": "2026-10-18"}],
        )
        assert created["status"] == "applied"
        assert created["interviews"][0]["time"] == "09:30"
        assert created["interviews"][0]["id"]
        assert created["reminders"][0]["type"] == "follow-up"
        assert len(store.applications) == 1

    def test_invalid_time_is_400(self, client):
        response = client.post("/api/applications/", json={
            "company": "Acme", "role": "Engineer",
            "interviews": [{"date": "2026-10-20", "time": "25:99"}],
        })
        assert response.status_code == 400

    def test_update_and_delete(self, client, store):
        app_id = _create_application(client)["id"]
        response = client.patch(f"/api/applications/{app_id}", json={"status": "offer"})
        assert response.json()["status"] == "offer"
        assert store.get_application(app_id).status == ApplicationStatus.OFFER

        assert client.delete(f"/api/applications/{app_id}").status_code == 200
        assert client.get(f"/api/applications/{app_id}").status_code == 404

    def test_invalid_status_is_400(self, client):
        app_id = _create_application(client)["id"]
        response = client.patch(f"/api/applications/{app_id}", json={"status": "ghosted"})
        assert response.status_code == 400

    def test_unknown_application_is_404(self, client):
        response = client.patch("/api/applications/missing", json={"notes": "x"})
        assert response.status_code == 404
        assert "details" in response.json()

    def test_filter_search_and_sort(self, client):
        _create_application(client, company="Beta Corp", status="interview")
        _create_application(client, company="alpha inc", status="applied")
        _create_application(client, company="Gamma", role="Beta Tester", status="rejected")

        interviewing = client.get("/api/applications/", params={"status": "interview"}).json()
        assert [a["company"] for a in interviewing] == ["Beta Corp"]

        beta = client.get("/api/applications/", params={"search": "beta"}).json()
        assert sorted(a["company"] for a in beta) == ["Beta Corp", "Gamma"]

        by_name = client.get("/api/applications/", params={"sort_by": "company", "sort_order": "asc"}).json()
        assert [a["company"] for a in by_name] == ["alpha inc", "Beta Corp", "Gamma"]

    def test_sort_by_applied_date_with_missing_dates(self, client):
        _create_application(client, company="Undated")
        _create_application(client, company="Later", applied_date="2026-10-10")
        _create_application(client, company="Also undated")
        _create_application(client, company="Earlier", applied_date="2026-09-01")

        ascending = client.get("/api/applications/", params={"sort_by": "applied_date", "sort_order": "asc"}).json()
        assert [a["company"] for a in ascending][-2:] == ["Earlier", "Later"]

        descending = client.get("/api/applications/", params={"sort_by": "applied_date"}).json()
        assert [a["company"] for a in descending][:2] == ["Later", "Earlier"]
        assert {a["company"] for a in descending[2:]} == {"Undated", "Also undated"}

    def test_bad_sort_key_is_400(self, client):
        assert client.get("/api/applications/", params={"sort_by": "salary"}).status_code == 400


class TestNestedApi:
    def test_interview_lifecycle(self, client):
        app_id = _create_application(client)["id"]

        app = client.post(f"/api/applications/{app_id}/interviews", json={"date": "2026-10-20"}).json()
        interview_id = app["interviews"][0]["id"]
        assert app["interviews"][0]["time"] == "09:00"

        app = client.patch(
            f"/api/applications/{app_id}/interviews/{interview_id}", json={"completed": True}
        ).json()
        assert app["interviews"][0]["completed"] is True

        app = client.delete(f"/api/applications/{app_id}/interviews/{interview_id}").json()
        assert app["interviews"] == []

    def test_reminder_lifecycle(self, client):
        app_id = _create_application(client)["id"]

        app = client.post(
            f"/api/applications/{app_id}/reminders", json={"date": "2026-10-18", "type": "thank-you"}
        ).json()
        reminder_id = app["reminders"][0]["id"]

        app = client.patch(
            f"/api/applications/{app_id}/reminders/{reminder_id}", json={"note": "Email the recruiter"}
        ).json()
        assert app["reminders"][0]["note"] == "Email the recruiter"
        assert app["reminders"][0]["type"] == "thank-you"

        app = client.delete(f"/api/applications/{app_id}/reminders/{reminder_id}").json()
        assert app["reminders"] == []

    def test_unknown_interview_is_404(self, client):
        app_id = _create_application(client)["id"]
        response = client.delete(f"/api/applications/{app_id}/interviews/nope")
        assert response.status_code == 404


# ============================================================
# Dashboard
# ============================================================


class TestDashboardApi:
    def test_empty(self, client):
        body = client.get("/api/dashboard/").json()
        assert body["stats"] == {
            "total_applications": 0,
            "active_applications": 0,
            "job_descriptions": 0,
            "resume_complete": False,
        }
        assert body["recent_applications"] == []
        assert body["status_counts"] == {}
        assert body["upcoming_items"] == []

    def test_populated(self, client, tomorrow):
        client.put("/api/resume/", json=RESUME)
        _create_application(
            client, company="Acme", status="interview",
            interviews=[{"date": tomorrow.isoformat(), "time": "14:00", "type": "onsite"}],
        )
        _create_application(client, company="Hooli", status="rejected")

        body = client.get("/api/dashboard/").json()
        assert body["stats"]["total_applications"] == 2
        assert body["stats"]["active_applications"] == 1
        assert body["stats"]["resume_complete"] is True
        assert body["status_counts"] == {"interview": 1, "rejected": 1}

        upcoming = body["upcoming_items"]
        assert len(upcoming) == 1
        assert upcoming[0]["details"] == "Onsite interview at 14:00"
        assert upcoming[0]["company"] == "Acme"

    def test_overdue_reminder_listed(self, client, today):
        last_week = today - timedelta(days=7)
        _create_application(client, reminders=[{"date": last_week.isoformat(), "type": "follow-up"}])
        upcoming = client.get("/api/dashboard/").json()["upcoming_items"]
        assert upcoming[0]["due_label"] == "Overdue"
        assert upcoming[0]["details"] == "Follow Up"


class TestDashboardPage:
    def test_renders_empty(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "Total Applications" in response.text
        assert "Needs setup" in response.text

    def test_renders_recent_applications(self, client, store, make_application):
        store.add_application(make_application(company="Initrode", created_at=datetime(2026, 10, 2)))
        response = client.get("/")
        assert "Initrode" in response.text
