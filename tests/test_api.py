import pytest
from datetime import datetime, timedelta, timezone
from fastapi import status

from effitrack.core.config import settings
from effitrack.main import app
from effitrack.services import aggregation_service
from effitrack.services.mail_service import get_mail_transport
from sqlalchemy.exc import SQLAlchemyError


def _create_employee(client, name, department="Engineering"):
    response = client.post("/api/employees/", json={
        "name": name,
        "email": f"{name.lower()}@x.com",
        "department": department,
    })
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


def _today():
    return datetime.now(timezone.utc).date()


# --- employees ---------------------------------------------------------------

def test_create_and_list_employees(client):
    _create_employee(client, "Alice")
    _create_employee(client, "Bob")

    response = client.get("/api/employees/")
    assert response.status_code == 200
    assert {e["name"] for e in response.json()} == {"Alice", "Bob"}
    assert all(e["status"] == "active" for e in response.json())


def test_duplicate_email_is_conflict(client):
    _create_employee(client, "Alice")
    response = client.post("/api/employees/", json={"name": "Other Alice", "email": "alice@x.com"})
    assert response.status_code == 409
    assert response.json()["errors"][0]["code"] == "DUPLICATE_EMAIL"


def test_invalid_email_is_validation_error(client):
    response = client.post("/api/employees/", json={"name": "Alice", "email": "not-an-email"})
    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "email"


def test_toggle_status_and_active_list(client):
    alice = _create_employee(client, "Alice")
    _create_employee(client, "Bob")

    response = client.post(f"/api/employees/{alice['id']}/toggle-status")
    assert response.json()["status"] == "inactive"

    active = client.get("/api/employees/active").json()
    assert [e["name"] for e in active] == ["Bob"]

    response = client.post(f"/api/employees/{alice['id']}/toggle-status")
    assert response.json()["status"] == "active"


def test_update_employee(client):
    alice = _create_employee(client, "Alice")
    response = client.patch(f"/api/employees/{alice['id']}", json={"department": "Design"})
    assert response.status_code == 200
    assert response.json()["department"] == "Design"
    assert response.json()["email"] == "alice@x.com"


def test_update_employee_rejects_null_required_fields(client):
    alice = _create_employee(client, "Alice")
    for field in ("name", "email", "status"):
        response = client.patch(f"/api/employees/{alice['id']}", json={field: None})
        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == field

    response = client.patch(f"/api/employees/{alice['id']}", json={"department": None})
    assert response.status_code == 200
    assert response.json()["department"] is None


def test_unknown_employee_is_404(client):
    response = client.get("/api/employees/does-not-exist")
    assert response.status_code == 404
    assert response.json()["errors"][0]["code"] == "NOT_FOUND"


# --- projects ----------------------------------------------------------------

def test_create_project_and_reassign(client):
    alice = _create_employee(client, "Alice")
    bob = _create_employee(client, "Bob")

    response = client.post("/api/projects/", json={
        "title": "Launch",
        "start_date": _today().isoformat(),
        "end_date": (_today() + timedelta(days=10)).isoformat(),
        "employee_ids": [alice["id"]],
    })
    assert response.status_code == 201
    project_id = response.json()["id"]

    response = client.put(f"/api/projects/{project_id}/assignees", json={"employee_ids": [bob["id"]]})
    assert response.status_code == 200

    projects = client.get("/api/projects/").json()
    assert [e["name"] for e in projects[0]["assigned_employees"]] == ["Bob"]

    client.put(f"/api/projects/{project_id}/assignees", json={"employee_ids": []})
    projects = client.get("/api/projects/").json()
    assert projects[0]["assigned_employees"] == []


def test_create_project_partial_failure_is_distinct(client):
    response = client.post("/api/projects/", json={
        "title": "Launch",
        "start_date": _today().isoformat(),
        "employee_ids": ["ghost"],
    })
    assert response.status_code == 409
    error = response.json()["errors"][0]
    assert error["code"] == "PROJECT_ASSIGNMENT_FAILED"

    projects = client.get("/api/projects/").json()
    assert [p["id"] for p in projects] == [error["details"]["project_id"]]
    assert projects[0]["assigned_employees"] == []


def test_create_project_rejects_end_before_start(client):
    response = client.post("/api/projects/", json={
        "title": "Backwards",
        "start_date": _today().isoformat(),
        "end_date": (_today() - timedelta(days=1)).isoformat(),
    })
    assert response.status_code == 422


def test_update_project_rejects_null_required_fields(client):
    project = client.post("/api/projects/", json={
        "title": "Launch",
        "start_date": _today().isoformat(),
    }).json()
    for field in ("title", "status", "start_date"):
        response = client.patch(f"/api/projects/{project['id']}", json={field: None})
        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == field

    projects = client.get("/api/projects/").json()
    assert projects[0]["title"] == "Launch"
    assert projects[0]["start_date"] == _today().isoformat()


# --- tasks -------------------------------------------------------------------

def test_task_status_updates_completed_at(client):
    alice = _create_employee(client, "Alice")
    task = client.post("/api/tasks/", json={"title": "Write docs", "assigned_to": alice["id"]}).json()
    assert task["status"] == "pending"
    assert task["completed_at"] is None

    done = client.patch(f"/api/tasks/{task['id']}/status", json={"status": "completed"}).json()
    assert done["completed_at"] is not None

    reopened = client.patch(f"/api/tasks/{task['id']}/status", json={"status": "in_progress"}).json()
    assert reopened["completed_at"] is None

    listed = client.get("/api/tasks/", params={"status": "in_progress"}).json()
    assert [t["id"] for t in listed] == [task["id"]]


def test_task_with_unknown_assignee_is_404(client):
    response = client.post("/api/tasks/", json={"title": "Orphan", "assigned_to": "ghost"})
    assert response.status_code == 404


# --- rewards & dashboard -----------------------------------------------------

def test_award_points_and_leaderboard(client):
    alice = _create_employee(client, "Alice")
    bob = _create_employee(client, "Bob")

    for employee_id, points in [(alice["id"], 10), (bob["id"], 15), (alice["id"], 2)]:
        response = client.post("/api/rewards/", json={
            "employee_id": employee_id, "points": points, "reason": "Great work",
        })
        assert response.status_code == 201

    board = client.get("/api/rewards/leaderboard").json()
    assert [(e["name"], e["total_points"], e["badge"]) for e in board] == [
        ("Bob", 15, "1st"),
        ("Alice", 12, "2nd"),
    ]

    history = client.get("/api/rewards/", params={"employee_id": alice["id"]}).json()
    assert sorted(r["points"] for r in history) == [2, 10]


def test_award_requires_positive_points(client):
    alice = _create_employee(client, "Alice")
    response = client.post("/api/rewards/", json={"employee_id": alice["id"], "points": 0, "reason": "x"})
    assert response.status_code == 422


def test_award_to_unknown_employee_is_404(client):
    response = client.post("/api/rewards/", json={"employee_id": "ghost", "points": 5, "reason": "x"})
    assert response.status_code == 404


def test_award_to_inactive_employee_is_rejected(client):
    alice = _create_employee(client, "Alice")
    client.post(f"/api/employees/{alice['id']}/toggle-status")

    response = client.post("/api/rewards/", json={"employee_id": alice["id"], "points": 5, "reason": "x"})
    assert response.status_code == 409
    assert response.json()["errors"][0]["code"] == "EMPLOYEE_INACTIVE"
    assert client.get("/api/rewards/", params={"employee_id": alice["id"]}).json() == []


def test_dashboard_stats(client):
    alice = _create_employee(client, "Alice")
    client.post("/api/rewards/", json={"employee_id": alice["id"], "points": 4, "reason": "x"})

    body = client.get("/api/dashboard/stats").json()
    assert body["success"] is True
    assert body["data"]["employee_count"] == 1
    assert body["data"]["total_reward_points"] == 4


def test_dashboard_stats_degrade_on_read_error(client, monkeypatch):
    _create_employee(client, "Alice")

    def broken(db, column):
        raise SQLAlchemyError("boom")

    monkeypatch.setattr(aggregation_service, "_status_counts", broken)
    response = client.get("/api/dashboard/stats")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "STATS_UNAVAILABLE"
    assert body["data"]["employee_count"] == 0


# --- deadline alerts ---------------------------------------------------------

def test_deadline_alerts_end_to_end(client, transport):
    alice = _create_employee(client, "Alice")
    bob = _create_employee(client, "Bob")
    client.post("/api/projects/", json={
        "title": "Launch",
        "start_date": _today().isoformat(),
        "end_date": (_today() + timedelta(days=1)).isoformat(),
        "employee_ids": [alice["id"], bob["id"]],
    })

    response = client.post("/api/alerts/deadlines")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["emails_sent"] == ["alice@x.com", "bob@x.com"]
    assert body["projects_checked"] == 1
    assert body["tasks_checked"] == 0
    assert body["message"] == "Sent 2 deadline alert emails"
    assert all("Launch" in m["subject"] for m in transport.sent)


def test_deadline_alerts_partial_failure_still_returns_summary(client, transport):
    alice = _create_employee(client, "Alice")
    bob = _create_employee(client, "Bob")
    deadline = datetime.now(timezone.utc) + timedelta(days=2)
    for employee in (alice, bob):
        client.post("/api/tasks/", json={
            "title": f"Task for {employee['name']}",
            "assigned_to": employee["id"],
            "deadline": deadline.isoformat(),
        })
    transport.fail_for.add("alice@x.com")

    body = client.post("/api/alerts/deadlines").json()
    assert body["tasks_checked"] == 2
    assert body["emails_sent"] == ["bob@x.com"]
    assert body["failures"][0]["recipient"] == "alice@x.com"


def test_deadline_alerts_without_mail_key_fails_whole_call(client, monkeypatch):
    app.dependency_overrides.pop(get_mail_transport)
    monkeypatch.setattr(settings.mail, "resend_api_key", None)

    response = client.post("/api/alerts/deadlines")
    assert response.status_code == 500
    assert response.json()["errors"][0]["code"] == "CONFIGURATION_ERROR"
