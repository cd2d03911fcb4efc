"""
API tests for the /recruiting routes.
"""

import pytest
from fastapi.testclient import TestClient

from db import get_session
from main import app
from recruiting.config import get_settings
from recruiting.models import AthleteModel, TargetSchoolModel, TaskModel


@pytest.fixture
def client(session, settings):
    def override_session():
        yield session

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def athlete(session):
    session.add(AthleteModel(id="a1", name="Test Athlete", grade_level=11, gpa=3.6, home_state="FL"))
    session.add(TargetSchoolModel(
        id="s1", athlete_id="a1", name="Florida State University", priority="A", status="interested",
    ))
    session.add_all([
        TaskModel(id="video", title="Create highlight video", grade_level=11, required=True),
        TaskModel(id="email", title="Email coaches", grade_level=11, dependency_task_ids=["video"]),
    ])
    session.commit()
    return "a1"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/recruiting/health").json() == {
        "status": "ok", "engine": "recruiting", "version": "1.0.0",
    }


def test_locked_task_returns_400(client, athlete):
    response = client.patch(f"/recruiting/athletes/{athlete}/tasks/email", json={"status": "completed"})
    assert response.status_code == 400
    assert "Create highlight video" in response.json()["detail"]

    assert client.get(f"/recruiting/athletes/{athlete}/tasks/locked").json() == {"locked_task_ids": ["email"]}

    checklist = client.get(f"/recruiting/athletes/{athlete}/tasks", params={"grade_level": 11}).json()
    assert {item["task"]["id"]: item["is_locked"] for item in checklist} == {"video": False, "email": True}
    email = next(item for item in checklist if item["task"]["id"] == "email")
    assert email["prerequisite_task_ids"] == ["video"]

    response = client.patch(f"/recruiting/athletes/{athlete}/tasks/video", json={"status": "completed"})
    assert response.status_code == 200
    assert response.json()["status"] == "completed"

    response = client.patch(f"/recruiting/athletes/{athlete}/tasks/email", json={"status": "completed"})
    assert response.status_code == 200


def test_task_update_errors(client, athlete):
    assert client.patch("/recruiting/athletes/ghost/tasks/video", json={"status": "completed"}).status_code == 404
    assert client.patch(f"/recruiting/athletes/{athlete}/tasks/nope", json={"status": "completed"}).status_code == 404
    assert client.patch(f"/recruiting/athletes/{athlete}/tasks/video", json={"status": "done"}).status_code == 422


def test_school_lookup(client):
    response = client.get("/recruiting/schools/lookup", params={"name": "florida state"})
    assert response.status_code == 200
    assert response.json() == {"division": "D1", "conference": "ACC"}

    assert client.get("/recruiting/schools/lookup", params={"name": "Hogwarts School"}).status_code == 404


def test_status_recalculation(client, athlete):
    response = client.post(f"/recruiting/athletes/{athlete}/status/recalculate")
    assert response.status_code == 200
    body = response.json()
    assert body["label"] == "at_risk"
    assert body["phase"] == "junior"
    assert body["next_actions"] == ["Activate recovery plan", "Intensive coach outreach"]

    assert client.post("/recruiting/athletes/ghost/status/recalculate").status_code == 400


def test_fit_recalculation(client, athlete):
    response = client.post(f"/recruiting/athletes/{athlete}/fit-scores/recalculate-all")
    assert response.status_code == 200
    assert response.json() == {
        "success": True, "updated": 1, "failed": 0, "message": "Updated fit scores for 1 school",
    }

    response = client.post(f"/recruiting/athletes/{athlete}/schools/s1/fit-score")
    assert response.status_code == 200
    assert response.json()["school_id"] == "s1"
    assert client.post(f"/recruiting/athletes/{athlete}/schools/nope/fit-score").status_code == 404


def test_suggestion_flow(client, athlete):
    response = client.post(f"/recruiting/athletes/{athlete}/suggestions/evaluate")
    assert response.status_code == 200
    assert response.json()["surfaced"] == 3

    page = client.get(f"/recruiting/athletes/{athlete}/suggestions").json()
    assert len(page["suggestions"]) == 3
    assert page["more_count"] == page["pending_count"] > 0

    suggestion_id = page["suggestions"][0]["id"]
    dismissed = client.post(f"/recruiting/suggestions/{suggestion_id}/dismiss").json()
    assert dismissed["dismissed"] is True

    assert client.post("/recruiting/suggestions/missing/dismiss").status_code == 404

    surfaced = client.post(f"/recruiting/athletes/{athlete}/suggestions/surface-more", params={"count": 1})
    assert surfaced.json() == {"surfaced": 1}


def test_interaction_logging(client, athlete):
    client.post(f"/recruiting/athletes/{athlete}/suggestions/evaluate")

    response = client.post(
        f"/recruiting/athletes/{athlete}/interactions",
        json={"school_id": "s1", "interaction_type": "email", "sentiment": "positive"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["interaction_id"]
    assert body["suggestions"]["reason"] == "interaction_logged"

    assert client.post("/recruiting/athletes/ghost/interactions", json={}).status_code == 400


def test_daily_refresh_requires_secret(client, athlete):
    assert client.post("/recruiting/batch/daily-refresh").status_code == 401
    assert client.post(
        "/recruiting/batch/daily-refresh", headers={"Authorization": "Bearer wrong"},
    ).status_code == 401

    response = client.post(
        "/recruiting/batch/daily-refresh", headers={"Authorization": "Bearer test-cron-secret"},
    )
    assert response.status_code == 200
    assert response.json() == {"total": 1, "updated": 1, "failed": 0}


def test_interaction_logging_uses_request_settings(client, athlete, settings):
    app.dependency_overrides[get_settings] = lambda: settings.model_copy(update={"surface_limit": 1})

    response = client.post(
        f"/recruiting/athletes/{athlete}/interactions",
        json={"school_id": "s1", "interaction_type": "email"},
    )
    assert response.status_code == 200
    assert response.json()["suggestions"]["surfaced"] == 1

    page = client.get(f"/recruiting/athletes/{athlete}/suggestions").json()
    assert len(page["suggestions"]) == 1


def test_interaction_without_school_leaves_suggestions_open(client, athlete):
    client.post(f"/recruiting/athletes/{athlete}/suggestions/evaluate")
    before = client.get(f"/recruiting/athletes/{athlete}/suggestions").json()

    response = client.post(f"/recruiting/athletes/{athlete}/interactions", json={"interaction_type": "note"})
    assert response.status_code == 200

    after = client.get(f"/recruiting/athletes/{athlete}/suggestions").json()
    assert [s["id"] for s in after["suggestions"]] == [s["id"] for s in before["suggestions"]]
