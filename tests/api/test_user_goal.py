"""Tests for the user goal routes."""

from datetime import date, timedelta
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from training_planner.api.deps import CurrentUser, get_current_user, get_goal_service
from training_planner.exceptions import GoalNotFoundError
from training_planner.main import app
from training_planner.models.goals import UserGoal

DUE = date.today() + timedelta(days=90)


@pytest.fixture
def service():
    return MagicMock()


@pytest.fixture
def client(service):
    app.dependency_overrides[get_current_user] = lambda: CurrentUser(user_id="user-1")
    app.dependency_overrides[get_goal_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_get_goal(client, service):
    service.get_goal.return_value = UserGoal(
        goal_type="distance_by_date", target_distance_m=42195, due_date=DUE
    )

    response = client.get("/api/v1/user-goal")

    assert response.status_code == 200
    assert response.json()["data"]["target_distance_m"] == 42195


def test_get_goal_none(client, service):
    service.get_goal.return_value = None

    response = client.get("/api/v1/user-goal")

    assert response.status_code == 200
    assert response.json() == {"data": None}


def test_put_goal(client, service):
    service.upsert_goal.side_effect = lambda user_id, request: UserGoal(**request.model_dump())

    response = client.put(
        "/api/v1/user-goal",
        json={"goal_type": "distance_by_date", "target_distance_m": 10000, "due_date": DUE.isoformat()},
    )

    assert response.status_code == 200
    assert response.json()["data"]["due_date"] == DUE.isoformat()


def test_put_goal_in_past_is_rejected(client, service):
    response = client.put(
        "/api/v1/user-goal",
        json={
            "goal_type": "distance_by_date",
            "target_distance_m": 10000,
            "due_date": (date.today() - timedelta(days=2)).isoformat(),
        },
    )

    assert response.status_code == 422
    service.upsert_goal.assert_not_called()


def test_put_goal_notes_too_long(client, service):
    response = client.put(
        "/api/v1/user-goal",
        json={
            "goal_type": "distance_by_date",
            "target_distance_m": 10000,
            "due_date": DUE.isoformat(),
            "notes": "x" * 501,
        },
    )
    assert response.status_code == 422


def test_delete_goal(client, service):
    response = client.delete("/api/v1/user-goal")

    assert response.status_code == 204
    service.delete_goal.assert_called_once_with("user-1")


def test_delete_missing_goal(client, service):
    service.delete_goal.side_effect = GoalNotFoundError("user-1")

    response = client.delete("/api/v1/user-goal")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "GOAL_NOT_FOUND"
    assert response.json()["error"]["message"] == "No goal found to delete"


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
