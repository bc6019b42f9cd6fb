"""Tests for GET /api/v1/calendar."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from training_planner.api.deps import CurrentUser, get_current_user, get_workout_service
from training_planner.main import app
from training_planner.models.calendar import Calendar
from training_planner.models.workouts import WorkoutStatus


@pytest.fixture
def service():
    return MagicMock()


@pytest.fixture
def client(service):
    app.dependency_overrides[get_current_user] = lambda: CurrentUser(user_id="user-1", email="a@b.c")
    app.dependency_overrides[get_workout_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestCalendar:

    def test_days_with_workouts(self, client, service):
        service.get_calendar.return_value = Calendar.model_validate({
            "range": {"start": "2024-11-01", "end": "2024-11-30"},
            "days": [
                {
                    "date": "2024-11-10",
                    "workouts": [
                        {"id": "a", "training_type_code": "easy", "status": "completed", "position": 1},
                        {"id": "b", "training_type_code": "tempo", "status": "planned", "position": 2},
                    ],
                },
            ],
        })

        response = client.get(
            "/api/v1/calendar",
            params={"start": "2024-11-01", "end": "2024-11-30", "status": "completed"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["range"] == {"start": "2024-11-01", "end": "2024-11-30"}
        assert data["days"][0]["date"] == "2024-11-10"
        assert [w["id"] for w in data["days"][0]["workouts"]] == ["a", "b"]
        user_id, query = service.get_calendar.call_args.args
        assert user_id == "user-1"
        assert query.status == WorkoutStatus.COMPLETED

    def test_single_day_range(self, client, service):
        service.get_calendar.return_value = Calendar.model_validate({
            "range": {"start": "2024-11-10", "end": "2024-11-10"},
            "days": [],
        })

        response = client.get("/api/v1/calendar", params={"start": "2024-11-10", "end": "2024-11-10"})

        assert response.status_code == 200
        assert response.json()["data"]["days"] == []

    def test_end_before_start_is_422(self, client, service):
        response = client.get("/api/v1/calendar", params={"start": "2024-11-10", "end": "2024-11-09"})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        service.get_calendar.assert_not_called()

    def test_missing_dates_is_422(self, client, service):
        response = client.get("/api/v1/calendar", params={"start": "2024-11-10"})

        assert response.status_code == 422
