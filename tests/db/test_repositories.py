"""Tests for the Supabase repositories using a mocked query builder."""

from datetime import date
from unittest.mock import MagicMock, call

import pytest
from postgrest.exceptions import APIError

from training_planner.db.repositories import GoalRepository, TrainingTypeRepository, WorkoutRepository
from training_planner.db.repositories.workout_repository import SUMMARY_COLUMNS
from training_planner.exceptions import DatabaseError
from training_planner.models.workouts import WorkoutListFilters


def make_client(data=None, count=None):
    """Supabase client mock whose chained query builder returns itself."""
    query = MagicMock()
    for method in (
        "select", "insert", "upsert", "update", "delete",
        "eq", "in_", "gte", "lte", "order", "limit", "range",
    ):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=data, count=count)
    client = MagicMock()
    client.table.return_value = query
    return client, query


class TestWorkoutRepository:

    def test_insert_returns_stored_row(self):
        client, query = make_client(data=[{"id": "w-1"}])

        row = WorkoutRepository(client).insert({"user_id": "u"})

        client.table.assert_called_with("workouts")
        query.insert.assert_called_once_with({"user_id": "u"})
        assert row == {"id": "w-1"}

    def test_last_completed_query(self):
        client, query = make_client(data=[{"id": "a"}])

        rows = WorkoutRepository(client).list_last_completed("u", "easy")

        assert rows == [{"id": "a"}]
        query.eq.assert_any_call("user_id", "u")
        query.eq.assert_any_call("status", "completed")
        query.eq.assert_any_call("training_type_code", "easy")
        query.order.assert_called_once_with("completed_at", desc=True)
        query.limit.assert_called_once_with(3)

    def test_list_default_query(self):
        client, query = make_client(data=[{"id": "a"}], count=41)

        rows, total = WorkoutRepository(client).list("u", WorkoutListFilters(page=3, per_page=20))

        assert rows == [{"id": "a"}]
        assert total == 41
        query.select.assert_called_once_with(SUMMARY_COLUMNS, count="exact")
        query.eq.assert_called_once_with("user_id", "u")
        assert query.order.call_args_list == [
            call("planned_date", desc=False),
            call("position", desc=False),
        ]
        query.range.assert_called_once_with(40, 59)

    def test_list_filters(self):
        client, query = make_client(data=None, count=None)
        filters = WorkoutListFilters(
            status="completed",
            training_type_codes="easy,tempo",
            rating="too_hard",
            planned_date_gte="2024-11-01",
            completed_at_lte="2024-11-30T23:59:59+00:00",
        )

        rows, total = WorkoutRepository(client).list("u", filters)

        assert (rows, total) == ([], 0)
        query.eq.assert_any_call("status", "completed")
        query.eq.assert_any_call("rating", "too_hard")
        query.in_.assert_called_once_with("training_type_code", ["easy", "tempo"])
        query.gte.assert_called_once_with("planned_date", "2024-11-01")
        query.lte.assert_called_once_with("completed_at", "2024-11-30T23:59:59+00:00")
        query.order.assert_called_once_with("completed_at", desc=True)

    def test_update_scoped_to_user(self):
        client, query = make_client(data=[])

        assert WorkoutRepository(client).update("u", "w-1", {"rating": "too_easy"}) is None

        query.update.assert_called_once_with({"rating": "too_easy"})
        query.eq.assert_any_call("id", "w-1")
        query.eq.assert_any_call("user_id", "u")

    def test_delete_foreign_key_violation_passes_through(self):
        client, query = make_client()
        query.execute.side_effect = APIError({"message": "fk", "code": "23503", "hint": None, "details": None})

        with pytest.raises(APIError):
            WorkoutRepository(client).delete("u", "w-1")

    def test_list_between(self):
        client, query = make_client(data=[{"id": "a"}])

        rows = WorkoutRepository(client).list_between("u", date(2024, 11, 1), date(2024, 11, 30), "planned")

        assert rows == [{"id": "a"}]
        query.gte.assert_called_once_with("planned_date", "2024-11-01")
        query.lte.assert_called_once_with("planned_date", "2024-11-30")
        query.eq.assert_any_call("status", "planned")
        assert query.order.call_args_list == [call("planned_date"), call("position")]

    def test_unique_violation_passes_through(self):
        client, query = make_client()
        query.execute.side_effect = APIError({"message": "dup", "code": "23505", "hint": None, "details": None})

        with pytest.raises(APIError):
            WorkoutRepository(client).insert({})

    def test_other_errors_become_database_error(self):
        client, query = make_client()
        query.execute.side_effect = APIError({"message": "boom", "code": "XX000", "hint": None, "details": None})

        with pytest.raises(DatabaseError) as exc_info:
            WorkoutRepository(client).insert({})

        assert exc_info.value.details["db_code"] == "XX000"


class TestGoalRepository:

    def test_upsert_uses_user_id_conflict_target(self):
        stored = {
            "user_id": "u",
            "goal_type": "distance_by_date",
            "target_distance_m": 5000,
            "due_date": "2030-01-01",
            "notes": None,
            "created_at": "2024-01-01T00:00:00Z",
        }
        client, query = make_client(data=[stored])

        goal = GoalRepository(client).upsert({"user_id": "u"})

        query.upsert.assert_called_once_with({"user_id": "u"}, on_conflict="user_id")
        assert set(goal) == {"goal_type", "target_distance_m", "due_date", "notes"}

    def test_exists(self):
        client, _ = make_client(data=[], count=0)
        assert GoalRepository(client).exists("u") is False

    def test_get_missing(self):
        client, _ = make_client(data=[])
        assert GoalRepository(client).get("u") is None


class TestTrainingTypeRepository:

    def test_active_only_by_default(self):
        client, query = make_client(data=[{"code": "easy"}])

        TrainingTypeRepository(client).list()

        query.eq.assert_called_once_with("is_active", True)
        query.order.assert_called_once_with("code")

    def test_include_inactive(self):
        client, query = make_client(data=[])

        assert TrainingTypeRepository(client).list(include_inactive=True) == []
        query.eq.assert_not_called()
