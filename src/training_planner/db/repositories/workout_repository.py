"""Supabase repository for the ``workouts`` table."""

from datetime import date
from typing import List, Optional, Tuple

from .base import SupabaseRepository

LAST_WORKOUTS_LIMIT = 3

SUMMARY_COLUMNS = (
    "id,training_type_code,planned_date,position,planned_distance_m,"
    "planned_duration_s,status,origin,rating,avg_pace_s_per_km"
)
CALENDAR_COLUMNS = "id,training_type_code,status,position,planned_date"


class WorkoutRepository(SupabaseRepository):
    """Reads and writes workout rows of a single user.

    Every query filters by ``user_id``, so a workout of another user looks
    exactly like a missing one.
    """

    table_name = "workouts"

    def insert(self, row: dict) -> dict:
        """
        Insert a workout row and return it as stored.

        Raises:
            APIError: On unique violation (same user, date and position).
            DatabaseError: On any other database failure.
        """
        response = self._execute(self.table.insert(row), "insert")
        return self._first(response)

    def get(self, user_id: str, workout_id: str) -> Optional[dict]:
        query = self.table.select("*").eq("id", workout_id).eq("user_id", user_id).limit(1)
        return self._first(self._execute(query, "get"))

    def list(self, user_id: str, filters) -> Tuple[List[dict], int]:
        """
        One page of workout summaries plus the total matching count.

        Args:
            user_id: Owner of the workouts
            filters: A WorkoutListFilters instance

        Returns:
            (rows, total) tuple
        """
        query = self.table.select(SUMMARY_COLUMNS, count="exact").eq("user_id", user_id)

        if filters.status:
            query = query.eq("status", filters.status.value)
        if filters.training_type_codes:
            query = query.in_("training_type_code", filters.training_type_codes)
        if filters.origin:
            query = query.eq("origin", filters.origin.value)
        if filters.rating:
            query = query.eq("rating", filters.rating.value)
        if filters.planned_date_gte:
            query = query.gte("planned_date", filters.planned_date_gte.isoformat())
        if filters.planned_date_lte:
            query = query.lte("planned_date", filters.planned_date_lte.isoformat())
        if filters.completed_at_gte:
            query = query.gte("completed_at", filters.completed_at_gte.isoformat())
        if filters.completed_at_lte:
            query = query.lte("completed_at", filters.completed_at_lte.isoformat())

        for column, descending in filters.ordering:
            query = query.order(column, desc=descending)

        # range() is inclusive on both ends
        query = query.range(filters.offset, filters.offset + filters.per_page - 1)
        response = self._execute(query, "list")
        return response.data or [], response.count or 0

    def update(self, user_id: str, workout_id: str, changes: dict) -> Optional[dict]:
        """Apply ``changes`` and return the updated row (None if nothing matched)."""
        query = self.table.update(changes).eq("id", workout_id).eq("user_id", user_id)
        return self._first(self._execute(query, "update"))

    def delete(self, user_id: str, workout_id: str) -> None:
        """
        Delete one workout.

        Raises:
            APIError: On foreign key violation (still referenced).
        """
        query = self.table.delete().eq("id", workout_id).eq("user_id", user_id)
        self._execute(query, "delete")

    def list_last_completed(
        self,
        user_id: str,
        training_type_code: Optional[str] = None,
        limit: int = LAST_WORKOUTS_LIMIT,
    ) -> List[dict]:
        """Most recent completed workouts, newest first."""
        query = (
            self.table.select("id,completed_at,training_type_code")
            .eq("user_id", user_id)
            .eq("status", "completed")
        )
        if training_type_code:
            query = query.eq("training_type_code", training_type_code)
        query = query.order("completed_at", desc=True).limit(limit)
        response = self._execute(query, "list_last_completed")
        return response.data or []

    def list_between(
        self,
        user_id: str,
        start: date,
        end: date,
        status: Optional[str] = None,
    ) -> List[dict]:
        """Workouts planned in [start, end], by date then position."""
        query = (
            self.table.select(CALENDAR_COLUMNS)
            .eq("user_id", user_id)
            .gte("planned_date", start.isoformat())
            .lte("planned_date", end.isoformat())
        )
        if status:
            query = query.eq("status", status)
        query = query.order("planned_date").order("position")
        response = self._execute(query, "list_between")
        return response.data or []
