"""Supabase repository for the ``user_goals`` table (one row per user)."""

from typing import Optional

from ...exceptions import DatabaseError
from .base import SupabaseRepository

GOAL_COLUMNS = "goal_type,target_distance_m,due_date,notes"


class GoalRepository(SupabaseRepository):
    """Access to a user's single goal."""

    table_name = "user_goals"

    def get(self, user_id: str) -> Optional[dict]:
        query = self.table.select(GOAL_COLUMNS).eq("user_id", user_id).limit(1)
        return self._first(self._execute(query, "get"))

    def upsert(self, row: dict) -> dict:
        """Create or replace the goal; ``user_id`` is the conflict target."""
        query = self.table.upsert(row, on_conflict="user_id")
        stored = self._first(self._execute(query, "upsert"))
        if stored is None:
            raise DatabaseError("Goal upsert returned no row", operation="user_goals.upsert")
        return {key: stored.get(key) for key in GOAL_COLUMNS.split(",")}

    def exists(self, user_id: str) -> bool:
        query = self.table.select("user_id", count="exact").eq("user_id", user_id)
        response = self._execute(query, "exists")
        return bool(response.count)

    def delete(self, user_id: str) -> None:
        self._execute(self.table.delete().eq("user_id", user_id), "delete")
