"""Supabase repository for the global ``training_types`` dictionary."""

from typing import List, Optional

from .base import SupabaseRepository


class TrainingTypeRepository(SupabaseRepository):
    """Read-only access to training types."""

    table_name = "training_types"

    def list(self, include_inactive: bool = False) -> List[dict]:
        """Training types ordered by code so the listing (and its ETag) is stable."""
        query = self.table.select("code,name,is_active,created_at")
        if not include_inactive:
            query = query.eq("is_active", True)
        response = self._execute(query.order("code"), "list")
        return response.data or []

    def get(self, code: str) -> Optional[dict]:
        query = self.table.select("code").eq("code", code).limit(1)
        return self._first(self._execute(query, "get"))
