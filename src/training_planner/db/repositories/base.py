"""Base repository for Supabase-backed tables.

Provides the shared plumbing of the table repositories: holding the client
and turning PostgREST failures into application exceptions.
"""

import logging
from typing import Any, Optional

from postgrest.exceptions import APIError
from supabase import Client

from ...exceptions import DatabaseError

logger = logging.getLogger(__name__)

# Postgres error codes callers map to domain conflicts
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
CONSTRAINT_VIOLATIONS = (UNIQUE_VIOLATION, FOREIGN_KEY_VIOLATION)


class SupabaseRepository:
    """
    Base class for repositories over a single Supabase table.

    Subclasses set ``table_name`` and build queries with ``self.table``.
    """

    table_name: str = ""

    def __init__(self, client: Client):
        """
        Initialize the repository.

        Args:
            client: A configured Supabase client
        """
        self.client = client

    @property
    def table(self):
        """Query builder for this repository's table."""
        return self.client.table(self.table_name)

    def _execute(self, query: Any, operation: str) -> Any:
        """
        Execute a PostgREST query.

        Args:
            query: A query builder ready to ``execute()``
            operation: Short name used in logs and error details

        Returns:
            The API response (``None`` for an empty ``maybe_single`` result)

        Raises:
            APIError: Unique and foreign key violations are re-raised
                untouched so callers can map them to a domain conflict.
            DatabaseError: For every other PostgREST error.
        """
        try:
            return query.execute()
        except APIError as e:
            if e.code in CONSTRAINT_VIOLATIONS:
                raise
            logger.error(f"{self.table_name}.{operation} failed: {e.message} (code={e.code})")
            raise DatabaseError(
                operation=f"{self.table_name}.{operation}",
                details={"db_code": e.code} if e.code else None,
            ) from e

    @staticmethod
    def _first(response: Any) -> Optional[dict]:
        """First row of a response, or None."""
        if response is None or not response.data:
            return None
        data = response.data
        return data[0] if isinstance(data, list) else data
