"""Database access for the Training Planner."""

from .client import get_supabase_client

__all__ = ["get_supabase_client"]
