"""Supabase client construction.

Environment Variables Required:
    SUPABASE_URL  - Project URL (https://xxx.supabase.co)
    SUPABASE_KEY  - Service role key used by the backend

The service key bypasses row-level security, so every per-user query
filters by ``user_id`` explicitly.
"""

import logging
from functools import lru_cache

from supabase import Client, create_client

from ..config import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_supabase_client() -> Client:
    """Get the shared Supabase client.

    Raises:
        ValueError: If the Supabase URL or key is not configured.
    """
    settings = get_settings()
    if not settings.supabase_url:
        raise ValueError(
            "Supabase URL not provided. Set SUPABASE_URL environment variable."
        )
    if not settings.supabase_key:
        raise ValueError(
            "Supabase API key not provided. Set SUPABASE_KEY environment variable."
        )
    logger.info(f"Connecting to Supabase at {settings.supabase_url}")
    return create_client(settings.supabase_url, settings.supabase_key)
