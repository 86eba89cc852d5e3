"""Supabase client for the storage backend."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from supabase import Client, create_client


@lru_cache()
def get_supabase_client(url: Optional[str], key: Optional[str]) -> Client | None:
    """Get cached Supabase client instance for the given project URL and key.

    Returns:
        Supabase Client instance if both values are set, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    if not url or not key:
        logging.info("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        return create_client(url, key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None
