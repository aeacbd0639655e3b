"""
Supabase client factory.

The app has no per-user data, so one client built from SUPABASE_KEY is
shared by every request. It is created lazily on first use.
"""

import logging

from supabase import Client, create_client

from ticket_scanner.config import settings

logger = logging.getLogger(__name__)

_client: Client | None = None


def get_supabase_client() -> Client:
    """
    Get or create the shared Supabase client.

    Returns:
        A Supabase client for the configured project

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_KEY is not configured
    """
    global _client

    if _client is None:
        if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_KEY must be configured to reach the datastore."
            )

        _client = create_client(
            supabase_url=settings.SUPABASE_URL,
            supabase_key=settings.SUPABASE_KEY
        )
        logger.info("Created Supabase client")

    return _client


def reset_supabase_client() -> None:
    """Drop the cached client (used by tests and after config changes)."""
    global _client
    _client = None
