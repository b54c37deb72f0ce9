"""
Database client lifecycle for Supabase.

A single async service-role client is opened when the application starts
and shared by every repository. It is safe for concurrent use by all
request handlers.
"""

import logging
from typing import Optional
from supabase import acreate_client, AsyncClient

from .config import get_settings

logger = logging.getLogger(__name__)

# Module-level client, set by init_supabase_client()
_service_client: Optional[AsyncClient] = None


async def init_supabase_client() -> AsyncClient:
    """
    Open the shared Supabase client.

    Calling it again after a successful init returns the existing client.

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is missing.
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = await acreate_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )
        logger.info("Supabase client connected to %s", settings.supabase_url)

    return _service_client


def get_supabase_client() -> AsyncClient:
    """
    Get the shared Supabase client.

    Raises:
        RuntimeError: If init_supabase_client() has not run yet.
    """
    if _service_client is None:
        raise RuntimeError("Supabase client is not initialised")
    return _service_client


def is_connected() -> bool:
    return _service_client is not None


def reset_client_cache() -> None:
    """
    Drop the shared client.

    Used on shutdown and by tests.
    """
    global _service_client
    _service_client = None
