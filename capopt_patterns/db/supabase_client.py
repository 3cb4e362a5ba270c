"""
Supabase client wrapper for the pattern service
"""
from supabase import create_client, Client
import logging

from capopt_patterns.config import Settings

logger = logging.getLogger(__name__)


def get_supabase_client(settings: Settings) -> Client:
    """
    Create a Supabase client with the service key (read access to catalog tables).

    Raises:
        RuntimeError: if SUPABASE_URL or SUPABASE_SERVICE_KEY is missing
    """
    if not settings.supabase_url or not settings.supabase_service_key:
        raise RuntimeError("SUPABASE_URL and SUPABASE_SERVICE_KEY are required for catalog_source=supabase")

    try:
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        logger.info(f"Supabase client created for {settings.supabase_url}")
        return client
    except Exception as e:
        logger.error(f"Failed to create Supabase client: {e}")
        raise
