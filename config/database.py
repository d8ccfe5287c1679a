"""
Database connection management.

Provides the Supabase client singleton used by every service, plus the
helper that turns low-level client failures into application errors.
"""

from supabase import create_client, Client
from functools import lru_cache
import httpx
import structlog

from config.settings import settings
from exceptions import AppError, DatabaseError, StoreUnavailableError

logger = structlog.get_logger(__name__)


@lru_cache()
def get_supabase_client() -> Client:
    """
    Get cached Supabase client instance.

    Uses lru_cache to ensure only one client is created.
    Call get_supabase_client.cache_clear() to reconnect.

    Returns:
        Client: Supabase client

    Raises:
        StoreUnavailableError: If the client cannot be created
    """
    try:
        logger.info(
            "connecting_to_supabase",
            url=settings.supabase_url[:30] + "..."  # Log partial URL only
        )

        client = create_client(
            settings.supabase_url,
            settings.supabase_key
        )

        logger.info("supabase_client_created")

        return client

    except Exception as e:
        logger.error(
            "supabase_connection_failed",
            error=str(e),
            error_type=type(e).__name__
        )
        raise StoreUnavailableError(f"Failed to connect to Supabase: {e}") from e


def store_error(operation: str, exc: Exception) -> AppError:
    """
    Map a failed store call to the error the caller should raise.

    Transport failures mean the store itself is unreachable and must abort
    the whole request; anything else is a failed operation.
    """
    if isinstance(exc, AppError):
        return exc
    if isinstance(exc, httpx.TransportError):
        return StoreUnavailableError(f"Store unreachable during {operation}: {exc}")
    return DatabaseError(operation, str(exc))


# ===================
# HELPER FUNCTIONS
# ===================

def check_connection() -> dict:
    """
    Check database connection health.

    Returns:
        dict: Connection status with details
    """
    try:
        client = get_supabase_client()

        companies = client.table("companies").select("id", count="exact").execute()
        jobs = client.table("import_jobs").select("id", count="exact").execute()

        return {
            "status": "healthy",
            "companies_count": companies.count,
            "import_jobs_count": jobs.count
        }

    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e)
        }
