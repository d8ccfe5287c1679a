"""
Caller identity.

Authentication itself happens upstream: the session gateway forwards the
authenticated user id in X-User-Id. When API_KEY is configured, callers
must also present it in X-API-Key.
"""

from typing import Optional
from fastapi import Header
import secrets
import structlog

from config import settings
from exceptions import AuthenticationError

logger = structlog.get_logger(__name__)


def get_current_user_id(
    x_user_id: Optional[str] = Header(None, description="Authenticated user id"),
    x_api_key: Optional[str] = Header(None, description="Shared API key, when configured"),
) -> str:
    """
    Resolve the calling user.

    Raises:
        AuthenticationError: Missing user id or wrong API key
    """
    if settings.api_key and not secrets.compare_digest(x_api_key or "", settings.api_key):
        logger.warning("api_key_rejected")
        raise AuthenticationError()

    user_id = (x_user_id or "").strip()
    if not user_id:
        raise AuthenticationError()

    return user_id
