"""
Caller identification via API key.

Provides the FastAPI dependency that resolves the calling user's ID from the
X-API-Key header. Keys are configured in settings.api_keys.
"""
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)

DEFAULT_API_USER = "admin"


async def get_current_user(
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Authenticate via API key.
    Returns user_id string.

    Usage:
        @app.get("/protected")
        async def protected_route(user_id: str = Depends(get_current_user)):
            return {"user_id": user_id}
    """
    if not x_api_key:
        raise HTTPException(
            status_code=401,
            detail="Missing authentication. Provide X-API-Key header.",
        )
    return validate_api_key(x_api_key, settings.api_keys_list)


def validate_api_key(api_key: str, valid_keys: list[str]) -> str:
    """
    Validate API key and return user_id.

    API key format options:
    - Simple: "sk_test_abc123" -> returns "admin"
    - With user: "sk_test_abc123:user_12345" -> returns "user_12345"
    """
    if not valid_keys:
        logger.warning("No API keys configured (API_KEYS env var empty)")
        raise HTTPException(status_code=401, detail="API key authentication not configured")

    # Check if key (without user suffix) is valid
    key_part = api_key.split(":")[0]

    if key_part not in valid_keys:
        raise HTTPException(status_code=401, detail="Invalid API key")

    # Extract user_id if provided (format: "key:user_id")
    if ":" in api_key:
        user_id = api_key.split(":", 1)[1]
        if user_id:
            return user_id

    return DEFAULT_API_USER
