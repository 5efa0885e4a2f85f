"""
Authentication utilities.

Provides API key validation and the get_current_user dependency used to
protect endpoints.
"""

import hmac

from fastapi import Request

from .config import AuthMethod, get_auth_method


def validate_api_key(api_key: str | None, valid_keys: list[str]) -> bool:
    """
    Validate an API key against the list of valid keys.

    Args:
        api_key: The API key to validate (from X-API-Key header)
        valid_keys: List of valid API keys

    Returns:
        bool: True if the API key is valid, False otherwise

    Note:
        - Returns False if api_key is None or empty (after stripping)
        - API keys are case-sensitive
        - Comparison is constant-time per key
    """
    if not api_key:
        return False

    api_key = api_key.strip()
    if not api_key:
        return False

    return any(hmac.compare_digest(api_key.encode(), key.encode()) for key in valid_keys)


async def get_current_user(request: Request) -> str:
    """
    FastAPI dependency returning the caller identity.

    The API key itself is checked by middleware before the route runs, so
    this only labels the caller.

    Returns:
        str: "anonymous" or "api_key_user"
    """
    if get_auth_method() == AuthMethod.API_KEY:
        return "api_key_user"
    return "anonymous"
