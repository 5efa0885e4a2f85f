"""
Configuration management.

Handles loading and validating settings from environment variables.
"""

import os
from enum import Enum


class AuthMethod(str, Enum):
    """Supported authentication methods."""

    NONE = "none"
    API_KEY = "api_key"


class LogFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


def get_auth_method() -> AuthMethod:
    """
    Get the configured authentication method from environment.

    Returns:
        AuthMethod: The authentication method to use (default: NONE)

    Raises:
        ValueError: If AUTH_METHOD is set to an invalid value
    """
    auth_method_str = os.getenv("AUTH_METHOD", "none").strip().lower()

    try:
        return AuthMethod(auth_method_str)
    except ValueError as e:
        valid_methods = ", ".join([m.value for m in AuthMethod])
        raise ValueError(f"Invalid AUTH_METHOD: '{auth_method_str}'. Valid options: {valid_methods}") from e


def get_api_keys() -> list[str]:
    """
    Get configured API keys from environment.

    Returns:
        list[str]: Valid API keys (empty list if not using API key auth)

    Raises:
        ValueError: If API_KEYS is required but not set or empty
    """
    if get_auth_method() != AuthMethod.API_KEY:
        return []

    api_keys_str = os.getenv("API_KEYS", "").strip()

    if not api_keys_str:
        raise ValueError("API_KEYS environment variable required when AUTH_METHOD=api_key")

    keys = [key.strip() for key in api_keys_str.split(",") if key.strip()]

    if not keys:
        raise ValueError("API_KEYS cannot be empty when AUTH_METHOD=api_key")

    return keys


def _split_csv_env(name: str) -> list[str]:
    value = os.getenv(name, "")
    return [item.strip() for item in value.split(",") if item.strip()]


def get_cors_origins() -> list[str]:
    """Comma-separated CORS_ORIGINS; an empty list means "use development defaults"."""
    return _split_csv_env("CORS_ORIGINS")


def get_log_level() -> str:
    """
    Get the log level name (default: INFO).

    Raises:
        ValueError: If LOG_LEVEL is not a standard level name
    """
    level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    if level not in valid_levels:
        raise ValueError(f"Invalid LOG_LEVEL: '{level}'. Valid options: {', '.join(valid_levels)}")

    return level


def get_log_format() -> LogFormat:
    log_format = os.getenv("LOG_FORMAT", "text").strip().lower()

    try:
        return LogFormat(log_format)
    except ValueError as e:
        raise ValueError(f"Invalid LOG_FORMAT: '{log_format}'. Valid options: text, json") from e


def get_host() -> str:
    return os.getenv("HOST", "0.0.0.0")


def get_port() -> int:
    """
    Get the HTTP port (default: 8000).

    Raises:
        ValueError: If PORT is not an integer in [1, 65535]
    """
    port_str = os.getenv("PORT", "8000").strip()

    try:
        port = int(port_str)
    except ValueError as e:
        raise ValueError(f"Invalid PORT: '{port_str}'") from e

    if not 1 <= port <= 65535:
        raise ValueError(f"Invalid PORT: {port}. Must be between 1 and 65535")

    return port


def validate_configuration():
    """
    Validate configuration at startup.

    Raises:
        ValueError: If configuration is invalid
    """
    # Each getter raises ValueError on bad input
    get_auth_method()
    get_api_keys()
    get_log_level()
    get_log_format()
    get_port()
