"""
Configuration package for the API server.

This package contains settings and constants for the org chart application.
"""

# Import key configuration items for easier access
from .settings import (  # Admin access; Session; Tree; Limits
    ADMIN_CREDENTIALS,
    APP_VERSION,
    BASE_DIR,
    CORS_ALLOWED_ORIGINS,
    DEFAULT_ROOT_TITLE,
    MAX_IMAGE_URL_LENGTH,
    MAX_TEXT_FIELD_LENGTH,
    SEED_ROOT_ON_STARTUP,
    SESSION_COOKIE_NAME,
    SESSION_COOKIE_SECURE,
    SESSION_MAX_AGE,
    start_time,
)

__all__ = [
    "ADMIN_CREDENTIALS",
    "APP_VERSION",
    "BASE_DIR",
    "CORS_ALLOWED_ORIGINS",
    "DEFAULT_ROOT_TITLE",
    "MAX_IMAGE_URL_LENGTH",
    "MAX_TEXT_FIELD_LENGTH",
    "SEED_ROOT_ON_STARTUP",
    "SESSION_COOKIE_NAME",
    "SESSION_COOKIE_SECURE",
    "SESSION_MAX_AGE",
    "start_time",
]
