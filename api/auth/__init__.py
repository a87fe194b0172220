"""
Authentication package for the API server.

This package contains the admin session gate: credential verification
against the configured allow-list and the signed session cookie.
"""

from .session import (
    clear_session_cookie,
    create_session_token,
    set_session_cookie,
    verify_admin_credentials,
    verify_session_token,
)

__all__ = [
    "clear_session_cookie",
    "create_session_token",
    "set_session_cookie",
    "verify_admin_credentials",
    "verify_session_token",
]
