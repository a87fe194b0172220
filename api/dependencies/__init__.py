"""
Dependencies package for the API server.

This package contains FastAPI dependencies: the admin session gate and the
node service provider.
"""

from .auth import get_session_claims, require_admin_session
from .store import get_node_service

__all__ = ["get_node_service", "get_session_claims", "require_admin_session"]
