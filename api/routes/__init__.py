"""
Routes package for the API server.

This package contains FastAPI route handlers for the org chart: nodes,
the assembled tree, admin session endpoints, health and the API root.
"""

# CRITICAL: Set Windows event loop policy FIRST, before any other imports
# This must be the very first thing that happens to fix psycopg compatibility
import sys

if sys.platform == "win32":
    import asyncio

    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Load environment variables early
from dotenv import load_dotenv

load_dotenv()

# Routes module initialization
from .auth import router as auth_router
from .health import router as health_router
from .nodes import router as nodes_router
from .root import router as root_router
from .tree import router as tree_router

# Export all routers for easy import
__all__ = [
    "auth_router",
    "health_router",
    "nodes_router",
    "root_router",
    "tree_router",
]
