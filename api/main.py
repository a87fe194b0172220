"""Org Chart FastAPI Backend Application

This module is the entry point of the org chart backend. It builds the FastAPI
application, wires the middleware, exception handlers and routers, and owns
the application lifespan: the node store is opened on startup (PostgreSQL,
or SQLite as the local fallback), the root branch is seeded when the chart
is empty, and the store is closed on shutdown.

Startup sequence:
    1. Initialize the global node store (nodestore.factory)
    2. When SEED_ROOT_ON_STARTUP=1, create the root branch titled
       DEFAULT_ROOT_TITLE if the store has no root
    3. Serve requests

Shutdown sequence:
    1. Close the node store (connection pool or SQLite connection)

Routers:
    /                 API info
    /health           store health
    /api/nodes        node CRUD (writes require an admin session)
    /api/tree         assembled tree, root seeding
    /api/auth         login, logout, session check

Run with:
    uvicorn api.main:app --reload
or via uvicorn_start.py at the repository root.
"""

# ==============================================================================
# CRITICAL WINDOWS COMPATIBILITY CONFIGURATION
# ==============================================================================
# psycopg async needs the selector event loop on Windows
import os
import sys

if sys.platform == "win32":
    import asyncio

    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# ==============================================================================
# ENVIRONMENT VARIABLES LOADING
# ==============================================================================
from dotenv import load_dotenv

load_dotenv()

# ==============================================================================
# PROJECT ROOT DIRECTORY CONFIGURATION
# ==============================================================================
try:
    from pathlib import Path

    BASE_DIR = Path(__file__).resolve().parents[1]
except NameError:
    BASE_DIR = Path(os.getcwd())

if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

# ==============================================================================
# STANDARD LIBRARY AND THIRD-PARTY IMPORTS
# ==============================================================================
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI

# ==============================================================================
# APPLICATION MODULE IMPORTS
# ==============================================================================
import api.config.settings as settings_module
from api.config.settings import APP_VERSION
from api.exceptions.handlers import register_exception_handlers
from api.middleware.cors import setup_brotli_middleware, setup_cors_middleware
from api.routes.auth import router as auth_router
from api.routes.health import router as health_router
from api.routes.nodes import router as nodes_router
from api.routes.root import router as root_router
from api.routes.tree import router as tree_router
from api.services.node_service import NodeService
from api.utils.debug import print__startup_debug
from nodestore.factory import cleanup_node_store, initialize_node_store


# ==============================================================================
# APPLICATION LIFESPAN MANAGEMENT
# ==============================================================================
@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Open the node store on startup, seed the root, close the store on shutdown."""
    startup_time = datetime.now()
    print__startup_debug("🚀 FastAPI application starting up...")

    if not settings_module.SESSION_SECRET_FROM_ENV:
        print__startup_debug(
            "⚠️ SESSION_SECRET not set - using a per-process secret, "
            "admin sessions will not survive a restart"
        )
    if not settings_module.ADMIN_CREDENTIALS:
        print__startup_debug("⚠️ No admin credentials configured - login is disabled")

    store = await initialize_node_store()

    if settings_module.SEED_ROOT_ON_STARTUP:
        root = await NodeService(store).ensure_root(settings_module.DEFAULT_ROOT_TITLE)
        print__startup_debug(f"🌳 Root node ready: '{root.id}' ({root.title})")

    print__startup_debug("✅ FastAPI application ready to serve requests")

    yield

    print__startup_debug("🛑 FastAPI application shutting down...")
    print__startup_debug(f"Application ran for {datetime.now() - startup_time}")
    await cleanup_node_store()


# ==============================================================================
# FASTAPI APPLICATION INITIALIZATION
# ==============================================================================
app = FastAPI(
    title="Org Chart API",
    description="""Hierarchical org chart of branches (teams) and members (people).

## Features
- 🌳 Tree view assembled from flat node records
- ✏️ Create, edit and delete nodes (deleting removes the whole subtree)
- 🔐 Admin edit mode behind an HTTP-only session cookie

## Authentication
Reads are public. Writes require an admin session obtained from
`POST /api/auth/login`.
    """,
    version=APP_VERSION,
    lifespan=lifespan,
    responses={
        422: {
            "description": "Validation Error - Invalid request parameters",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Validation error",
                        "errors": [
                            {
                                "loc": ["body", "type"],
                                "msg": "Field required",
                                "type": "missing",
                            }
                        ],
                    }
                }
            },
        },
        500: {
            "description": "Internal Server Error",
            "content": {
                "application/json": {"example": {"detail": "Internal server error"}}
            },
        },
    },
)

# ==============================================================================
# MIDDLEWARE REGISTRATION
# ==============================================================================
setup_cors_middleware(app)
setup_brotli_middleware(app)

# ==============================================================================
# EXCEPTION HANDLERS
# ==============================================================================
register_exception_handlers(app)

# ==============================================================================
# ROUTER REGISTRATION
# ==============================================================================
app.include_router(root_router)
app.include_router(health_router)
app.include_router(nodes_router)
app.include_router(tree_router)
app.include_router(auth_router)
