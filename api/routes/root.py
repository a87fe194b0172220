"""
MODULE_DESCRIPTION: API Root Endpoint - Self-Documentation Entry Point

GET / returns the API name, version, links to the interactive docs and a
catalog of the org chart endpoints. Static apart from the timestamp; it
never touches the node store, so it answers even when the store is down.
"""

from datetime import datetime

from fastapi import APIRouter

from api.config.settings import APP_VERSION

# Create router instance for root endpoint
router = APIRouter()


@router.get("/", tags=["root"])
async def api_root():
    """API root endpoint - endpoint catalog and documentation links."""
    return {
        "name": "Org Chart API",
        "version": APP_VERSION,
        "description": "Hierarchical org chart of branches and members with an admin-only edit mode",
        "status": "operational",
        "timestamp": datetime.now().isoformat(),
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_spec": "/openapi.json",
        },
        "endpoints": {
            "nodes": {
                "list": "GET /api/nodes",
                "get": "GET /api/nodes/{node_id}",
                "create": "POST /api/nodes (admin)",
                "update": "PUT /api/nodes/{node_id} (admin)",
                "delete": "DELETE /api/nodes/{node_id} (admin)",
            },
            "tree": {
                "get": "GET /api/tree",
                "ensure_root": "POST /api/tree/root (admin)",
            },
            "auth": {
                "login": "POST /api/auth/login",
                "logout": "POST /api/auth/logout",
                "check": "GET /api/auth/check",
            },
            "system": {"health": "GET /health"},
        },
    }
