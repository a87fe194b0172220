"""
MODULE_DESCRIPTION: Health Check Endpoint - Node Store Monitoring

GET /health
    Public liveness/readiness probe for load balancers and uptime monitors.

    Returns:
        {
            "status": "healthy",              // or "degraded"
            "timestamp": "2026-01-15T10:30:00",
            "uptime_seconds": 3600.5,
            "store": {
                "backend": "postgres",        // or "sqlite"
                "healthy": true,
                "node_count": 12,
                "error": null
            },
            "version": "1.0.0"
        }

    Status Codes:
        200: store reachable
        503: store unreachable or failing (body still describes the state)
"""

import time
from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.config.settings import APP_VERSION, start_time
from api.models.responses import HealthResponse
from api.utils.debug import print__debug
from nodestore.factory import get_global_node_store

# Create router for health endpoints
router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check with node store verification."""
    store_info = {"backend": None, "healthy": False, "node_count": None, "error": None}

    try:
        store = await get_global_node_store()
        store_info["backend"] = store.backend_name
        store_info["healthy"] = await store.health_check()
        if store_info["healthy"]:
            store_info["node_count"] = await store.count()
    except Exception as e:
        print__debug(f"HEALTH CHECK: store check failed: {type(e).__name__}: {e}")
        store_info["healthy"] = False
        store_info["error"] = str(e)

    health_data = {
        "status": "healthy" if store_info["healthy"] else "degraded",
        "timestamp": datetime.now().isoformat(),
        "uptime_seconds": time.time() - start_time,
        "store": store_info,
        "version": APP_VERSION,
    }

    if not store_info["healthy"]:
        return JSONResponse(status_code=503, content=health_data)
    return health_data
