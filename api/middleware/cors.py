"""
MODULE_DESCRIPTION: CORS and Compression Middleware - Cross-Origin and Performance Setup

===================================================================================
PURPOSE AND OVERVIEW
===================================================================================

This module configures the two middleware components of the org chart API:

1. CORS (Cross-Origin Resource Sharing) Middleware:
   - Lets the browser client served from another origin call the API
   - allow_credentials=True so the HTTP-only session cookie is sent along
   - Origins come from CORS_ALLOWED_ORIGINS; a wildcard cannot be combined
     with credentials, so origins are always listed explicitly

2. Brotli Compression Middleware:
   - Compresses responses of at least 1000 bytes for clients sending
     ``Accept-Encoding: br``
   - Mostly matters for GET /api/tree on large charts and for members whose
     imageUrl is an inline data URL

Both are registered once, at application construction in api.main.
"""

from brotli_asgi import BrotliMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import api.config.settings as settings_module
from api.utils.debug import print__middleware_debug


def setup_cors_middleware(app: FastAPI):
    """Setup CORS middleware for the FastAPI application.

    Configuration:
        - allow_origins: settings CORS_ALLOWED_ORIGINS
        - allow_credentials: True - session cookie travels cross-origin
        - allow_methods: GET, POST, PUT, DELETE, OPTIONS
        - allow_headers: ["*"]
    """
    allowed_origins = list(settings_module.CORS_ALLOWED_ORIGINS)
    print__middleware_debug(f"📋 CORS allowed origins: {allowed_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )


def setup_brotli_middleware(app: FastAPI):
    """Setup Brotli compression for responses >= 1KB."""
    print__middleware_debug("📋 Registering Brotli compression middleware...")
    app.add_middleware(BrotliMiddleware, minimum_size=1000)
