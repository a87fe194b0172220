"""
MODULE_DESCRIPTION: Exception Handlers - Uniform JSON Error Responses

===================================================================================
PURPOSE AND OVERVIEW
===================================================================================

This module converts every failure raised while serving a request into a JSON
response with a stable shape, so the browser client can always read
``detail`` from the body and branch on the status code.

Handled exception families:
    - OrgChartError subclasses (domain failures raised by services, stores and
      the session dependency) -> their own status code
    - RequestValidationError (Pydantic request validation) -> 422
    - Starlette HTTPException (routing 404/405 and explicit raises) -> status
    - ValueError (business rule violations not wrapped in a domain error) -> 400
    - Exception (anything unexpected) -> 500

===================================================================================
RESPONSE FORMAT
===================================================================================

    {"detail": "<human readable message>"}

Validation errors add ``errors`` (the Pydantic error list). When the
DEBUG_TRACEBACK environment variable is "1", 500 responses add ``traceback``.
Tracebacks expose file paths and code structure, so production deployments
must leave DEBUG_TRACEBACK unset.

===================================================================================
ERROR TAXONOMY
===================================================================================

    UnauthorizedError   401   missing/invalid session, failed login
    NotFoundError       404   node id does not exist
    MalformedInputError 400   inconsistent payload, unresolvable parentId
    MalformedDataError  500   stored data has more than one root
    StoreError          500   persistence failure

Failed logins always report the same "Invalid credentials" detail, whether
the identifier was unknown or the secret was wrong.
"""

# CRITICAL: Set Windows event loop policy FIRST, before any other imports
# This must be the very first thing that happens to fix psycopg compatibility
import os
import sys

if sys.platform == "win32":
    import asyncio

    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Load environment variables early
from dotenv import load_dotenv

load_dotenv()

# Standard imports
import traceback

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.exceptions.errors import OrgChartError
from api.utils.debug import print__auth_debug, print__debug

# ==============================================================================
# EXCEPTION HANDLERS
# ==============================================================================


async def orgchart_error_handler(request: Request, exc: OrgChartError):
    """Handle domain errors raised by services, stores and dependencies.

    Args:
        request: The FastAPI Request object
        exc: The OrgChartError subclass instance

    Returns:
        JSONResponse with the error's status code and detail
    """
    if exc.status_code == 401:
        client_ip = request.client.host if request.client else "unknown"
        print__auth_debug(
            f"🚨 HTTP 401 UNAUTHORIZED: {request.method} {request.url.path} "
            f"from {client_ip}: {exc.detail}"
        )
    elif exc.status_code >= 500:
        print__debug(
            f"🚨 {type(exc).__name__} on {request.method} {request.url.path}: "
            f"{exc.detail}"
        )
        if exc.__cause__ is not None:
            print__debug(f"🚨 Caused by: {type(exc.__cause__).__name__}: {exc.__cause__}")
    else:
        print__debug(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.detail}"
        )

    content = {"detail": exc.detail}
    if exc.status_code >= 500 and os.getenv("DEBUG_TRACEBACK", "0") == "1":
        content["traceback"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    return JSONResponse(status_code=exc.status_code, content=content)


async def validation_exception_handler(_request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors with proper 422 status code.

    Uses jsonable_encoder because error contexts may hold exception objects
    that the JSON encoder cannot serialize directly.

    Response Format:
        {
            "detail": "Validation error",
            "errors": [{"loc": [...], "msg": "...", "type": "..."}]
        }
    """
    print__debug(f"Validation error: {exc.errors()}")
    simple_errors = [
        {"loc": e.get("loc"), "msg": e.get("msg"), "type": e.get("type")}
        for e in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({"detail": "Validation error", "errors": simple_errors}),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions raised by routing or explicitly by endpoints."""
    if exc.status_code >= 400:
        print__debug(
            f"🚨 HTTP {exc.status_code} ERROR: {request.method} {request.url.path}: "
            f"{exc.detail}"
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def value_error_handler(_request: Request, exc: ValueError):
    """Handle ValueError exceptions as 400 Bad Request.

    Example:
        raise ValueError("Invalid node type")
        → 400 Bad Request with detail message
    """
    print__debug(f"ValueError: {str(exc)}")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


async def general_exception_handler(_request: Request, exc: Exception):
    """Handle unexpected exceptions with 500 Internal Server Error.

    Behavior:
        - DEBUG_TRACEBACK=1: include the full traceback in the response
        - otherwise: generic message, details only in debug output
    """
    if os.getenv("DEBUG_TRACEBACK", "0") == "1":
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        print__debug(
            f"Unexpected error (with traceback): {type(exc).__name__}: {str(exc)}\n{tb}"
        )
        return JSONResponse(
            status_code=500, content={"detail": str(exc), "traceback": tb}
        )

    print__debug(f"Unexpected error: {type(exc).__name__}: {str(exc)}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all handlers of this module to the application."""
    app.add_exception_handler(OrgChartError, orgchart_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
