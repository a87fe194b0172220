"""
MODULE_DESCRIPTION: Auth Endpoints - Admin Login, Logout and Session Check

POST /api/auth/login     verify credentials, set the HTTP-only session cookie
POST /api/auth/logout    clear the session cookie
GET  /api/auth/check     {"isAdmin": bool} for the current request

A failed login always answers 401 "Invalid credentials", whether the email,
the password or both were wrong or missing.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Response

from api.auth.session import (
    clear_session_cookie,
    create_session_token,
    set_session_cookie,
    verify_admin_credentials,
)
from api.dependencies.auth import get_session_claims
from api.exceptions.errors import UnauthorizedError
from api.models.requests import LoginRequest
from api.models.responses import AuthCheckResponse, LoginResponse
from api.utils.debug import print__auth_debug

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Admin login",
    responses={401: {"description": "Invalid credentials"}},
)
async def login(request: LoginRequest, response: Response):
    """Start an admin session when the credentials match the allow-list."""
    admin_id = verify_admin_credentials(request.email, request.password)
    if admin_id is None:
        raise UnauthorizedError("Invalid credentials")

    set_session_cookie(response, create_session_token(admin_id))
    print__auth_debug("POST /api/auth/login: session cookie issued")
    return {"success": True}


@router.post("/logout", response_model=LoginResponse, summary="Admin logout")
async def logout(response: Response):
    clear_session_cookie(response)
    print__auth_debug("POST /api/auth/logout: session cookie cleared")
    return {"success": True}


@router.get("/check", response_model=AuthCheckResponse, summary="Session check")
async def check_session(
    claims: Optional[Dict[str, Any]] = Depends(get_session_claims),
):
    return {"isAdmin": claims is not None}
