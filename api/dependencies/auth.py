"""
MODULE_DESCRIPTION: Authentication Dependencies - Admin Session Extraction

FastAPI dependencies that read the admin session from the request and feed
it to the session gate in ``api.auth.session``.

Tokens are tried in this order; the first one that verifies wins:
    1. the session cookie (SESSION_COOKIE_NAME, set by POST /api/auth/login)
    2. an ``Authorization: Bearer <token>`` header, for scripted clients

Dependencies:
    get_session_claims     -> dict | None, never raises (read endpoints)
    require_admin_session  -> dict, raises UnauthorizedError (write endpoints)

Example:
    @router.post("/api/nodes")
    async def create_node(
        request: NodeCreateRequest,
        session: dict = Depends(require_admin_session),
    ):
        ...
"""

from typing import Any, Dict, List, Optional

from fastapi import Depends, Request

import api.config.settings as settings_module
from api.auth.session import verify_session_token
from api.exceptions.errors import UnauthorizedError
from api.utils.debug import print__auth_debug


def extract_session_tokens(request: Request) -> List[str]:
    """Raw session tokens present on the request: cookie first, then bearer."""
    tokens = []
    cookie = request.cookies.get(settings_module.SESSION_COOKIE_NAME)
    if cookie:
        tokens.append(cookie)

    authorization = request.headers.get("authorization", "")
    if authorization.startswith("Bearer "):
        bearer = authorization.split(" ", 1)[1].strip()
        if bearer:
            tokens.append(bearer)
    return tokens


def get_session_claims(request: Request) -> Optional[Dict[str, Any]]:
    """Claims of the first valid session token, or None for anonymous requests.

    A stale cookie does not hide a valid bearer token sent with it.
    """
    for token in extract_session_tokens(request):
        claims = verify_session_token(token)
        if claims is not None:
            return claims
    return None


def require_admin_session(
    claims: Optional[Dict[str, Any]] = Depends(get_session_claims),
) -> Dict[str, Any]:
    """Reject the request with 401 unless it carries a valid admin session."""
    if claims is None:
        print__auth_debug("❌ AUTH ERROR: mutating call without a valid admin session")
        raise UnauthorizedError("Unauthorized")
    return claims
