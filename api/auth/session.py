"""
MODULE_DESCRIPTION: Session Gate - Admin Login and Session Tokens

===================================================================================
PURPOSE AND OVERVIEW
===================================================================================

Anonymous visitors may read the org chart; only an admin session may change
it. This module decides who is an admin:

    ANONYMOUS --(valid credentials)--> AUTHORIZED --(logout | expiry)--> ANONYMOUS

There are no other states and no refresh or rotation.

===================================================================================
LOGIN
===================================================================================

verify_admin_credentials() compares the submitted identifier/secret pair
with every pair of the configured allow-list (ADMIN_EMAIL/ADMIN_PASSWORD and
ADMIN_CREDENTIALS). Every entry is compared with hmac.compare_digest, without
stopping at the first match, so timing does not reveal which entry matched.
A mismatch yields None; the caller reports one generic "Invalid credentials"
message whether the identifier or the secret was wrong.

===================================================================================
SESSION TOKEN
===================================================================================

The token is a JWT signed with SESSION_SECRET (HS256):

    {
        "sub": "<matched admin identifier>",
        "scope": "session_active",
        "iat": <issued at>,
        "exp": <issued at + SESSION_MAX_AGE>
    }

It is delivered as an HTTP-only cookie (SESSION_COOKIE_NAME, path "/",
SameSite=Lax, Secure in production) whose max-age equals the token lifetime.
A request is authorized when it carries a token whose signature verifies,
which is unexpired, and whose scope is the session marker.

Logout deletes the cookie. Tokens are not tracked server side, so a copied
token stays valid until it expires; rotating SESSION_SECRET invalidates all
sessions at once.
"""

import hmac
import time
from typing import Any, Dict, Optional

import jwt
from fastapi import Response

import api.config.settings as settings_module
from api.utils.debug import print__auth_debug


def verify_admin_credentials(identifier: Optional[str], secret: Optional[str]) -> Optional[str]:
    """Check an identifier/secret pair against the admin allow-list.

    Args:
        identifier: Submitted admin identifier (email)
        secret: Submitted password

    Returns:
        str | None: the matched identifier, or None when nothing matched
    """
    if not identifier or not secret:
        print__auth_debug("LOGIN REJECTED: identifier or secret missing")
        return None

    submitted_id = identifier.strip().encode("utf-8")
    submitted_secret = secret.encode("utf-8")

    matched: Optional[str] = None
    for admin_id, admin_secret in settings_module.ADMIN_CREDENTIALS:
        id_ok = hmac.compare_digest(submitted_id, admin_id.encode("utf-8"))
        secret_ok = hmac.compare_digest(submitted_secret, admin_secret.encode("utf-8"))
        if id_ok and secret_ok and matched is None:
            matched = admin_id

    if matched is None:
        print__auth_debug(
            f"LOGIN REJECTED: no match among {len(settings_module.ADMIN_CREDENTIALS)} admin pair(s)"
        )
    else:
        print__auth_debug("LOGIN ACCEPTED: admin credentials matched")
    return matched


def create_session_token(identifier: str, now: Optional[float] = None) -> str:
    """Issue a signed session token for a matched admin identifier.

    Args:
        identifier: The admin identifier returned by verify_admin_credentials
        now: Issue time as a UNIX timestamp (defaults to the current time)

    Returns:
        str: encoded JWT
    """
    issued_at = int(now if now is not None else time.time())
    payload = {
        "sub": identifier,
        "scope": settings_module.SESSION_MARKER,
        "iat": issued_at,
        "exp": issued_at + settings_module.SESSION_MAX_AGE,
    }
    return jwt.encode(
        payload, settings_module.SESSION_SECRET, algorithm=settings_module.SESSION_ALGORITHM
    )


def verify_session_token(token: Optional[str]) -> Optional[Dict[str, Any]]:
    """Validate a session token.

    Returns:
        dict | None: the token claims when the session is authorized, None
        when the token is missing, malformed, forged, expired or not a
        session token
    """
    if not token:
        return None

    try:
        claims = jwt.decode(
            token,
            settings_module.SESSION_SECRET,
            algorithms=[settings_module.SESSION_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        print__auth_debug("SESSION REJECTED: token expired")
        return None
    except jwt.InvalidTokenError as exc:
        print__auth_debug(f"SESSION REJECTED: {type(exc).__name__}")
        return None

    if claims.get("scope") != settings_module.SESSION_MARKER:
        print__auth_debug("SESSION REJECTED: token is not a session token")
        return None
    return claims


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the HTTP-only session cookie to a response."""
    response.set_cookie(
        key=settings_module.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings_module.SESSION_MAX_AGE,
        path="/",
        httponly=True,
        secure=settings_module.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    """Remove the session cookie from the browser."""
    response.delete_cookie(
        key=settings_module.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings_module.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
