"""
MODULE_DESCRIPTION: API Configuration Settings - Admin Access and Application Constants

===================================================================================
PURPOSE AND OVERVIEW
===================================================================================

This module is the central configuration hub for the org chart API. It reads
the environment once, at import time, into module-level constants that the
rest of the application imports.

The module manages:
    - The admin allow-list (identifier/secret pairs) used by the login check
    - Session token signing and cookie attributes
    - Root seeding behaviour
    - CORS origins and member image limits

Node store (database) settings live in ``nodestore.config``.

===================================================================================
ENVIRONMENT VARIABLES
===================================================================================

Admin access:
    ADMIN_EMAIL / ADMIN_PASSWORD   single admin pair
    ADMIN_CREDENTIALS              extra pairs, "email:password,email2:password2"

Session:
    SESSION_SECRET       HMAC key for session tokens (random per process if unset)
    SESSION_COOKIE_NAME  cookie name (default: admin_token)
    SESSION_MAX_AGE      token and cookie lifetime in seconds (default: 86400)
    NODE_ENV / ENVIRONMENT
                         "production" turns on the Secure cookie attribute

Tree:
    DEFAULT_ROOT_TITLE   title of the auto-created root (default: Leads)
    SEED_ROOT_ON_STARTUP "1" creates the root at startup when missing (default: 1)

Other:
    CORS_ALLOWED_ORIGINS comma separated origins
    MAX_IMAGE_URL_LENGTH maximum imageUrl length in characters

===================================================================================
SECURITY CONSIDERATIONS
===================================================================================

Secrets are never printed. Only the number of configured admin pairs and
whether SESSION_SECRET came from the environment are reported in debug output.
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

# Constants
try:
    from pathlib import Path

    BASE_DIR = Path(__file__).resolve().parents[2]
except NameError:
    BASE_DIR = Path(os.getcwd()).parents[0]

# Standard imports
import secrets
import time
from typing import List, Optional, Tuple

# ============================================================
# CONFIGURATION AND CONSTANTS
# ============================================================

# Application startup time for uptime tracking
start_time = time.time()

APP_VERSION = "1.0.0"


def parse_admin_credentials(
    admin_email: Optional[str],
    admin_password: Optional[str],
    extra: Optional[str] = None,
) -> List[Tuple[str, str]]:
    """Build the admin allow-list from the configured sources.

    The single ADMIN_EMAIL/ADMIN_PASSWORD pair comes first, followed by the
    comma separated ``email:password`` entries of ADMIN_CREDENTIALS. Entries
    with an empty identifier or secret are skipped, and so are duplicates.

    Args:
        admin_email: Value of ADMIN_EMAIL (may be None)
        admin_password: Value of ADMIN_PASSWORD (may be None)
        extra: Value of ADMIN_CREDENTIALS (may be None)

    Returns:
        list[tuple[str, str]]: (identifier, secret) pairs in declaration order

    Example:
        >>> parse_admin_credentials("a@x.io", "pw", "b@x.io:pw2, :nope")
        [('a@x.io', 'pw'), ('b@x.io', 'pw2')]
    """
    pairs: List[Tuple[str, str]] = []

    if admin_email and admin_password:
        pairs.append((admin_email.strip(), admin_password))

    for entry in (extra or "").split(","):
        entry = entry.strip()
        if not entry or ":" not in entry:
            continue
        # Split on the first colon only; secrets may contain colons
        identifier, secret = entry.split(":", 1)
        identifier = identifier.strip()
        if identifier and secret:
            pairs.append((identifier, secret))

    unique: List[Tuple[str, str]] = []
    for pair in pairs:
        if pair not in unique:
            unique.append(pair)
    return unique


# =======================================================================
# ADMIN ACCESS
# =======================================================================

ADMIN_CREDENTIALS = parse_admin_credentials(
    os.environ.get("ADMIN_EMAIL"),
    os.environ.get("ADMIN_PASSWORD"),
    os.environ.get("ADMIN_CREDENTIALS"),
)

# =======================================================================
# SESSION TOKEN AND COOKIE
# =======================================================================

SESSION_SECRET_FROM_ENV = bool(os.environ.get("SESSION_SECRET"))
SESSION_SECRET = os.environ.get("SESSION_SECRET") or secrets.token_urlsafe(48)
SESSION_ALGORITHM = "HS256"
# Scope claim that marks a token as an admin session
SESSION_MARKER = "session_active"
SESSION_COOKIE_NAME = os.environ.get("SESSION_COOKIE_NAME", "admin_token")
SESSION_MAX_AGE = int(os.environ.get("SESSION_MAX_AGE", str(60 * 60 * 24)))  # 1 day

IS_PRODUCTION = "production" in (
    os.environ.get("NODE_ENV", "").lower(),
    os.environ.get("ENVIRONMENT", "").lower(),
)
SESSION_COOKIE_SECURE = IS_PRODUCTION

# =======================================================================
# TREE
# =======================================================================

DEFAULT_ROOT_TITLE = os.environ.get("DEFAULT_ROOT_TITLE", "Leads")
SEED_ROOT_ON_STARTUP = os.environ.get("SEED_ROOT_ON_STARTUP", "1") == "1"

# =======================================================================
# REQUEST LIMITS
# =======================================================================

# Member photos arrive as base64 data URLs, so the cap is generous
MAX_IMAGE_URL_LENGTH = int(os.environ.get("MAX_IMAGE_URL_LENGTH", str(5 * 1024 * 1024)))
MAX_TEXT_FIELD_LENGTH = 10000

CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.environ.get(
        "CORS_ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:8000"
    ).split(",")
    if origin.strip()
]
