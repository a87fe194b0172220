"""Shared helpers for the org chart test suite.

Everything here runs in-process: the FastAPI app is driven through
httpx.ASGITransport and the node store is SQLite in a temporary directory,
so no server or PostgreSQL instance is needed.
"""

import sys
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

# CRITICAL: Set Windows event loop policy FIRST, before other imports
if sys.platform == "win32":
    import asyncio

    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

import httpx

import api.config.settings as settings_module
from api.auth.session import create_session_token
from nodestore.records import NodeRecord

SERVER_BASE_URL = "http://testserver"
TEST_ADMIN_EMAIL = "admin@example.com"
TEST_ADMIN_PASSWORD = "correct horse battery staple"

_BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_record(
    node_id: str,
    node_type: str = "branch",
    parent_id: Optional[str] = None,
    offset: int = 0,
    **fields: Any,
) -> NodeRecord:
    """Build a NodeRecord without a store; ``offset`` orders created_at."""
    if node_type == "branch":
        fields.setdefault("title", node_id)
    else:
        fields.setdefault("name", node_id)
    return NodeRecord(
        id=node_id,
        type=node_type,
        parent_id=parent_id,
        created_at=_BASE_TIME + timedelta(seconds=offset),
        **fields,
    )


def make_records(specs: Iterable[tuple]) -> List[NodeRecord]:
    """Records from ``(id, type, parent_id)`` tuples, created in list order."""
    return [
        make_record(node_id, node_type, parent_id, offset=index)
        for index, (node_id, node_type, parent_id) in enumerate(specs)
    ]


def create_test_session_token(email: str = TEST_ADMIN_EMAIL, **kwargs) -> str:
    """A valid admin session token signed with the configured secret."""
    return create_session_token(email, **kwargs)


def admin_cookies(email: str = TEST_ADMIN_EMAIL) -> Dict[str, str]:
    return {settings_module.SESSION_COOKIE_NAME: create_test_session_token(email)}


def make_client(app, admin: bool = False) -> httpx.AsyncClient:
    """AsyncClient bound to the app; ``admin=True`` pre-loads a session cookie."""
    client = httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url=SERVER_BASE_URL
    )
    if admin:
        for name, value in admin_cookies().items():
            client.cookies.set(name, value)
    return client


async def create_node(client: httpx.AsyncClient, **payload) -> Dict[str, Any]:
    """POST /api/nodes and return the created record, asserting 201."""
    response = await client.post("/api/nodes", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def get_root(client: httpx.AsyncClient) -> Dict[str, Any]:
    response = await client.get("/api/tree")
    assert response.status_code == 200, response.text
    return response.json()["root"]
