"""Pytest fixtures: test admin credentials, a temporary SQLite store and clients."""

import os
import sys

# CRITICAL: Set Windows event loop policy FIRST, before other imports
if sys.platform == "win32":
    import asyncio

    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Add project root to path
try:
    from pathlib import Path

    BASE_DIR = Path(__file__).resolve().parents[1]
except NameError:
    BASE_DIR = Path(os.getcwd())
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

import pytest
import pytest_asyncio

import api.config.settings as settings_module
from api.services.node_service import NodeService
from nodestore.factory import cleanup_node_store, initialize_node_store
from tests.helpers import TEST_ADMIN_EMAIL, TEST_ADMIN_PASSWORD, make_client


@pytest.fixture(autouse=True)
def admin_settings(monkeypatch):
    """One known admin pair and a fixed signing secret for every test."""
    monkeypatch.setattr(
        settings_module,
        "ADMIN_CREDENTIALS",
        [(TEST_ADMIN_EMAIL, TEST_ADMIN_PASSWORD)],
    )
    monkeypatch.setattr(settings_module, "SESSION_SECRET", "test-session-secret-" + "x" * 32)
    monkeypatch.setattr(settings_module, "SESSION_COOKIE_SECURE", False)


@pytest_asyncio.fixture
async def store(tmp_path):
    """A fresh SQLite-backed global node store, closed after the test."""
    await cleanup_node_store()
    node_store = await initialize_node_store(
        backend="sqlite", sqlite_path=str(tmp_path / "orgchart.db")
    )
    yield node_store
    await cleanup_node_store()


@pytest.fixture
def service(store):
    return NodeService(store)


@pytest.fixture
def app(store):
    from api.main import app as fastapi_app

    return fastapi_app


@pytest_asyncio.fixture
async def client(app):
    """Anonymous client."""
    async with make_client(app) as http_client:
        yield http_client


@pytest_asyncio.fixture
async def admin_client(app):
    """Client carrying a valid admin session cookie."""
    async with make_client(app, admin=True) as http_client:
        yield http_client
