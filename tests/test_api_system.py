"""
Tests for the application shell: API root, health check, lifespan seeding and
the exception handlers.
"""

import json

import pytest
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

import api.config.settings as settings_module
import nodestore.globals as globals_module
from api.exceptions.errors import (
    MalformedDataError,
    MalformedInputError,
    NotFoundError,
    StoreError,
    UnauthorizedError,
)
from api.exceptions.handlers import (
    general_exception_handler,
    http_exception_handler,
    orgchart_error_handler,
    validation_exception_handler,
    value_error_handler,
)


def _request(path="/api/nodes", method="POST") -> Request:
    return Request(
        {
            "type": "http",
            "method": method,
            "path": path,
            "headers": [],
            "client": ("127.0.0.1", 12345),
        }
    )


def _body(response) -> dict:
    return json.loads(response.body)


@pytest.mark.asyncio
async def test_api_root_lists_endpoints(client):
    response = await client.get("/")

    assert response.status_code == 200
    body = response.json()
    assert body["version"] == settings_module.APP_VERSION
    assert body["documentation"]["swagger_ui"] == "/docs"
    assert body["endpoints"]["tree"]["get"] == "GET /api/tree"


@pytest.mark.asyncio
async def test_health_reports_store(admin_client, client):
    await admin_client.post("/api/tree/root")

    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["store"]["backend"] == "sqlite"
    assert body["store"]["healthy"] is True
    assert body["store"]["node_count"] == 1
    assert body["uptime_seconds"] >= 0


@pytest.mark.asyncio
async def test_health_degraded_when_store_closed(client, store):
    await store.close()

    response = await client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "degraded"
    assert response.json()["store"]["healthy"] is False


@pytest.mark.asyncio
async def test_closed_store_surfaces_as_store_error(client, store):
    await store.close()

    response = await client.get("/api/nodes")

    assert response.status_code == 500
    assert response.json() == {"detail": "SQLite node store is not initialized"}


@pytest.mark.asyncio
async def test_lifespan_seeds_root_and_closes_store(app, store, monkeypatch):
    monkeypatch.setattr(settings_module, "SEED_ROOT_ON_STARTUP", True)
    monkeypatch.setattr(settings_module, "DEFAULT_ROOT_TITLE", "Leads")

    async with app.router.lifespan_context(app):
        root_ids = await store.list_root_ids()
        assert len(root_ids) == 1
        root = await store.get(root_ids[0])
        assert (root.type, root.title) == ("branch", "Leads")

    assert globals_module._GLOBAL_NODE_STORE is None


@pytest.mark.asyncio
async def test_lifespan_without_seeding_leaves_store_empty(app, store, monkeypatch):
    monkeypatch.setattr(settings_module, "SEED_ROOT_ON_STARTUP", False)

    async with app.router.lifespan_context(app):
        assert await store.count() == 0


ORGCHART_ERROR_CASES = [
    {
        "test_id": "EXC_001",
        "error": UnauthorizedError("Invalid credentials"),
        "expected_status": 401,
        "expected_detail": "Invalid credentials",
    },
    {
        "test_id": "EXC_002",
        "error": NotFoundError(node_id="abc"),
        "expected_status": 404,
        "expected_detail": "Node 'abc' not found",
    },
    {
        "test_id": "EXC_003",
        "error": MalformedInputError(),
        "expected_status": 400,
        "expected_detail": "Malformed input",
    },
    {
        "test_id": "EXC_004",
        "error": MalformedDataError("Expected exactly one root node, found 2: a, b"),
        "expected_status": 500,
        "expected_detail": "Expected exactly one root node, found 2: a, b",
    },
    {
        "test_id": "EXC_005",
        "error": StoreError(),
        "expected_status": 500,
        "expected_detail": "Node store operation failed",
    },
]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "case", ORGCHART_ERROR_CASES, ids=[c["test_id"] for c in ORGCHART_ERROR_CASES]
)
async def test_orgchart_error_handler(case, monkeypatch):
    monkeypatch.delenv("DEBUG_TRACEBACK", raising=False)

    response = await orgchart_error_handler(_request(), case["error"])

    assert response.status_code == case["expected_status"]
    assert _body(response) == {"detail": case["expected_detail"]}


@pytest.mark.asyncio
async def test_traceback_only_for_server_errors_in_debug(monkeypatch):
    monkeypatch.setenv("DEBUG_TRACEBACK", "1")

    server_error = await orgchart_error_handler(_request(), StoreError("boom"))
    client_error = await orgchart_error_handler(_request(), MalformedInputError("bad"))

    assert "traceback" in _body(server_error)
    assert "traceback" not in _body(client_error)


@pytest.mark.asyncio
async def test_validation_exception_handler():
    exc = RequestValidationError(
        [{"loc": ("body", "type"), "msg": "Field required", "type": "missing"}]
    )

    response = await validation_exception_handler(_request(), exc)

    assert response.status_code == 422
    assert _body(response) == {
        "detail": "Validation error",
        "errors": [{"loc": ["body", "type"], "msg": "Field required", "type": "missing"}],
    }


@pytest.mark.asyncio
async def test_http_exception_handler():
    response = await http_exception_handler(
        _request(), StarletteHTTPException(status_code=405, detail="Method Not Allowed")
    )

    assert response.status_code == 405
    assert _body(response) == {"detail": "Method Not Allowed"}


@pytest.mark.asyncio
async def test_value_error_handler():
    response = await value_error_handler(_request(), ValueError("Unknown column(s): salary"))

    assert response.status_code == 400
    assert _body(response) == {"detail": "Unknown column(s): salary"}


@pytest.mark.asyncio
async def test_general_exception_handler_hides_details(monkeypatch):
    monkeypatch.delenv("DEBUG_TRACEBACK", raising=False)

    response = await general_exception_handler(_request(), RuntimeError("secret path"))

    assert response.status_code == 500
    assert _body(response) == {"detail": "Internal server error"}


@pytest.mark.asyncio
async def test_unknown_route_uses_json_404(client):
    response = await client.get("/api/unknown")

    assert response.status_code == 404
    assert response.json() == {"detail": "Not Found"}
