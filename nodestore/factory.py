from __future__ import annotations

MODULE_DESCRIPTION = r"""Node Store Factory and Lifecycle Management

Creates, exposes and tears down the process-wide NodeStore singleton.

Lifecycle:
---------
1. initialize_node_store() - called from the FastAPI lifespan at startup
   - resolves the backend (nodestore.config.resolve_backend)
   - PostgreSQL: creates the table and opens the pool
   - on PostgreSQL failure with SQLITE_FALLBACK_ENABLED: logs the error and
     continues on SQLite (non-shared, local file), so the application still
     starts for development or degraded operation
2. get_global_node_store() - used by request dependencies; lazily
   initializes when the lifespan did not run (e.g. ASGI test transports)
3. cleanup_node_store() - called at shutdown; closes connections and clears
   the singleton so a later initialize starts fresh

Idempotency:
-----------
initialize_node_store() returns the existing store when one is set. The
init lock in nodestore.globals keeps concurrent first requests from creating
two stores.

Usage:
-----
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await initialize_node_store()
        yield
        await cleanup_node_store()
"""

import asyncio

import nodestore.globals as globals_module
from api.exceptions.errors import StoreError
from api.utils.debug import print__store_debug
from nodestore import config as store_config
from nodestore.stores.base import NodeStore
from nodestore.stores.sqlite import SqliteNodeStore


def _get_init_lock() -> asyncio.Lock:
    if globals_module._STORE_INIT_LOCK is None:
        globals_module._STORE_INIT_LOCK = asyncio.Lock()
    return globals_module._STORE_INIT_LOCK


async def create_node_store(
    backend: str | None = None, sqlite_path: str | None = None
) -> NodeStore:
    """Create and initialize a store for the resolved backend.

    Args:
        backend: "auto", "postgres" or "sqlite"; NODE_STORE_BACKEND when None
        sqlite_path: SQLite file path; SQLITE_PATH when None

    Returns:
        NodeStore: an initialized store

    Raises:
        StoreError: If the store cannot be initialized and no fallback applies
    """
    resolved = store_config.resolve_backend(backend)
    path = sqlite_path or store_config.SQLITE_PATH

    if resolved == "postgres":
        # Imported here so SQLite-only deployments do not need libpq
        from nodestore.stores.postgres import PostgresNodeStore

        store = PostgresNodeStore()
        try:
            await store.initialize()
            return store
        except StoreError as exc:
            await store.close()
            if not store_config.SQLITE_FALLBACK_ENABLED:
                raise
            print__store_debug(
                f"⚠️ POSTGRES UNAVAILABLE: {exc.detail} - falling back to SQLite at {path}"
            )

    store = SqliteNodeStore(path)
    await store.initialize()
    return store


async def initialize_node_store(
    backend: str | None = None, sqlite_path: str | None = None
) -> NodeStore:
    """Initialize the global node store (idempotent)."""
    async with _get_init_lock():
        if globals_module._GLOBAL_NODE_STORE is None:
            print__store_debug("🚀 NODE STORE INIT: Initializing node store...")
            globals_module._GLOBAL_NODE_STORE = await create_node_store(
                backend, sqlite_path
            )
            print__store_debug(
                "✅ NODE STORE INIT: Using "
                f"{globals_module._GLOBAL_NODE_STORE.backend_name} backend"
            )
        return globals_module._GLOBAL_NODE_STORE


async def get_global_node_store() -> NodeStore:
    """Return the global store, initializing it on first use."""
    if globals_module._GLOBAL_NODE_STORE is None:
        return await initialize_node_store()
    return globals_module._GLOBAL_NODE_STORE


async def cleanup_node_store() -> None:
    """Close the global store and clear the singleton."""
    store = globals_module._GLOBAL_NODE_STORE
    globals_module._GLOBAL_NODE_STORE = None
    globals_module._STORE_INIT_LOCK = None
    if store is not None:
        print__store_debug("🧹 NODE STORE CLEANUP: Closing node store")
        await store.close()
