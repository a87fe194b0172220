from __future__ import annotations

MODULE_DESCRIPTION = r"""Global State for the Node Store

Single source of truth for the shared resources of the persistence layer.

Global Variables:
----------------
_GLOBAL_NODE_STORE (NodeStore | None):
    The singleton store used by every request. Set by
    nodestore.factory.initialize_node_store(), read through
    nodestore.factory.get_global_node_store(), reset by cleanup_node_store().

_CONNECTION_STRING_CACHE (str | None):
    Cached PostgreSQL connection string, so the unique application name stays
    the same for the whole process.

_STORE_INIT_LOCK (asyncio.Lock | None):
    Created lazily inside the running loop; serializes concurrent first
    requests racing to initialize the store.
"""

import asyncio
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from nodestore.stores.base import NodeStore

_GLOBAL_NODE_STORE: Optional["NodeStore"] = None
_CONNECTION_STRING_CACHE: Optional[str] = None
_STORE_INIT_LOCK: Optional[asyncio.Lock] = None
