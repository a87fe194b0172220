from __future__ import annotations

MODULE_DESCRIPTION = r"""PostgreSQL Node Store

NodeStore backed by PostgreSQL through a psycopg 3 async connection pool.

Transactions:
------------
Each public method borrows one pooled connection inside
`async with pool.connection()`. The pool commits the transaction when the
block exits normally and rolls it back when it raises, so every store
operation is a single atomic statement from the caller's point of view.

Error Mapping:
-------------
psycopg.Error (including ForeignKeyViolation for a dangling parent_id and
CheckViolation for an unknown type) is wrapped in StoreError and chained
with `from`, so the original driver error stays visible in tracebacks.
"""

from typing import Any, Dict, List, Optional

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from api.exceptions.errors import StoreError
from api.utils.debug import print__store_debug
from nodestore.config import NODES_TABLE
from nodestore.database.connection import check_connection_health, get_direct_connection
from nodestore.database.pool_manager import close_connection_pool, create_connection_pool
from nodestore.database.table_setup import setup_nodes_table_postgres, table_exists
from nodestore.records import NodeRecord
from nodestore.stores.base import NodeStore, new_node_id, utc_now

_SELECT_COLUMNS = "id, type, parent_id, title, name, bio, role, image_url, created_at"


class PostgresNodeStore(NodeStore):
    """NodeStore on PostgreSQL."""

    backend_name = "postgres"

    def __init__(self):
        self.pool = None

    async def initialize(self) -> None:
        print__store_debug("POSTGRES STORE INIT: Preparing nodes table")
        try:
            async with get_direct_connection() as conn:
                if await table_exists(conn, NODES_TABLE):
                    print__store_debug(f"POSTGRES STORE INIT: {NODES_TABLE} table found")
                await setup_nodes_table_postgres(conn)
            self.pool = await create_connection_pool()
        except psycopg.Error as exc:
            raise StoreError(f"Failed to initialize PostgreSQL node store: {exc}") from exc
        print__store_debug("POSTGRES STORE INIT: Ready")

    async def close(self) -> None:
        await close_connection_pool(self.pool)
        self.pool = None

    def _require_pool(self):
        if self.pool is None:
            raise StoreError("PostgreSQL node store is not initialized")
        return self.pool

    async def _fetch(self, query, params=()) -> List[Dict[str, Any]]:
        pool = self._require_pool()
        try:
            async with pool.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(query, params)
                    if cur.description is None:
                        return []
                    return await cur.fetchall()
        except psycopg.Error as exc:
            print__store_debug(f"POSTGRES STORE ERROR: {type(exc).__name__}: {exc}")
            raise StoreError(f"Node store query failed: {exc}") from exc

    async def list_all(self) -> List[NodeRecord]:
        rows = await self._fetch(
            f"SELECT {_SELECT_COLUMNS} FROM {NODES_TABLE} ORDER BY created_at ASC, id ASC"
        )
        return [NodeRecord.from_row(row) for row in rows]

    async def get(self, node_id: str) -> Optional[NodeRecord]:
        rows = await self._fetch(
            f"SELECT {_SELECT_COLUMNS} FROM {NODES_TABLE} WHERE id = %s", (node_id,)
        )
        return NodeRecord.from_row(rows[0]) if rows else None

    async def list_root_ids(self) -> List[str]:
        rows = await self._fetch(
            f"SELECT id FROM {NODES_TABLE} WHERE parent_id IS NULL "
            "ORDER BY created_at ASC, id ASC"
        )
        return [row["id"] for row in rows]

    async def insert(self, values: Dict[str, Any]) -> NodeRecord:
        self._check_columns(values)
        row = {"id": new_node_id(), "created_at": utc_now(), **values}
        columns = list(row)
        query = sql.SQL("INSERT INTO {table} ({columns}) VALUES ({values}) RETURNING {returning}").format(
            table=sql.Identifier(NODES_TABLE),
            columns=sql.SQL(", ").join(sql.Identifier(c) for c in columns),
            values=sql.SQL(", ").join(sql.Placeholder() for _ in columns),
            returning=sql.SQL(_SELECT_COLUMNS),
        )
        rows = await self._fetch(query, [row[c] for c in columns])
        return NodeRecord.from_row(rows[0])

    async def update(self, node_id: str, values: Dict[str, Any]) -> Optional[NodeRecord]:
        self._check_columns(values)
        if not values:
            return await self.get(node_id)
        query = sql.SQL("UPDATE {table} SET {assignments} WHERE id = %s RETURNING {returning}").format(
            table=sql.Identifier(NODES_TABLE),
            assignments=sql.SQL(", ").join(
                sql.SQL("{} = %s").format(sql.Identifier(c)) for c in values
            ),
            returning=sql.SQL(_SELECT_COLUMNS),
        )
        rows = await self._fetch(query, [*values.values(), node_id])
        return NodeRecord.from_row(rows[0]) if rows else None

    async def delete(self, node_id: str) -> bool:
        rows = await self._fetch(
            f"DELETE FROM {NODES_TABLE} WHERE id = %s RETURNING id", (node_id,)
        )
        return bool(rows)

    async def count(self) -> int:
        rows = await self._fetch(f"SELECT COUNT(*) AS total FROM {NODES_TABLE}")
        return int(rows[0]["total"])

    async def health_check(self) -> bool:
        if self.pool is None:
            return False
        try:
            async with self.pool.connection() as conn:
                return await check_connection_health(conn)
        except Exception as exc:
            print__store_debug(f"POSTGRES STORE HEALTH: {exc}")
            return False
