"""SQLite node store.

Local and development backend, and the fallback when PostgreSQL is not
available. One connection is held for the lifetime of the store (required
for ``:memory:`` databases) with foreign keys switched on, so
``ON DELETE CASCADE`` removes subtrees exactly as PostgreSQL does.

Statements run synchronously on the event loop thread. Each one is short and
there are no awaits between a statement and its commit, so requests cannot
interleave inside a transaction.
"""

import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

from api.exceptions.errors import StoreError
from api.utils.debug import print__store_debug
from nodestore.config import NODES_TABLE
from nodestore.database.table_setup import setup_nodes_table_sqlite
from nodestore.records import NodeRecord
from nodestore.stores.base import NodeStore, new_node_id, utc_now

_SELECT_COLUMNS = "id, type, parent_id, title, name, bio, role, image_url, created_at"


class SqliteNodeStore(NodeStore):
    """NodeStore on an SQLite file (or ``:memory:``)."""

    backend_name = "sqlite"

    def __init__(self, path: str):
        self.path = path
        self._conn: Optional[sqlite3.Connection] = None

    async def initialize(self) -> None:
        print__store_debug(f"SQLITE STORE INIT: Opening {self.path}")
        try:
            if self.path != ":memory:":
                Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
            setup_nodes_table_sqlite(conn)
        except (sqlite3.Error, OSError) as exc:
            raise StoreError(f"Failed to initialize SQLite node store: {exc}") from exc
        self._conn = conn
        print__store_debug("SQLITE STORE INIT: Ready")

    async def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _execute(self, query: str, params=()) -> List[sqlite3.Row]:
        if self._conn is None:
            raise StoreError("SQLite node store is not initialized")
        try:
            with self._conn:
                cursor = self._conn.execute(query, params)
                return cursor.fetchall()
        except sqlite3.Error as exc:
            print__store_debug(f"SQLITE STORE ERROR: {type(exc).__name__}: {exc}")
            raise StoreError(f"Node store query failed: {exc}") from exc

    async def list_all(self) -> List[NodeRecord]:
        rows = self._execute(
            f"SELECT {_SELECT_COLUMNS} FROM {NODES_TABLE} ORDER BY created_at ASC, rowid ASC"
        )
        return [NodeRecord.from_row(row) for row in rows]

    async def get(self, node_id: str) -> Optional[NodeRecord]:
        rows = self._execute(
            f"SELECT {_SELECT_COLUMNS} FROM {NODES_TABLE} WHERE id = ?", (node_id,)
        )
        return NodeRecord.from_row(rows[0]) if rows else None

    async def list_root_ids(self) -> List[str]:
        rows = self._execute(
            f"SELECT id FROM {NODES_TABLE} WHERE parent_id IS NULL "
            "ORDER BY created_at ASC, rowid ASC"
        )
        return [row["id"] for row in rows]

    async def insert(self, values: Dict[str, Any]) -> NodeRecord:
        self._check_columns(values)
        # Fixed-width ISO text so lexical ORDER BY matches chronological order
        row = {
            "id": new_node_id(),
            "created_at": utc_now().isoformat(timespec="microseconds"),
            **values,
        }
        columns = list(row)
        placeholders = ", ".join("?" for _ in columns)
        self._execute(
            f"INSERT INTO {NODES_TABLE} ({', '.join(columns)}) VALUES ({placeholders})",
            [row[c] for c in columns],
        )
        record = await self.get(row["id"])
        if record is None:
            raise StoreError(f"Inserted node '{row['id']}' could not be read back")
        return record

    async def update(self, node_id: str, values: Dict[str, Any]) -> Optional[NodeRecord]:
        self._check_columns(values)
        if values:
            assignments = ", ".join(f"{column} = ?" for column in values)
            self._execute(
                f"UPDATE {NODES_TABLE} SET {assignments} WHERE id = ?",
                [*values.values(), node_id],
            )
        return await self.get(node_id)

    async def delete(self, node_id: str) -> bool:
        if self._conn is None:
            raise StoreError("SQLite node store is not initialized")
        try:
            with self._conn:
                cursor = self._conn.execute(
                    f"DELETE FROM {NODES_TABLE} WHERE id = ?", (node_id,)
                )
                return cursor.rowcount > 0
        except sqlite3.Error as exc:
            raise StoreError(f"Node store delete failed: {exc}") from exc

    async def count(self) -> int:
        rows = self._execute(f"SELECT COUNT(*) AS total FROM {NODES_TABLE}")
        return int(rows[0]["total"])

    async def health_check(self) -> bool:
        if self._conn is None:
            return False
        try:
            return self._conn.execute("SELECT 1").fetchone()[0] == 1
        except sqlite3.Error as exc:
            print__store_debug(f"SQLITE STORE HEALTH: {exc}")
            return False
