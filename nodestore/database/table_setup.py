from __future__ import annotations

MODULE_DESCRIPTION = r"""Nodes Table Setup

Creates the `nodes` table for both backends. The schema is the same in
spirit on PostgreSQL and SQLite:

   CREATE TABLE nodes (
       id          VARCHAR(64) PRIMARY KEY,
       type        VARCHAR(16) NOT NULL CHECK (type IN ('branch', 'member')),
       title       TEXT,
       name        TEXT,
       bio         TEXT,
       role        TEXT,
       image_url   TEXT,
       parent_id   VARCHAR(64) REFERENCES nodes(id) ON DELETE CASCADE,
       created_at  TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
   );

Cascade Semantics:
-----------------
parent_id is a self-referencing foreign key with ON DELETE CASCADE, so
deleting a node removes its whole subtree inside the database. The service
layer never walks the subtree itself. SQLite only enforces this when
`PRAGMA foreign_keys = ON` is set on the connection, which the SQLite store
does for every connection it opens.

Indexes:
-------
- idx_nodes_parent_id: cascade deletes and child lookups
- idx_nodes_created_at: the list ordering

Both setups are idempotent (IF NOT EXISTS) and run on every startup.
"""

import sqlite3

from api.utils.debug import print__store_debug
from nodestore.config import NODES_TABLE

POSTGRES_CREATE_TABLE = f"""
    CREATE TABLE IF NOT EXISTS {NODES_TABLE} (
        id VARCHAR(64) PRIMARY KEY,
        type VARCHAR(16) NOT NULL CHECK (type IN ('branch', 'member')),
        title TEXT,
        name TEXT,
        bio TEXT,
        role TEXT,
        image_url TEXT,
        parent_id VARCHAR(64) REFERENCES {NODES_TABLE}(id) ON DELETE CASCADE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
    );
"""

SQLITE_CREATE_TABLE = f"""
    CREATE TABLE IF NOT EXISTS {NODES_TABLE} (
        id TEXT PRIMARY KEY,
        type TEXT NOT NULL CHECK (type IN ('branch', 'member')),
        title TEXT,
        name TEXT,
        bio TEXT,
        role TEXT,
        image_url TEXT,
        parent_id TEXT REFERENCES {NODES_TABLE}(id) ON DELETE CASCADE,
        created_at TEXT NOT NULL
    );
"""

CREATE_INDEXES = (
    f"CREATE INDEX IF NOT EXISTS idx_nodes_parent_id ON {NODES_TABLE}(parent_id);",
    f"CREATE INDEX IF NOT EXISTS idx_nodes_created_at ON {NODES_TABLE}(created_at);",
)


async def setup_nodes_table_postgres(conn):
    """Create the nodes table and its indexes on a psycopg async connection.

    Args:
        conn: psycopg.AsyncConnection (committed by this function)
    """
    print__store_debug(f"CREATE TABLE: Creating {NODES_TABLE} table (PostgreSQL)")
    try:
        await conn.execute(POSTGRES_CREATE_TABLE)
        for statement in CREATE_INDEXES:
            await conn.execute(statement)
        await conn.commit()
    except Exception as exc:
        print__store_debug(f"CREATE TABLE ERROR: Failed to setup {NODES_TABLE}: {exc}")
        raise
    print__store_debug(f"CREATE TABLE SUCCESS: {NODES_TABLE} table and indexes ready")


def setup_nodes_table_sqlite(conn: sqlite3.Connection):
    """Create the nodes table and its indexes on an SQLite connection."""
    print__store_debug(f"CREATE TABLE: Creating {NODES_TABLE} table (SQLite)")
    with conn:
        conn.execute(SQLITE_CREATE_TABLE)
        for statement in CREATE_INDEXES:
            conn.execute(statement)
    print__store_debug(f"CREATE TABLE SUCCESS: {NODES_TABLE} table and indexes ready")


async def table_exists(conn, table_name):
    """Check if a table exists in the public schema (PostgreSQL).

    Args:
        conn: psycopg async connection object to use for the query
        table_name (str): Name of the table to check for existence

    Returns:
        bool: True if the table exists in the public schema
    """
    async with conn.cursor() as cur:
        await cur.execute(
            """
            SELECT EXISTS (
                SELECT FROM information_schema.tables
                WHERE table_schema = 'public' AND table_name = %s
            );
            """,
            (table_name,),
        )
        result = await cur.fetchone()
        return bool(result and result[0])
