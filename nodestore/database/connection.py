from __future__ import annotations

MODULE_DESCRIPTION = r"""PostgreSQL Connection String Generation and Basic Connection Management

This module builds the PostgreSQL connection string and connection kwargs
used by the node store's connection pool, and offers a direct connection
context manager for one-off work such as table setup.

Key Features:
-------------
1. Connection String Generation:
   - SSL mode from POSTGRES_SSLMODE (default: require)
   - Unique application name (orgchart_{pid}_{time}_{random}) so the
     store's connections are identifiable in pg_stat_activity
   - Connect timeout, TCP user timeout and keepalive parameters
   - Cached in nodestore.globals for the lifetime of the process

2. Connection Parameters:
   - autocommit=False: the pool commits or rolls back each `connection()`
     block as a unit
   - prepare_threshold=None: no server-side prepared statements, which keeps
     the store compatible with transaction-mode poolers (PgBouncer, Supabase)

3. Health Check:
   - check_connection_health() runs SELECT 1 and never raises; the store
     uses it for the /health report

Usage Examples:
--------------
   from nodestore.database.connection import get_direct_connection

   async with get_direct_connection() as conn:
       async with conn.cursor() as cur:
           await cur.execute("SELECT COUNT(*) FROM nodes")
"""

# CRITICAL: Set Windows event loop policy FIRST, before any other imports
# This must be the very first thing that happens to fix psycopg compatibility
import os
import sys

if sys.platform == "win32":
    import asyncio

    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

import time
import uuid
from contextlib import asynccontextmanager
from urllib.parse import quote_plus

import psycopg

from api.utils.debug import print__store_debug
from nodestore.config import (
    CONNECT_TIMEOUT,
    KEEPALIVES_COUNT,
    KEEPALIVES_IDLE,
    KEEPALIVES_INTERVAL,
    POSTGRES_SSLMODE,
    TCP_USER_TIMEOUT,
    get_db_config,
)


def get_connection_string():
    """Generate the PostgreSQL connection string, cached per process.

    Returns:
        str: postgresql:// URL with SSL, application name, timeout and
        keepalive parameters
    """
    import nodestore.globals as globals_module

    if globals_module._CONNECTION_STRING_CACHE is not None:
        return globals_module._CONNECTION_STRING_CACHE

    config = get_db_config()

    process_id = os.getpid()
    startup_time = int(time.time())
    random_id = uuid.uuid4().hex[:8]
    app_name = f"orgchart_{process_id}_{startup_time}_{random_id}"
    print__store_debug(f"CONNECTION STRING APP NAME: {app_name}")

    # Credentials may contain URL-reserved characters
    user = quote_plus(config["user"] or "")
    password = quote_plus(config["password"] or "")

    globals_module._CONNECTION_STRING_CACHE = (
        f"postgresql://{user}:{password}@"
        f"{config['host']}:{config['port']}/{config['dbname']}?"
        f"sslmode={POSTGRES_SSLMODE}"
        f"&application_name={app_name}"
        f"&connect_timeout={CONNECT_TIMEOUT}"
        f"&keepalives_idle={KEEPALIVES_IDLE}"
        f"&keepalives_interval={KEEPALIVES_INTERVAL}"
        f"&keepalives_count={KEEPALIVES_COUNT}"
        f"&tcp_user_timeout={TCP_USER_TIMEOUT}"
    )

    print__store_debug("CONNECTION STRING COMPLETE: PostgreSQL connection string generated")
    return globals_module._CONNECTION_STRING_CACHE


def get_connection_kwargs():
    """Connection kwargs shared by the pool and direct connections."""
    return {
        "autocommit": False,
        "prepare_threshold": None,  # Disable prepared statements completely
    }


async def check_connection_health(connection):
    """Check if a database connection is healthy and working.

    Backs the store health report, so it must never raise.

    Args:
        connection: psycopg async connection object to check

    Returns:
        bool: True if SELECT 1 succeeded, False otherwise
    """
    try:
        async with connection.cursor() as cur:
            await cur.execute("SELECT 1")
            result = await cur.fetchone()
            return result is not None and result[0] == 1
    except Exception as exc:
        print__store_debug(f"Connection health check failed: {exc}")
        return False


@asynccontextmanager
async def get_direct_connection():
    """Get a direct database connection outside the pool.

    Yields:
        psycopg.AsyncConnection: Direct async connection to PostgreSQL database
    """
    connection_string = get_connection_string()
    connection_kwargs = get_connection_kwargs()

    async with await psycopg.AsyncConnection.connect(
        connection_string, **connection_kwargs
    ) as conn:
        yield conn
