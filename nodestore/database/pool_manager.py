from __future__ import annotations

MODULE_DESCRIPTION = r"""Connection Pool Management for the PostgreSQL Node Store

Creates and closes the psycopg_pool.AsyncConnectionPool owned by
PostgresNodeStore. The pool is created with open=False and opened explicitly
(the construction style psycopg recommends), and waits for min_size
connections so a misconfigured database fails at startup instead of on the
first request.
"""

from psycopg_pool import AsyncConnectionPool

from api.utils.debug import print__store_debug
from nodestore.config import (
    CONNECT_TIMEOUT,
    DEFAULT_MAX_IDLE,
    DEFAULT_MAX_LIFETIME,
    DEFAULT_POOL_MAX_SIZE,
    DEFAULT_POOL_MIN_SIZE,
    DEFAULT_POOL_TIMEOUT,
)
from nodestore.database.connection import (
    get_connection_kwargs,
    get_connection_string,
)


async def create_connection_pool() -> AsyncConnectionPool:
    """Create and open the connection pool.

    Returns:
        AsyncConnectionPool: opened pool with min_size connections ready

    Raises:
        psycopg_pool.PoolTimeout: If the database cannot be reached in time
    """
    print__store_debug("POOL START: Creating psycopg connection pool")

    pool = AsyncConnectionPool(
        conninfo=get_connection_string(),
        min_size=DEFAULT_POOL_MIN_SIZE,
        max_size=DEFAULT_POOL_MAX_SIZE,
        timeout=DEFAULT_POOL_TIMEOUT,
        max_idle=DEFAULT_MAX_IDLE,
        max_lifetime=DEFAULT_MAX_LIFETIME,
        kwargs={
            **get_connection_kwargs(),
            "connect_timeout": CONNECT_TIMEOUT,
        },
        check=AsyncConnectionPool.check_connection,
        open=False,
    )
    try:
        await pool.open(wait=True, timeout=DEFAULT_POOL_TIMEOUT)
    except Exception as exc:
        print__store_debug(f"POOL ERROR: Failed to open pool: {exc}")
        await pool.close()
        raise

    print__store_debug("POOL READY: Connection pool opened")
    return pool


async def close_connection_pool(pool: AsyncConnectionPool | None) -> None:
    """Close the pool if it is open. Safe to call with None."""
    if pool is None or pool.closed:
        return
    print__store_debug("POOL CLOSE: Closing connection pool")
    await pool.close()
