from __future__ import annotations

MODULE_DESCRIPTION = r"""Node Store Configuration Management

Central configuration for the persistence layer: which backend to use,
PostgreSQL connection parameters, connection pool sizing, timeouts and the
SQLite fallback location.

Backend Selection:
-----------------
NODE_STORE_BACKEND:
    - "postgres": always use PostgreSQL (fails if variables are missing,
      unless SQLITE_FALLBACK_ENABLED allows falling back)
    - "sqlite": always use the SQLite file at SQLITE_PATH
    - "auto" (default): PostgreSQL when host/port/dbname/user/password are all
      set, SQLite otherwise

SQLITE_FALLBACK_ENABLED ("1" default):
    When PostgreSQL initialization fails, continue on SQLite instead of
    aborting startup. Suitable for development or degraded operation.

Connection Settings:
-------------------
- CONNECT_TIMEOUT: 30 seconds - Initial connection timeout
- TCP_USER_TIMEOUT: 60000 ms - TCP-level timeout for network interruptions
- KEEPALIVES_IDLE / KEEPALIVES_INTERVAL / KEEPALIVES_COUNT - keepalive probes

Connection Pool Configuration:
-----------------------------
- DEFAULT_POOL_MIN_SIZE: 1 - expected node counts are small (tens to hundreds)
- DEFAULT_POOL_MAX_SIZE: 5
- DEFAULT_POOL_TIMEOUT: 30 seconds - wait for a pooled connection
- DEFAULT_MAX_IDLE: 300 seconds
- DEFAULT_MAX_LIFETIME: 3600 seconds

Required Environment (PostgreSQL):
---------------------------------
- host, port (default 5432), dbname, user, password
- POSTGRES_SSLMODE (default "require")
"""

import os

from api.utils.debug import print__store_debug

# Backend selection
NODE_STORE_BACKEND = os.environ.get("NODE_STORE_BACKEND", "auto").strip().lower()
SQLITE_FALLBACK_ENABLED = os.environ.get("SQLITE_FALLBACK_ENABLED", "1") == "1"
SQLITE_PATH = os.environ.get("SQLITE_PATH", "data/orgchart.db")
SUPPORTED_BACKENDS = ("auto", "postgres", "sqlite")

# Table name shared by every backend
NODES_TABLE = "nodes"

# Connection timeouts
CONNECT_TIMEOUT = 30  # Initial connection timeout (seconds)
TCP_USER_TIMEOUT = 60000  # TCP-level timeout in milliseconds
KEEPALIVES_IDLE = 300  # Time (seconds) before first keepalive probe
KEEPALIVES_INTERVAL = 30  # Interval (seconds) between keepalive probes
KEEPALIVES_COUNT = 3  # Failed probes before the connection is considered dead
POSTGRES_SSLMODE = os.environ.get("POSTGRES_SSLMODE", "require")

# Connection pool
DEFAULT_POOL_MIN_SIZE = 1
DEFAULT_POOL_MAX_SIZE = 5
DEFAULT_POOL_TIMEOUT = 30
DEFAULT_MAX_IDLE = 300
DEFAULT_MAX_LIFETIME = 3600


def get_db_config():
    """Extract PostgreSQL configuration from environment variables.

    Returns:
        dict: Database configuration dictionary containing:
            - user: PostgreSQL username
            - password: PostgreSQL password
            - host: PostgreSQL server hostname
            - port: PostgreSQL server port (default 5432)
            - dbname: Target database name
    """
    print__store_debug(
        "DB CONFIG START: Getting database configuration from environment variables"
    )

    config = {
        "user": os.environ.get("user"),
        "password": os.environ.get("password"),
        "host": os.environ.get("host"),
        "port": int(os.environ.get("port", 5432)),
        "dbname": os.environ.get("dbname"),
    }

    # Password is intentionally excluded from debug output
    print__store_debug(
        f"DB CONFIG RESULT: host: {config['host']}, port: {config['port']}, "
        f"dbname: {config['dbname']}, user: {config['user']}"
    )
    return config


def check_postgres_env_vars():
    """Validate that all required PostgreSQL environment variables are configured.

    Returns:
        bool: True if all required variables are set, False if any are missing
    """
    required_vars = ["host", "port", "dbname", "user", "password"]

    missing_vars = [var for var in required_vars if not os.environ.get(var)]

    if missing_vars:
        print__store_debug(
            f"ENV VARS MISSING: Missing PostgreSQL environment variables: {missing_vars}"
        )
        return False

    print__store_debug("ENV VARS COMPLETE: All PostgreSQL environment variables are set")
    return True


def resolve_backend(requested: str | None = None) -> str:
    """Resolve the configured backend name to "postgres" or "sqlite".

    Args:
        requested: Explicit backend name; NODE_STORE_BACKEND when None

    Returns:
        str: "postgres" or "sqlite"

    Raises:
        ValueError: If the backend name is not one of SUPPORTED_BACKENDS
    """
    backend = (requested or NODE_STORE_BACKEND).strip().lower()
    if backend not in SUPPORTED_BACKENDS:
        raise ValueError(
            f"Unsupported NODE_STORE_BACKEND '{backend}'. "
            f"Expected one of: {', '.join(SUPPORTED_BACKENDS)}"
        )
    if backend == "auto":
        backend = "postgres" if check_postgres_env_vars() else "sqlite"
    print__store_debug(f"BACKEND RESOLVED: {backend}")
    return backend
