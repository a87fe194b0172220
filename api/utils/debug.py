# CRITICAL: Set Windows event loop policy FIRST, before any other imports
# This must be the very first thing that happens to fix psycopg compatibility
import os
import sys

if sys.platform == "win32":
    import asyncio

    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Load environment variables early
from dotenv import load_dotenv

load_dotenv()


# ==============================================================================
# DEBUG FUNCTIONS
# ==============================================================================
def _emit(switch: str, tag: str, msg: str) -> None:
    if os.environ.get(switch, "0") == "1":
        print(f"[{tag}] {msg}")
        sys.stdout.flush()


def print__debug(msg: str) -> None:
    """Print DEBUG messages when debug mode is enabled.

    Args:
        msg: The message to print
    """
    _emit("DEBUG", "DEBUG", msg)


def print__startup_debug(msg: str) -> None:
    """Print application startup/shutdown messages when enabled.

    Args:
        msg: The message to print
    """
    _emit("print__startup_debug", "print__startup_debug", msg)


def print__nodes_debug(msg: str) -> None:
    """Print node CRUD endpoint messages when enabled.

    Args:
        msg: The message to print
    """
    _emit("print__nodes_debug", "print__nodes_debug", msg)


def print__tree_debug(msg: str) -> None:
    """Print tree assembly messages when enabled.

    Args:
        msg: The message to print
    """
    _emit("print__tree_debug", "print__tree_debug", msg)


def print__auth_debug(msg: str) -> None:
    """Print login/session messages when enabled.

    Never pass credentials or token values to this function.

    Args:
        msg: The message to print
    """
    _emit("print__auth_debug", "print__auth_debug", msg)


def print__store_debug(msg: str) -> None:
    """Print node store (database) messages when enabled.

    Args:
        msg: The message to print
    """
    _emit("print__store_debug", "print__store_debug", msg)


def print__middleware_debug(msg: str) -> None:
    """Print middleware registration messages when enabled."""
    _emit("print__middleware_debug", "print__middleware_debug", msg)
