"""
Utility functions package for the API server.

This package contains the env-gated debug print helpers used across the
org chart API and the node store.
"""

# Debug utilities
from .debug import (
    print__auth_debug,
    print__debug,
    print__middleware_debug,
    print__nodes_debug,
    print__startup_debug,
    print__store_debug,
    print__tree_debug,
)

# Export all utilities for easy access
__all__ = [
    "print__auth_debug",
    "print__debug",
    "print__middleware_debug",
    "print__nodes_debug",
    "print__startup_debug",
    "print__store_debug",
    "print__tree_debug",
]
