"""NodeStore interface and its backends."""

from .base import NodeStore

__all__ = ["NodeStore"]
