"""
Exceptions package for the API server.

Domain error types and the FastAPI handlers that render them as JSON.
"""

from .errors import (
    MalformedDataError,
    MalformedInputError,
    NotFoundError,
    OrgChartError,
    StoreError,
    UnauthorizedError,
)

__all__ = [
    "OrgChartError",
    "UnauthorizedError",
    "NotFoundError",
    "MalformedInputError",
    "MalformedDataError",
    "StoreError",
]
