"""
Data models package for the API server.

This package contains Pydantic models for request/response validation
of the org chart API.
"""

# Import request models
from .requests import (
    LoginRequest,
    MemberDetails,
    NodeCreateRequest,
    NodeUpdateRequest,
)

# Import response models
from .responses import (
    AuthCheckResponse,
    DeleteResponse,
    HealthResponse,
    LoginResponse,
    MemberDetailsResponse,
    NodeResponse,
    TreeJSONResponse,
    TreeNodeResponse,
    TreeResponse,
)

# Export all models for easier access
__all__ = [
    # Request models
    "LoginRequest",
    "MemberDetails",
    "NodeCreateRequest",
    "NodeUpdateRequest",
    # Response models
    "AuthCheckResponse",
    "DeleteResponse",
    "HealthResponse",
    "LoginResponse",
    "MemberDetailsResponse",
    "NodeResponse",
    "TreeJSONResponse",
    "TreeNodeResponse",
    "TreeResponse",
]
