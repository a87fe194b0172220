"""
MODULE_DESCRIPTION: Response Models - Pydantic Schemas for API Response Serialization

===================================================================================
PURPOSE AND OVERVIEW
===================================================================================

Response schemas for the org chart API. Routes build plain dicts from
NodeRecord.to_dict() / TreeNode.to_dict() and FastAPI validates them against
these models, so the OpenAPI docs and the wire shape stay in sync. The tree
route is the exception: it returns a TreeJSONResponse, whose encoder walks the
nested dict with an explicit stack, because the tree can be deeper than the
interpreter recursion limit.

Response Models:
    1. NodeResponse: one flat node record
    2. MemberDetailsResponse / TreeNodeResponse: nested tree node
    3. TreeResponse: GET /api/tree
    4. DeleteResponse: DELETE /api/nodes/{id}
    5. LoginResponse / AuthCheckResponse: session endpoints
    6. HealthResponse: GET /health

===================================================================================
WIRE FORMAT
===================================================================================

Field names are camelCase (parentId, imageUrl, createdAt) because the browser
client reads them that way. createdAt is an ISO 8601 timestamp. Fields that do
not apply to a node type are null: a branch has no name/bio/role/imageUrl and
a member has no title.
"""

import json
from datetime import datetime
from typing import Any, List, Literal, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field


class NodeResponse(BaseModel):
    """A single node record."""

    id: str
    type: Literal["branch", "member"]
    title: Optional[str] = None
    name: Optional[str] = None
    bio: Optional[str] = None
    role: Optional[str] = None
    imageUrl: Optional[str] = None
    parentId: Optional[str] = None
    createdAt: Optional[datetime] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "3f1c2d9e-6a4b-4c1e-9f0a-2b7d5e8c1a23",
                "type": "member",
                "title": None,
                "name": "Ann",
                "bio": "Builds things.",
                "role": "Lead",
                "imageUrl": None,
                "parentId": "9a0b1c2d-3e4f-5a6b-7c8d-9e0f1a2b3c4d",
                "createdAt": "2026-01-15T10:30:00+00:00",
            }
        }
    }


class MemberDetailsResponse(BaseModel):
    name: Optional[str] = None
    bio: Optional[str] = None
    role: Optional[str] = None
    imageUrl: Optional[str] = None


class TreeNodeResponse(BaseModel):
    """A node with its children, as rendered by the org chart view."""

    id: str
    type: Literal["branch", "member"]
    title: Optional[str] = None
    parentId: Optional[str] = None
    createdAt: Optional[datetime] = None
    memberDetails: Optional[MemberDetailsResponse] = None
    children: List["TreeNodeResponse"] = Field(default_factory=list)


TreeNodeResponse.model_rebuild()


class TreeResponse(BaseModel):
    """The assembled tree.

    ``initialized`` is False (and ``root`` null) while the store is empty.
    ``detachedCount`` counts stored nodes that could not be attached under
    the root, e.g. because their parent no longer exists.
    """

    initialized: bool
    root: Optional[TreeNodeResponse] = None
    detachedCount: int = 0


class _Fragment(str):
    """Already-encoded JSON text, as opposed to a string value to encode."""


def dumps_nested(content: Any) -> str:
    """Compact JSON for dict/list nesting of any depth, using an explicit stack.

    Scalars go through ``json.dumps``; only the container walk is done here,
    so a chain of thousands of nested tree nodes encodes without recursion.
    """
    parts: List[str] = []
    stack: List[Any] = [content]
    while stack:
        item = stack.pop()
        if isinstance(item, _Fragment):
            parts.append(item)
        elif isinstance(item, dict):
            pending: List[Any] = [_Fragment("{")]
            for index, (key, value) in enumerate(item.items()):
                separator = "," if index else ""
                pending.append(
                    _Fragment(separator + json.dumps(str(key), ensure_ascii=False) + ":")
                )
                pending.append(value)
            pending.append(_Fragment("}"))
            stack.extend(reversed(pending))
        elif isinstance(item, (list, tuple)):
            pending = [_Fragment("[")]
            for index, value in enumerate(item):
                if index:
                    pending.append(_Fragment(","))
                pending.append(value)
            pending.append(_Fragment("]"))
            stack.extend(reversed(pending))
        else:
            parts.append(json.dumps(item, ensure_ascii=False, allow_nan=False))
    return "".join(parts)


class TreeJSONResponse(JSONResponse):
    """JSONResponse for GET /api/tree.

    The route returns it directly, so FastAPI skips response_model validation
    and ``jsonable_encoder``; both recurse once per nesting level. Content must
    already be JSON-ready (TreeNode.to_dict() output).
    """

    def render(self, content: Any) -> bytes:
        return dumps_nested(content).encode("utf-8")


class DeleteResponse(BaseModel):
    success: bool = True
    id: str


class LoginResponse(BaseModel):
    success: bool = True


class AuthCheckResponse(BaseModel):
    isAdmin: bool


class HealthResponse(BaseModel):
    status: Literal["healthy", "degraded"]
    timestamp: str
    uptime_seconds: float
    store: dict
    version: str
