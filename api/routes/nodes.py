"""
MODULE_DESCRIPTION: Node Endpoints - CRUD Over Org Chart Nodes

===================================================================================
PURPOSE AND OVERVIEW
===================================================================================

HTTP surface of NodeService. Reads are public; every write goes through the
``require_admin_session`` dependency first, so an anonymous write is rejected
with 401 before the store is touched.

===================================================================================
API ENDPOINTS
===================================================================================

GET    /api/nodes         all records, ascending createdAt         (public)
GET    /api/nodes/{id}    one record, 404 if missing                (public)
POST   /api/nodes         create a branch or member, 201            (admin)
PUT    /api/nodes/{id}    edit title or name/role/bio               (admin)
DELETE /api/nodes/{id}    remove the node and its whole subtree     (admin)

Errors are raised as OrgChartError subclasses and rendered by the handlers in
api.exceptions.handlers:
    401 Unauthorized    no valid admin session
    404 NotFound        unknown id
    400 MalformedInput  type-inconsistent payload, unknown parentId, second root
    500 StoreError      the store failed
"""

# CRITICAL: Set Windows event loop policy FIRST, before any other imports
# This must be the very first thing that happens to fix psycopg compatibility
import sys

if sys.platform == "win32":
    import asyncio

    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Load environment variables early
from dotenv import load_dotenv

load_dotenv()

from typing import List

from fastapi import APIRouter, Depends, status

from api.dependencies.auth import require_admin_session
from api.dependencies.store import get_node_service
from api.models.requests import NodeCreateRequest, NodeUpdateRequest
from api.models.responses import DeleteResponse, NodeResponse
from api.services.node_service import NodeService
from api.utils.debug import print__nodes_debug

# Create router for node endpoints
router = APIRouter(prefix="/api/nodes", tags=["nodes"])


@router.get("", response_model=List[NodeResponse], summary="List all nodes")
async def list_nodes(service: NodeService = Depends(get_node_service)):
    """Every stored node as a flat list, oldest first."""
    records = await service.list_all()
    return [record.to_dict() for record in records]


@router.get(
    "/{node_id}",
    response_model=NodeResponse,
    summary="Get one node",
    responses={404: {"description": "Node not found"}},
)
async def get_node(node_id: str, service: NodeService = Depends(get_node_service)):
    record = await service.get(node_id)
    return record.to_dict()


@router.post(
    "",
    response_model=NodeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a node",
    description="""
    **Create a branch or a member node.**

    - A branch needs a `title`.
    - A member needs a `name`; `bio`, `role` and `imageUrl` are optional and
      may be sent flat or nested under `memberDetails`.
    - `parentId` must reference an existing node. It may only be omitted to
      create the root, which must be a branch, while the chart has none.

    **Requires an admin session.**
    """,
    responses={
        400: {"description": "Malformed input - missing title/name, unknown parent, second root"},
        401: {"description": "No valid admin session"},
    },
)
async def create_node(
    request: NodeCreateRequest,
    session: dict = Depends(require_admin_session),
    service: NodeService = Depends(get_node_service),
):
    print__nodes_debug(
        f"POST /api/nodes by '{session.get('sub')}': type={request.type} parent={request.parentId}"
    )
    record = await service.create(
        request.type,
        parent_id=request.parentId,
        title=request.title,
        name=request.name,
        bio=request.bio,
        role=request.role,
        image_url=request.imageUrl,
    )
    return record.to_dict()


@router.put(
    "/{node_id}",
    response_model=NodeResponse,
    summary="Update a node",
    description="""
    **Edit a node in place.**

    Branches accept `title`; members accept `name`, `role` and `bio`.
    `type` and `parentId` cannot be changed.

    **Requires an admin session.**
    """,
    responses={
        400: {"description": "Malformed input - field not editable on this node type"},
        401: {"description": "No valid admin session"},
        404: {"description": "Node not found"},
    },
)
async def update_node(
    node_id: str,
    request: NodeUpdateRequest,
    session: dict = Depends(require_admin_session),
    service: NodeService = Depends(get_node_service),
):
    # Explicitly sent fields plus any extra keys; NodeService rejects the extras
    fields = {name: getattr(request, name) for name in request.model_fields_set}
    fields.update(request.model_extra or {})
    print__nodes_debug(
        f"PUT /api/nodes/{node_id} by '{session.get('sub')}': fields={sorted(fields)}"
    )
    record = await service.update(node_id, fields)
    return record.to_dict()


@router.delete(
    "/{node_id}",
    response_model=DeleteResponse,
    summary="Delete a node and its subtree",
    responses={
        401: {"description": "No valid admin session"},
        404: {"description": "Node not found"},
    },
)
async def delete_node(
    node_id: str,
    session: dict = Depends(require_admin_session),
    service: NodeService = Depends(get_node_service),
):
    """Delete a node; every descendant goes with it."""
    print__nodes_debug(f"DELETE /api/nodes/{node_id} by '{session.get('sub')}'")
    await service.delete(node_id)
    return {"success": True, "id": node_id}
