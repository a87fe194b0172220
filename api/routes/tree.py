"""
MODULE_DESCRIPTION: Tree Endpoints - Assembled Org Chart

GET  /api/tree         public; the nested tree built from every stored node
POST /api/tree/root    admin; create the root branch if the chart has none

GET /api/tree response:
    {
        "initialized": true,
        "root": {"id": ..., "type": "branch", "title": "Leads", "children": [...]},
        "detachedCount": 0
    }

``initialized`` is false and ``root`` null while the store is empty. Nodes
that cannot be reached from the root (dangling parentId) are left out of the
tree and counted in ``detachedCount``. More than one parentless node makes
the stored data malformed and yields 500.
"""

from fastapi import APIRouter, Depends

import api.config.settings as settings_module
from api.dependencies.auth import require_admin_session
from api.dependencies.store import get_node_service
from api.models.responses import NodeResponse, TreeJSONResponse, TreeResponse
from api.services.node_service import NodeService
from api.utils.debug import print__tree_debug

router = APIRouter(prefix="/api/tree", tags=["tree"])


@router.get(
    "",
    response_model=TreeResponse,
    summary="Get the org chart tree",
    responses={500: {"description": "Stored data is malformed (more than one root)"}},
)
async def get_tree(service: NodeService = Depends(get_node_service)):
    report = await service.list_tree()
    if report.detached:
        print__tree_debug(
            f"GET /api/tree: {len(report.detached)} node(s) not reachable from the root"
        )
    return TreeJSONResponse(
        content={
            "initialized": report.initialized,
            "root": report.root.to_dict() if report.root else None,
            "detachedCount": len(report.detached),
        }
    )


@router.post(
    "/root",
    response_model=NodeResponse,
    summary="Create the root branch if missing",
    description="""
    **Idempotent.** Returns the existing root, or creates a branch root titled
    `DEFAULT_ROOT_TITLE` when the chart is empty.

    **Requires an admin session.**
    """,
    responses={401: {"description": "No valid admin session"}},
)
async def ensure_tree_root(
    session: dict = Depends(require_admin_session),
    service: NodeService = Depends(get_node_service),
):
    record = await service.ensure_root(settings_module.DEFAULT_ROOT_TITLE)
    return record.to_dict()
