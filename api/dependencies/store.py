"""Dependency providing a NodeService bound to the global node store."""

from api.services.node_service import NodeService
from nodestore.factory import get_global_node_store


async def get_node_service() -> NodeService:
    store = await get_global_node_store()
    return NodeService(store)
