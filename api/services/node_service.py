"""
MODULE_DESCRIPTION: Node Service - CRUD Contract Over the Node Store

===================================================================================
PURPOSE AND OVERVIEW
===================================================================================

NodeService is the only component that reads or writes the node store. Routes
call it after the session gate has accepted the request; it validates the
operation against the org chart rules, delegates to the store and turns
missing rows into NotFoundError.

===================================================================================
OPERATIONS
===================================================================================

list_all()            all records, ascending created_at
get(id)               one record, NotFoundError if missing
create(...)           new record; the store assigns id and created_at
update(id, fields)    title (branch) or name/role/bio (member)
delete(id)            node plus its whole subtree (database cascade)
list_tree()           build_tree_report() over list_all()
ensure_root(title)    create the branch root when the store has none

===================================================================================
RULES ENFORCED ON WRITE
===================================================================================

- type is "branch" or "member" and never changes after creation
- parent_id is never changed by update
- a branch needs a non-blank title; a member needs a non-blank name
- fields of the other node type are not stored (a branch keeps no member
  fields, a member keeps no title)
- parent_id must reference an existing node
- a parentless create is only accepted while the store has no root, and
  the root must be a branch

Members may still receive children through the API; only the browser
restricts "add child" actions to branches.

Deleting the root is allowed here and removes the whole tree. The browser
hides that action; the next ensure_root() call (startup seeding or
POST /api/tree/root) recreates an empty root.
"""

from typing import Any, Dict, List, Optional

from api.exceptions.errors import MalformedInputError, NotFoundError
from api.services.tree_builder import TreeBuildReport, build_tree_report
from api.utils.debug import print__nodes_debug
from nodestore.records import (
    NODE_TYPE_BRANCH,
    NODE_TYPES,
    UPDATABLE_FIELDS,
    NodeRecord,
)
from nodestore.stores.base import NodeStore

# API field name -> store column
_FIELD_COLUMNS = {
    "title": "title",
    "name": "name",
    "bio": "bio",
    "role": "role",
}


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class NodeService:
    """CRUD operations on org chart nodes."""

    def __init__(self, store: NodeStore):
        self.store = store

    async def list_all(self) -> List[NodeRecord]:
        records = await self.store.list_all()
        print__nodes_debug(f"list_all: {len(records)} records")
        return records

    async def get(self, node_id: str) -> NodeRecord:
        record = await self.store.get(node_id)
        if record is None:
            raise NotFoundError(node_id=node_id)
        return record

    async def create(
        self,
        node_type: str,
        parent_id: Optional[str] = None,
        title: Optional[str] = None,
        name: Optional[str] = None,
        bio: Optional[str] = None,
        role: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> NodeRecord:
        """Create a branch or member node.

        Raises:
            MalformedInputError: unknown type, missing title/name, unknown
                parent, second root, or a member root
            StoreError: the store write failed
        """
        if node_type not in NODE_TYPES:
            raise MalformedInputError(
                f"Node type must be one of: {', '.join(NODE_TYPES)}"
            )

        if node_type == NODE_TYPE_BRANCH:
            if _blank(title):
                raise MalformedInputError("A branch node requires a non-empty title")
            values: Dict[str, Any] = {"type": node_type, "title": title.strip()}
        else:
            if _blank(name):
                raise MalformedInputError("A member node requires a non-empty name")
            values = {
                "type": node_type,
                "name": name.strip(),
                "bio": bio,
                "role": role,
                "image_url": image_url,
            }

        if parent_id is None:
            if node_type != NODE_TYPE_BRANCH:
                raise MalformedInputError("The root node must be a branch")
            existing_roots = await self.store.list_root_ids()
            if existing_roots:
                raise MalformedInputError(
                    f"A root node already exists ('{existing_roots[0]}'); "
                    "new nodes need a parentId"
                )
        elif await self.store.get(parent_id) is None:
            raise MalformedInputError(f"Parent node '{parent_id}' does not exist")

        values["parent_id"] = parent_id
        record = await self.store.insert(values)
        print__nodes_debug(
            f"create: {record.type} '{record.id}' under '{record.parent_id}'"
        )
        return record

    async def update(self, node_id: str, fields: Dict[str, Any]) -> NodeRecord:
        """Update the editable fields of a node.

        Args:
            node_id: Target node id
            fields: API field names to new values; None values are ignored

        Raises:
            NotFoundError: the node does not exist
            MalformedInputError: no applicable field, a field of the other
                node type, type/parentId in the payload, or a blank title/name
        """
        if "type" in fields or "parentId" in fields or "parent_id" in fields:
            raise MalformedInputError("A node's type and parent cannot be changed")

        record = await self.get(node_id)
        allowed = UPDATABLE_FIELDS[record.type]
        supplied = {key: value for key, value in fields.items() if value is not None}

        not_allowed = sorted(set(supplied) - set(allowed))
        if not_allowed:
            raise MalformedInputError(
                f"Field(s) {', '.join(not_allowed)} cannot be updated on a "
                f"{record.type} node; allowed: {', '.join(allowed)}"
            )
        if not supplied:
            raise MalformedInputError(
                f"No updatable fields supplied; allowed: {', '.join(allowed)}"
            )

        for required in ("title", "name"):
            if required in supplied and _blank(supplied[required]):
                raise MalformedInputError(f"{required} cannot be empty")
            if required in supplied:
                supplied[required] = supplied[required].strip()

        values = {_FIELD_COLUMNS[key]: value for key, value in supplied.items()}
        updated = await self.store.update(node_id, values)
        if updated is None:
            # Deleted between the lookup and the write
            raise NotFoundError(node_id=node_id)
        print__nodes_debug(f"update: '{node_id}' fields {sorted(supplied)}")
        return updated

    async def delete(self, node_id: str) -> None:
        """Delete a node and its whole subtree.

        Raises:
            NotFoundError: the node does not exist
        """
        if not await self.store.delete(node_id):
            raise NotFoundError(node_id=node_id)
        print__nodes_debug(f"delete: '{node_id}' and its subtree")

    async def list_tree(self) -> TreeBuildReport:
        return build_tree_report(await self.list_all())

    async def ensure_root(self, title: str) -> NodeRecord:
        """Return the root, creating a branch titled ``title`` if there is none."""
        root_ids = await self.store.list_root_ids()
        if root_ids:
            return await self.get(root_ids[0])
        print__nodes_debug(f"ensure_root: store has no root, creating '{title}'")
        return await self.create(NODE_TYPE_BRANCH, parent_id=None, title=title)
