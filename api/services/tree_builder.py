"""
MODULE_DESCRIPTION: Tree Builder - Flat Node Records to a Nested Org Chart

===================================================================================
PURPOSE AND OVERVIEW
===================================================================================

The node store keeps the org chart as a flat list of rows, each pointing at
its parent through ``parent_id``. The browser renders a nested tree. This
module turns the first into the second without touching the store.

===================================================================================
ALGORITHM
===================================================================================

Two linear passes over the records, in the order received (ascending
``created_at`` from the store):

1. Allocate one TreeNode per record and index it by id. Every TreeNode owns
   a fresh, empty ``children`` list; input records are never mutated.
2. For each record, in input order:
   - no parent_id     -> it is the root
   - known parent_id  -> append its TreeNode to the parent's children
   - unknown parent   -> leave it unattached

Because step 2 walks the input order, each ``children`` list keeps the
creation order of its members. Complexity is O(n) time and memory.

===================================================================================
EDGE CASES
===================================================================================

- Empty input, or no record without a parent: no root (None). The caller
  decides whether to seed one.
- More than one parentless record: MalformedDataError listing the ids. The
  store invariant allows exactly one root, so silently picking one would hide
  the corruption.
- Duplicate ids: MalformedDataError.
- Records whose parent is missing, and cycles that never reach the root, are
  not part of the returned tree. build_tree_report() returns them as
  ``detached`` so they can be reported instead of vanishing.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional

from api.exceptions.errors import MalformedDataError
from api.utils.debug import print__tree_debug
from nodestore.records import NodeRecord


@dataclass
class TreeNode:
    """A node record plus the materialized list of its direct children."""

    record: NodeRecord
    children: List["TreeNode"] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.record.id

    def walk(self) -> Iterator["TreeNode"]:
        """Pre-order traversal (self first, children in order), iterative."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def _fields(self) -> Dict[str, Any]:
        record = self.record
        member_details = None
        if record.is_member:
            member_details = {
                "name": record.name,
                "bio": record.bio,
                "role": record.role,
                "imageUrl": record.image_url,
            }
        return {
            "id": record.id,
            "type": record.type,
            "title": record.title,
            "parentId": record.parent_id,
            "createdAt": record.created_at.isoformat() if record.created_at else None,
            "memberDetails": member_details,
            "children": [],
        }

    def to_dict(self) -> Dict[str, Any]:
        """Nested wire representation, built without recursion.

        Member fields are grouped under ``memberDetails`` the way the browser
        client consumes them; branches carry ``memberDetails: None``.
        """
        result = self._fields()
        stack = [(self, result)]
        while stack:
            node, entry = stack.pop()
            for child in node.children:
                child_entry = child._fields()
                entry["children"].append(child_entry)
                stack.append((child, child_entry))
        return result


@dataclass
class TreeBuildReport:
    """Result of build_tree_report(): the tree plus what could not be attached."""

    root: Optional[TreeNode]
    detached: List[NodeRecord] = field(default_factory=list)

    @property
    def initialized(self) -> bool:
        return self.root is not None


def _assemble(records: List[NodeRecord]) -> Optional[TreeNode]:
    lookup: Dict[str, TreeNode] = {}
    for record in records:
        if record.id in lookup:
            raise MalformedDataError(f"Duplicate node id '{record.id}' in stored data")
        lookup[record.id] = TreeNode(record=record)

    root: Optional[TreeNode] = None
    root_ids: List[str] = []
    for record in records:
        current = lookup[record.id]
        if record.is_root:
            root = current
            root_ids.append(record.id)
            continue
        parent = lookup.get(record.parent_id)
        if parent is not None:
            parent.children.append(current)
        else:
            print__tree_debug(
                f"Node '{record.id}' references missing parent '{record.parent_id}'"
            )

    if len(root_ids) > 1:
        raise MalformedDataError(
            f"Expected exactly one root node, found {len(root_ids)}: {', '.join(root_ids)}"
        )
    return root


def build_tree(records: Iterable[NodeRecord]) -> Optional[TreeNode]:
    """Assemble the nested tree from flat records.

    Args:
        records: Node records, normally in ascending creation order

    Returns:
        TreeNode | None: the root with all reachable descendants attached, or
        None when there is no parentless record

    Raises:
        MalformedDataError: more than one root, or duplicate ids
    """
    return _assemble(list(records))


def build_tree_report(records: Iterable[NodeRecord]) -> TreeBuildReport:
    """build_tree() plus the records that are not reachable from the root."""
    records = list(records)
    root = _assemble(records)

    reachable = {node.id for node in root.walk()} if root is not None else set()
    detached = [record for record in records if record.id not in reachable]

    print__tree_debug(
        f"Tree built from {len(records)} records: "
        f"{'root ' + root.id if root else 'no root'}, {len(detached)} detached"
    )
    return TreeBuildReport(root=root, detached=detached)
