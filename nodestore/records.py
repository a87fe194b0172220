"""NodeRecord: the flat, persisted shape of an org chart node."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

NODE_TYPE_BRANCH = "branch"
NODE_TYPE_MEMBER = "member"
NODE_TYPES = (NODE_TYPE_BRANCH, NODE_TYPE_MEMBER)

# Fields each node type is allowed to change after creation
UPDATABLE_FIELDS = {
    NODE_TYPE_BRANCH: ("title",),
    NODE_TYPE_MEMBER: ("name", "role", "bio"),
}

# Column name -> record attribute
_COLUMN_MAP = {
    "id": "id",
    "type": "type",
    "parent_id": "parent_id",
    "title": "title",
    "name": "name",
    "bio": "bio",
    "role": "role",
    "image_url": "image_url",
    "created_at": "created_at",
}


@dataclass(frozen=True)
class NodeRecord:
    """One row of the nodes table.

    ``title`` is meaningful for branches only; ``name``, ``bio``, ``role``
    and ``image_url`` for members only. ``parent_id`` is None exactly for
    the root.
    """

    id: str
    type: str
    parent_id: Optional[str] = None
    title: Optional[str] = None
    name: Optional[str] = None
    bio: Optional[str] = None
    role: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = field(default=None, compare=False)

    @property
    def is_member(self) -> bool:
        return self.type == NODE_TYPE_MEMBER

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "NodeRecord":
        """Build a record from a database row keyed by column name."""
        values = {attr: row[column] for column, attr in _COLUMN_MAP.items() if column in row.keys()}
        created_at = values.get("created_at")
        if isinstance(created_at, str):
            values["created_at"] = datetime.fromisoformat(created_at)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation, using the camelCase keys the client expects."""
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "name": self.name,
            "bio": self.bio,
            "role": self.role,
            "imageUrl": self.image_url,
            "parentId": self.parent_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
