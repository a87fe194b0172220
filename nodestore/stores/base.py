"""NodeStore interface shared by the PostgreSQL and SQLite backends."""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from nodestore.records import NodeRecord

# Columns a caller may set on insert or update; id and created_at are store-assigned
WRITABLE_COLUMNS = ("type", "parent_id", "title", "name", "bio", "role", "image_url")


def new_node_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NodeStore(ABC):
    """Persisted flat collection of nodes with parent references.

    Every method raises ``api.exceptions.errors.StoreError`` when the
    underlying database fails. Missing rows are reported through return
    values (None / False), never through exceptions, so the service layer
    decides how to surface them.
    """

    backend_name = "abstract"

    @abstractmethod
    async def initialize(self) -> None:
        """Open connections and create the nodes table if needed."""

    @abstractmethod
    async def close(self) -> None:
        """Release connections. Safe to call more than once."""

    @abstractmethod
    async def list_all(self) -> List[NodeRecord]:
        """All nodes ordered by ascending creation time."""

    @abstractmethod
    async def get(self, node_id: str) -> Optional[NodeRecord]:
        """The node with this id, or None."""

    @abstractmethod
    async def list_root_ids(self) -> List[str]:
        """Ids of all nodes without a parent, oldest first."""

    @abstractmethod
    async def insert(self, values: Dict[str, Any]) -> NodeRecord:
        """Insert a node built from WRITABLE_COLUMNS values.

        The store assigns ``id`` and ``created_at``. A parent_id that does not
        reference an existing row fails with StoreError (foreign key).
        """

    @abstractmethod
    async def update(self, node_id: str, values: Dict[str, Any]) -> Optional[NodeRecord]:
        """Update the given columns; returns None if the node does not exist."""

    @abstractmethod
    async def delete(self, node_id: str) -> bool:
        """Delete a node and, by cascade, its subtree. False if it did not exist."""

    @abstractmethod
    async def count(self) -> int:
        """Number of stored nodes."""

    @abstractmethod
    async def health_check(self) -> bool:
        """True when the database answers a trivial query. Never raises."""

    @staticmethod
    def _check_columns(values: Dict[str, Any]) -> None:
        unknown = set(values) - set(WRITABLE_COLUMNS)
        if unknown:
            raise ValueError(f"Unknown node columns: {', '.join(sorted(unknown))}")
