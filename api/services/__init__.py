"""
Services package for the API server.

Tree assembly and the node CRUD contract sit here, between the routes and
the node store.
"""

from .node_service import NodeService
from .tree_builder import TreeBuildReport, TreeNode, build_tree, build_tree_report

__all__ = [
    "NodeService",
    "TreeBuildReport",
    "TreeNode",
    "build_tree",
    "build_tree_report",
]
