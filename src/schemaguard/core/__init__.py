"""
Core schemaguard components.

This package provides the shared vocabulary of every traversal: node paths,
the per-key traversal node and common type aliases.
"""

from schemaguard.core.path_utils import (
    ROOT_PATH,
    NodePath,
    PathComponents,
    contained_paths,
)
from schemaguard.core.tree_node import VisitNode
from schemaguard.core.types import (
    EntityData,
    PermittedFields,
    Query,
    QueryValue,
)
from schemaguard.core.visitor import (
    PASS,
    Fail,
    Pass,
    Rewrite,
    VisitResult,
    Visitor,
)

__all__ = [
    "VisitNode",
    "Visitor",
    "VisitResult",
    "Pass",
    "PASS",
    "Fail",
    "Rewrite",
    "NodePath",
    "ROOT_PATH",
    "PathComponents",
    "contained_paths",
    "PermittedFields",
    "QueryValue",
    "EntityData",
    "Query",
]
