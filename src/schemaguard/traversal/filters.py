"""
Traversal of query filters.

Filters are nested mappings of attribute names, logical combinators
(`$and`, `$or`, `$not`) and operators (`$eq`, `$in`, ...). Combinators and
operators carry no attribute and are walked with the current schema;
relations and components switch to their target schema; scalar attributes
are visited but their operator mapping is not descended.
"""

from collections.abc import Sequence
from typing import Any

from schemaguard.core.path_utils import NodePath
from schemaguard.core.tree_node import VisitNode
from schemaguard.core.visitor import Visitor
from schemaguard.structure.schema import Schema
from schemaguard.traversal.base import Traversal


class FiltersTraversal(Traversal):
    """Walks `filters` query parameters."""

    async def walk(self, visitors: Sequence[Visitor], schema: Schema, filters: Any, path: NodePath) -> Any:
        if isinstance(filters, list):
            return [
                await self.walk(visitors, schema, item, path.index(position))
                for position, item in enumerate(filters)
            ]
        if not isinstance(filters, dict):
            return filters
        return await self.walk_mapping(visitors, schema, filters, path)

    async def descend(self, visitors: Sequence[Visitor], node: VisitNode) -> Any:
        if node.value is None:
            return None

        # Combinators and operators stay on the current schema
        if node.attribute is None:
            return await self.walk(visitors, node.schema, node.value, node.path)

        target = self.target_schema(node.attribute)
        if target is None:
            return node.value
        return await self.walk(visitors, target, node.value, node.path)
