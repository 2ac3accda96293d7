"""
Traversal of query field selections.

A selection is a field name, a comma separated list of names, or a list of
names, always relative to the current model. A dotted name such as
"author.name" addresses a field of a related model: the relation key is
visited first, then the nested name against the relation's target model.
"""

from collections.abc import Sequence
from typing import Any

from schemaguard.core.path_utils import NodePath, PathComponents
from schemaguard.core.tree_node import VisitNode
from schemaguard.core.visitor import Visitor
from schemaguard.structure.schema import Schema
from schemaguard.traversal.base import WILDCARD, Traversal


class FieldsTraversal(Traversal):
    """Walks `fields` query parameters."""

    async def walk(self, visitors: Sequence[Visitor], schema: Schema, fields: Any, path: NodePath) -> Any:
        if isinstance(fields, list):
            selected = [
                await self.walk(visitors, schema, item, path.index(position))
                for position, item in enumerate(fields)
            ]
            return [item for item in selected if item is not None]

        if not isinstance(fields, str):
            return fields

        if "," in fields:
            selected = [await self.walk(visitors, schema, item.strip(), path) for item in fields.split(",")]
            return ",".join(item for item in selected if item)

        field_name = fields.strip()
        if not field_name or field_name == WILDCARD:
            return fields

        components = PathComponents.split_path(field_name)
        key = components.first_part
        node = await self.visit(visitors, self.make_node(key, components.remainder or None, schema, path))
        if node is None:
            return None

        nested = await self.descend(visitors, node)
        return f"{key}.{nested}" if nested else key

    async def descend(self, visitors: Sequence[Visitor], node: VisitNode) -> Any:
        if node.value is None or node.attribute is None:
            return node.value

        target = self.target_schema(node.attribute)
        if target is None:
            return node.value
        return await self.walk(visitors, target, node.value, node.path)
