"""
Traversal of query populate directives.

Populate names the relations, components and dynamic zones to load with the
main entity. Each populated key may carry its own nested query:

    {"author": {"fields": ["name"], "filters": {...}, "sort": "name",
                "populate": {"avatar": True}}}

Nested `filters`, `sort` and `fields` are handed to their own traversal with
the same visitors, resolved against the populated model. Polymorphic relations
and dynamic zones are only walked through an `on` fragment keyed by model uid.
The wildcard is never inspected, at any depth.
"""

from collections.abc import Sequence
from typing import Any

from schemaguard.core.path_utils import NodePath, PathComponents
from schemaguard.core.tree_node import VisitNode
from schemaguard.core.visitor import Visitor
from schemaguard.structure.registry import SchemaRegistry
from schemaguard.structure.schema import AttributeKind, Schema
from schemaguard.traversal.base import WILDCARD, Traversal
from schemaguard.traversal.fields import FieldsTraversal
from schemaguard.traversal.filters import FiltersTraversal
from schemaguard.traversal.sort import SortTraversal


class PopulateTraversal(Traversal):
    """
    Walks `populate` query parameters.

    Params:
        registry: Schema registry
        filters: Traversal used for nested `filters`
        sort: Traversal used for nested `sort`
        fields: Traversal used for nested `fields`
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        filters: FiltersTraversal | None = None,
        sort: SortTraversal | None = None,
        fields: FieldsTraversal | None = None,
    ):
        super().__init__(registry)
        self.filters = filters or FiltersTraversal(registry)
        self.sort = sort or SortTraversal(registry)
        self.fields = fields or FieldsTraversal(registry)

    async def walk(self, visitors: Sequence[Visitor], schema: Schema, populate: Any, path: NodePath) -> Any:
        if populate == WILDCARD:
            return populate

        if isinstance(populate, list):
            populated = [
                await self.walk(visitors, schema, item, path.index(position))
                for position, item in enumerate(populate)
            ]
            return [item for item in populated if item is not None]

        if isinstance(populate, str):
            if "," in populate:
                populated = [await self.walk(visitors, schema, item.strip(), path) for item in populate.split(",")]
                return ",".join(item for item in populated if item)
            return await self._walk_string(visitors, schema, populate.strip(), path)

        if isinstance(populate, dict):
            return await self.walk_mapping(visitors, schema, populate, path)

        return populate

    async def _walk_string(self, visitors: Sequence[Visitor], schema: Schema, populate: str, path: NodePath) -> str | None:
        components = PathComponents.split_path(populate)
        key = components.first_part
        if not key:
            return populate

        node = await self.visit(visitors, self.make_node(key, components.remainder or None, schema, path))
        if node is None:
            return None

        nested = await self.descend(visitors, node)
        return f"{key}.{nested}" if nested else key

    async def descend(self, visitors: Sequence[Visitor], node: VisitNode) -> Any:
        if node.value is None:
            return None

        attribute = node.attribute
        if attribute is None:
            return await self._descend_keyword(visitors, node)

        kind = attribute.kind
        if kind is AttributeKind.RELATION:
            if attribute.is_morph:
                return await self._descend_fragment(visitors, node)
            return await self.walk(visitors, self.registry.get_model(attribute.target), node.value, node.path)
        if kind is AttributeKind.COMPONENT:
            return await self.walk(visitors, self.registry.get_model(attribute.component), node.value, node.path)
        if kind is AttributeKind.DYNAMIC_ZONE:
            return await self._descend_fragment(visitors, node)
        if kind is AttributeKind.SCALAR:
            return node.value
        raise TypeError(f"Unhandled attribute kind: {kind!r}")

    async def _descend_fragment(self, visitors: Sequence[Visitor], node: VisitNode) -> Any:
        value = node.value
        if not isinstance(value, dict) or not isinstance(value.get("on"), dict):
            return value
        walked = await self.walk(visitors, node.schema, {"on": value["on"]}, node.path)
        return {**value, **walked}

    async def _descend_keyword(self, visitors: Sequence[Visitor], node: VisitNode) -> Any:
        key, value, schema, path = node.key, node.value, node.schema, node.path

        if key == "populate":
            return await self.walk(visitors, schema, value, path)
        if key == "filters":
            return await self.filters.walk(visitors, schema, value, path)
        if key == "sort":
            return await self.sort.walk(visitors, schema, value, path)
        if key == "fields":
            return await self.fields.walk(visitors, schema, value, path)
        if key == "on":
            if not isinstance(value, dict):
                return value
            return {
                uid: await self.walk(visitors, self.registry.get_model(uid), fragment, path.fragment(uid))
                for uid, fragment in value.items()
            }
        return value
