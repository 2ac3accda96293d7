"""
Traversal of entity payloads.

Relations descend into their target model (each entry of a polymorphic
relation into the model named by its type key), components into their
component model, and dynamic-zone entries into the component named by their
discriminator. Arrays are walked element by element.
"""

from collections.abc import Callable, Sequence
from typing import Any

from schemaguard.config import DEFAULT_SETTINGS, ValidationSettings
from schemaguard.core.path_utils import NodePath
from schemaguard.core.tree_node import VisitNode
from schemaguard.core.visitor import Visitor
from schemaguard.structure.registry import SchemaRegistry
from schemaguard.structure.schema import AttributeKind, Schema
from schemaguard.traversal.base import Traversal

SchemaResolver = Callable[[dict], Schema | None]


class EntityTraversal(Traversal):
    """
    Walks entity payloads.

    Params:
        registry: Schema registry
        settings: Provides the polymorphic type and component discriminator keys
    """

    def __init__(self, registry: SchemaRegistry, settings: ValidationSettings = DEFAULT_SETTINGS):
        super().__init__(registry)
        self.settings = settings

    async def walk(self, visitors: Sequence[Visitor], schema: Schema | None, data: Any, path: NodePath) -> Any:
        if not isinstance(data, dict) or schema is None:
            return data
        return await self.walk_mapping(visitors, schema, data, path)

    async def descend(self, visitors: Sequence[Visitor], node: VisitNode) -> Any:
        value, attribute = node.value, node.attribute
        if value is None or attribute is None:
            return value

        kind = attribute.kind
        if kind is AttributeKind.RELATION:
            if attribute.is_morph:
                return await self._walk_entries(visitors, value, node.path, self._morph_target)
            target = self.registry.get_model(attribute.target)
            return await self._walk_entries(visitors, value, node.path, lambda entry: target)
        if kind is AttributeKind.COMPONENT:
            target = self.registry.get_model(attribute.component)
            return await self._walk_entries(visitors, value, node.path, lambda entry: target)
        if kind is AttributeKind.DYNAMIC_ZONE:
            if not isinstance(value, list):
                return value
            return await self._walk_entries(visitors, value, node.path, self._component_target)
        if kind is AttributeKind.SCALAR:
            return value
        raise TypeError(f"Unhandled attribute kind: {kind!r}")

    async def _walk_entries(
        self, visitors: Sequence[Visitor], value: Any, path: NodePath, resolve: SchemaResolver
    ) -> Any:
        if isinstance(value, list):
            return [
                await self._walk_entry(visitors, entry, path.index(position), resolve)
                for position, entry in enumerate(value)
            ]
        return await self._walk_entry(visitors, value, path, resolve)

    async def _walk_entry(self, visitors: Sequence[Visitor], entry: Any, path: NodePath, resolve: SchemaResolver) -> Any:
        # Bare ids are left as is
        if not isinstance(entry, dict):
            return entry
        return await self.walk(visitors, resolve(entry), entry, path)

    def _morph_target(self, entry: dict) -> Schema | None:
        uid = entry.get(self.settings.morph_type_attribute)
        return self.registry.get_model(uid) if uid else None

    def _component_target(self, entry: dict) -> Schema | None:
        uid = entry.get(self.settings.component_attribute)
        return self.registry.get_model(uid) if uid else None
