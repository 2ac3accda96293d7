"""
Generic traversal machinery.

Every input shape (filters, sort, fields, populate, entity data) has its own
Traversal subclass deciding how values are split into keys and where to
descend. The base class owns what they share: building a VisitNode per key,
running the ordered visitors on it before descending (pre-order), turning a
Fail into a ValidationError, applying rewrites, and switching schema when a
relation or component is crossed.
"""

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from schemaguard.core.path_utils import ROOT_PATH, NodePath
from schemaguard.core.tree_node import VisitNode
from schemaguard.core.visitor import Fail, Rewrite, Visitor
from schemaguard.exceptions import ValidationError
from schemaguard.structure.registry import SchemaRegistry
from schemaguard.structure.schema import Attribute, AttributeKind, Schema

logger = logging.getLogger(__name__)

# Selects every attribute; never inspected
WILDCARD = "*"


class Traversal(ABC):
    """
    Base class for schema-aware walkers.

    Params:
        registry: Schema registry used to resolve related and component models
    """

    def __init__(self, registry: SchemaRegistry):
        self.registry = registry

    async def traverse(self, visitors: Sequence[Visitor], schema: Schema, value: Any) -> Any:
        """
        Walk a value from the root of a schema.

        Params:
            visitors: Visitors run in order on every node
            schema: Schema the root keys are resolved against
            value: The input to walk; never mutated

        Returns:
            The input with rewrites applied

        Raises:
            ValidationError: On the first node a visitor rejects
        """
        return await self.walk(visitors, schema, value, ROOT_PATH)

    @abstractmethod
    async def walk(self, visitors: Sequence[Visitor], schema: Schema, value: Any, path: NodePath) -> Any:
        """Walk a value found at `path`, resolving its keys against `schema`."""
        ...

    async def descend(self, visitors: Sequence[Visitor], node: VisitNode) -> Any:
        """Walk the children of a visited node; the default has none."""
        return node.value

    def make_node(self, key: str, value: Any, schema: Schema, path: NodePath) -> VisitNode:
        attribute = schema.get_attribute(key)
        return VisitNode(
            key=key,
            value=value,
            attribute=attribute,
            schema=schema,
            path=path.child(key, attribute is not None),
        )

    async def visit(self, visitors: Sequence[Visitor], node: VisitNode) -> VisitNode | None:
        """
        Run the visitors on a node in order.

        Params:
            visitors: Ordered visitors
            node: The node to inspect

        Returns:
            The node, carrying its rewritten value if any visitor rewrote it,
            or None when a visitor omitted the key

        Raises:
            ValidationError: When a visitor fails the node
        """
        for visitor in visitors:
            result = visitor.visit(node)
            if inspect.isawaitable(result):
                result = await result

            if isinstance(result, Fail):
                logger.debug(
                    "%r rejected key %r at %s: %s",
                    visitor,
                    node.key,
                    node.path.raw,
                    result.reason,
                )
                raise ValidationError(node.key, node.path.attribute, result.reason)

            if isinstance(result, Rewrite):
                if result.omitted:
                    return None
                node = node.with_value(result.value)

        return node

    async def walk_mapping(
        self, visitors: Sequence[Visitor], schema: Schema, mapping: dict, path: NodePath
    ) -> dict:
        """
        Visit every key of a mapping, then descend into it.

        Params:
            visitors: Ordered visitors
            schema: Schema the keys are resolved against
            mapping: The mapping to walk; a copy is returned
            path: Path of the mapping itself

        Returns:
            Copy of the mapping with rewrites applied and omitted keys removed
        """
        out = dict(mapping)

        for key in list(out):
            node = await self.visit(visitors, self.make_node(key, out[key], schema, path))
            if node is None:
                del out[key]
                continue
            out[key] = await self.descend(visitors, node)

        return out

    def target_schema(self, attribute: Attribute) -> Schema | None:
        """
        Resolve the schema a relation or component attribute leads into.

        Params:
            attribute: Attribute being crossed

        Returns:
            The target schema, or None when the attribute has no fixed target
            (scalars, dynamic zones, polymorphic relations)
        """
        kind = attribute.kind
        if kind is AttributeKind.RELATION:
            if attribute.is_morph:
                return None
            return self.registry.get_model(attribute.target)
        if kind is AttributeKind.COMPONENT:
            return self.registry.get_model(attribute.component)
        if kind is AttributeKind.DYNAMIC_ZONE or kind is AttributeKind.SCALAR:
            return None
        raise TypeError(f"Unhandled attribute kind: {kind!r}")
