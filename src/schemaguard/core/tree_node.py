"""
Traversal node for schemaguard.

A VisitNode is created fresh for every key a traversal steps into and is
handed to each visitor of the pipeline. It is never stored.
"""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from schemaguard.core.path_utils import NodePath

if TYPE_CHECKING:
    from schemaguard.structure.schema import Attribute, Schema


@dataclass(frozen=True)
class VisitNode:
    """
    One key of the input as seen by the visitors.

    Params:
        key: The key as it appears in the input
        value: The value under the key
        attribute: Attribute descriptor when the key names a schema attribute
        schema: The schema the key is resolved against
        path: Raw and attribute path leading to the key
    """

    key: str
    value: Any
    attribute: "Attribute | None"
    schema: "Schema"
    path: NodePath

    @property
    def is_attribute(self) -> bool:
        """Whether the key names an attribute of the current schema."""
        return self.attribute is not None

    def with_value(self, value: Any) -> "VisitNode":
        """Return a copy of this node carrying a rewritten value."""
        return replace(self, value=value)
