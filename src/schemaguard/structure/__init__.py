"""
Content schema structure for schemaguard.

This package provides the schema and attribute models and the registry the
traversals consult when crossing into related models.
"""

from schemaguard.structure.registry import SchemaRegistry
from schemaguard.structure.schema import (
    Attribute,
    AttributeConfig,
    AttributeKind,
    Schema,
)

__all__ = [
    "Attribute",
    "AttributeConfig",
    "AttributeKind",
    "Schema",
    "SchemaRegistry",
]
