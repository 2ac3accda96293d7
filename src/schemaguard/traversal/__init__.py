"""
Schema traversal engine for schemaguard.

This package provides one walker per input shape. Each walker runs an ordered
list of visitors on every key, before descending into it, and switches schema
when it crosses into a related model, a component or a polymorphic entry.
"""

from schemaguard.traversal.base import WILDCARD, Traversal
from schemaguard.traversal.entity import EntityTraversal
from schemaguard.traversal.fields import FieldsTraversal
from schemaguard.traversal.filters import FiltersTraversal
from schemaguard.traversal.populate import PopulateTraversal
from schemaguard.traversal.sort import SortTraversal

__all__ = [
    "Traversal",
    "WILDCARD",
    "FiltersTraversal",
    "SortTraversal",
    "FieldsTraversal",
    "PopulateTraversal",
    "EntityTraversal",
]
