"""
Core type definitions for schemaguard.

This module contains fundamental type aliases used throughout the package
for type safety and consistency.
"""

from typing import Any

# None means unrestricted: every field is allowed
PermittedFields = frozenset[str] | None

QueryValue = str | int | float | bool | list | dict | None

EntityData = dict[str, Any]

Query = dict[str, Any]
