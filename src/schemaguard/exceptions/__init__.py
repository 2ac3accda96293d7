"""
schemaguard exception classes.

This package provides all exception types used throughout schemaguard for
consistent error handling and reporting.
"""

from schemaguard.exceptions.core import (
    DuplicateModelError,
    RuleDefinitionError,
    SchemaGuardError,
    UnknownModelError,
    ValidationError,
)

__all__ = [
    "SchemaGuardError",
    "ValidationError",
    "UnknownModelError",
    "DuplicateModelError",
    "RuleDefinitionError",
]
