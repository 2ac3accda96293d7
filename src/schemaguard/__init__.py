"""
schemaguard - Field-level authorization for structured API requests

schemaguard checks query filters, sort clauses, field selections, populate
directives and entity payloads against the fields a principal's ability
permits on a dynamically described content schema.
"""

from importlib.metadata import version

from schemaguard.ability import Ability, Rule, as_subject
from schemaguard.config import ValidationSettings
from schemaguard.exceptions import SchemaGuardError, ValidationError
from schemaguard.structure import Schema, SchemaRegistry
from schemaguard.validation import PermissionsValidator

__version__ = version("schemaguard")

__all__ = [
    "__version__",
    "PermissionsValidator",
    "ValidationError",
    "SchemaGuardError",
    "Ability",
    "Rule",
    "as_subject",
    "Schema",
    "SchemaRegistry",
    "ValidationSettings",
]
