"""
Field-level validation for schemaguard.

This package provides the visitor library, the field authorization resolver,
the pipeline composer and the PermissionsValidator entry points.
"""

from schemaguard.validation.manager import PermissionsValidator
from schemaguard.validation.pipelines import (
    InputPipeline,
    PipelineComposer,
    QueryPipeline,
)
from schemaguard.validation.resolver import FieldAuthorizationResolver, FieldGrant
from schemaguard.validation.visitors import (
    RejectAdminUserFields,
    RejectDisallowedFields,
    RejectEmptyValues,
    RejectHiddenFields,
    RejectSensitiveFields,
    StripCreatorRoles,
    is_empty,
)

__all__ = [
    "PermissionsValidator",
    "PipelineComposer",
    "QueryPipeline",
    "InputPipeline",
    "FieldAuthorizationResolver",
    "FieldGrant",
    "RejectDisallowedFields",
    "RejectHiddenFields",
    "RejectSensitiveFields",
    "RejectAdminUserFields",
    "RejectEmptyValues",
    "StripCreatorRoles",
    "is_empty",
]
