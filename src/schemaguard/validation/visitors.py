"""
Visitor library.

Each visitor inspects a single VisitNode, using only the node and the
configuration it was built with, and answers PASS, Fail or Rewrite. The
traversal engine turns a Fail into a ValidationError naming the key and its
attribute path.
"""

import logging
from collections.abc import Iterable
from typing import Any

from schemaguard.config import DEFAULT_SETTINGS
from schemaguard.core.path_utils import contained_paths
from schemaguard.core.tree_node import VisitNode
from schemaguard.core.types import PermittedFields
from schemaguard.core.visitor import PASS, Fail, Rewrite, VisitResult, Visitor

logger = logging.getLogger(__name__)


def is_empty(value: Any) -> bool:
    """
    Check whether a value is empty for query purposes.

    None, empty strings and empty collections are empty. So is any value
    that is not a string or a collection, since it cannot describe a nested
    clause.
    """
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    return True


class RejectDisallowedFields(Visitor):
    """
    Reject nodes whose attribute path is outside the permitted fields.

    A node passes when any prefix of its attribute path is permitted
    ("author" permits "author.name") or when a permitted field lies beneath
    it ("author.name" permits "author"). Nodes with no attribute path, such
    as root-level operators, are left to other layers.

    Params:
        permitted: Permitted field paths, or None when every field is allowed
    """

    def __init__(self, permitted: PermittedFields):
        self.permitted = None if permitted is None else frozenset(permitted)

    def visit(self, node: VisitNode) -> VisitResult:
        if self.permitted is None:
            return PASS

        path = node.path.attribute
        if path is None or self.is_path_allowed(path):
            return PASS
        return Fail("field is not permitted")

    def is_path_allowed(self, path: str) -> bool:
        if any(prefix in self.permitted for prefix in contained_paths(path)):
            return True
        return any(field_path.startswith(f"{path}.") for field_path in self.permitted)

    def __repr__(self) -> str:
        permitted = "all" if self.permitted is None else sorted(self.permitted)
        return f"RejectDisallowedFields(permitted={permitted})"


class RejectHiddenFields(Visitor):
    """Reject attributes hidden from the admin surface."""

    def visit(self, node: VisitNode) -> VisitResult:
        if node.schema.is_hidden(node.key):
            return Fail("field is hidden")
        return PASS


class RejectSensitiveFields(Visitor):
    """Reject password-like attributes, whatever the permission rules say."""

    def __init__(self, sensitive_types: Iterable[str] = DEFAULT_SETTINGS.sensitive_types):
        self.sensitive_types = tuple(sensitive_types)

    def visit(self, node: VisitNode) -> VisitResult:
        if node.attribute is not None and node.attribute.is_sensitive(self.sensitive_types):
            return Fail("field is sensitive")
        return PASS


class RejectAdminUserFields(Visitor):
    """
    Restrict admin user attributes to identification and display fields.

    Only applies while the traversal is inside the admin user model, which
    is typically reached through creator relations of another model.

    Params:
        admin_user_model: Uid of the admin user model
        allowed_fields: Attributes of that model that may be referenced
    """

    def __init__(
        self,
        admin_user_model: str = DEFAULT_SETTINGS.admin_user_model,
        allowed_fields: Iterable[str] = DEFAULT_SETTINGS.admin_user_allowed_fields,
    ):
        self.admin_user_model = admin_user_model
        self.allowed_fields = frozenset(allowed_fields)

    def visit(self, node: VisitNode) -> VisitResult:
        if (
            node.schema.uid == self.admin_user_model
            and node.attribute is not None
            and node.key not in self.allowed_fields
        ):
            return Fail("admin user field is restricted")
        return PASS


class RejectEmptyValues(Visitor):
    """
    Reject empty nested clauses.

    Params:
        non_scalar_only: When False (filters), any empty mapping or list is
            rejected. When True (sort), only relation, component and dynamic
            zone attributes are checked, and any empty value is rejected.
    """

    def __init__(self, non_scalar_only: bool = False):
        self.non_scalar_only = non_scalar_only

    def visit(self, node: VisitNode) -> VisitResult:
        if self.non_scalar_only:
            attribute = node.attribute
            if attribute is not None and not attribute.is_scalar and is_empty(node.value):
                return Fail("empty value for a nested attribute")
            return PASS

        if isinstance(node.value, (dict, list)) and not node.value:
            return Fail("empty nested clause")
        return PASS

    def __repr__(self) -> str:
        return f"RejectEmptyValues(non_scalar_only={self.non_scalar_only})"


class StripCreatorRoles(Visitor):
    """
    Remove role information from creator and updater relations.

    This visitor never rejects: it rewrites the relation value without the
    role key before the traversal descends into it.

    Params:
        creator_attributes: Attribute names of the creator relations
        role_attribute: Key holding role information inside them
    """

    def __init__(
        self,
        creator_attributes: Iterable[str] = DEFAULT_SETTINGS.creator_attributes,
        role_attribute: str = DEFAULT_SETTINGS.creator_role_attribute,
    ):
        self.creator_attributes = frozenset(creator_attributes)
        self.role_attribute = role_attribute

    def visit(self, node: VisitNode) -> VisitResult:
        value = node.value
        if node.key not in self.creator_attributes or not isinstance(value, dict):
            return PASS
        if self.role_attribute not in value:
            return PASS

        logger.debug("Stripping %r from %s", self.role_attribute, node.path.raw)
        return Rewrite({key: item for key, item in value.items() if key != self.role_attribute})
