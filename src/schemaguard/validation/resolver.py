"""
Field authorization resolver.

Turns an ability's rules for an (action, subject) pair into the set of fields
the principal may reference. The key distinction is between rules that grant
access without naming fields (every field is allowed) and rules that name
fields, possibly none (only those fields, plus structural ones, are allowed).
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from schemaguard.ability import Ability, Subject, detect_subject_type
from schemaguard.core.types import PermittedFields

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldGrant:
    """
    Fields granted to a principal for one action on one subject.

    Params:
        fields: Union of the field lists of the matching rules
        has_field_bearing_rule: Whether any matching rule carries a field list,
            including an empty one
    """

    fields: tuple[str, ...]
    has_field_bearing_rule: bool

    @property
    def unrestricted(self) -> bool:
        """No matching rule restricts fields, so every field is allowed."""
        return not self.fields and not self.has_field_bearing_rule

    @property
    def permitted(self) -> PermittedFields:
        """The granted fields, or None when unrestricted."""
        if self.unrestricted:
            return None
        return frozenset(self.fields)

    def with_static_fields(self, static_fields: Iterable[str]) -> PermittedFields:
        """
        Augment the grant with structural fields.

        Params:
            static_fields: Fields always allowed once a restriction applies

        Returns:
            None when unrestricted, otherwise the granted and static fields
        """
        if self.unrestricted:
            return None
        return frozenset((*self.fields, *static_fields))


class FieldAuthorizationResolver:
    """
    Resolves permitted fields from an ability.

    Params:
        ability: The principal's ability
    """

    def __init__(self, ability: Ability):
        self.ability = ability

    def resolve(self, action: str, subject: Subject | str) -> FieldGrant:
        """
        Compute the fields an action is permitted on for a subject.

        A rule without a field list adds nothing to the union but does not
        restrict either; a rule with a field list, even an empty one, turns
        the result into a restriction.

        Params:
            action: Action name
            subject: Subject instance or bare subject type

        Returns:
            FieldGrant for the pair
        """
        subject_type = detect_subject_type(subject)
        fields = self.ability.permitted_fields_of(action, subject)
        has_field_bearing_rule = any(rule.has_fields for rule in self.ability.rules_for(action, subject_type))

        grant = FieldGrant(fields=tuple(fields), has_field_bearing_rule=has_field_bearing_rule)
        logger.debug(
            "Resolved fields for %s on %s: unrestricted=%s fields=%s",
            action,
            subject_type,
            grant.unrestricted,
            list(grant.fields),
        )
        return grant
