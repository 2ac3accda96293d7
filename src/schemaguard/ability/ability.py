"""
Ability evaluator.

An Ability is a principal's ordered set of rules for a session. Rules defined
later take precedence over rules defined earlier.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from schemaguard.ability.rules import Rule, Subject, detect_subject_type


def default_fields_from(rule: Rule) -> tuple[str, ...]:
    """Fields a rule contributes; a rule without a field list contributes none."""
    return rule.fields or ()


class Ability:
    """A principal's resolved permission rules.

    Responsibilities:
      - Match rules to an (action, subject type) pair.
      - Compute the fields an action is permitted on for a subject instance.
      - Answer yes/no questions for an action on a subject.
    """

    def __init__(self, rules: Iterable[Rule] = ()):
        self._rules = list(rules)

    @classmethod
    def from_definitions(cls, definitions: Iterable[Mapping[str, Any]]) -> "Ability":
        """
        Build an ability from raw rule definitions.

        Params:
            definitions: Mappings with the keyword arguments of Rule

        Returns:
            Ability holding the rules in definition order

        Raises:
            RuleDefinitionError: If a definition is invalid
        """
        return cls(Rule(**definition) for definition in definitions)

    @property
    def rules(self) -> list[Rule]:
        return list(self._rules)

    def rules_for(self, action: str, subject_type: str) -> list[Rule]:
        """
        Get the rules relevant to an action on a subject type.

        Conditions are not evaluated here.

        Params:
            action: Action name
            subject_type: Model uid

        Returns:
            Matching rules, highest priority first
        """
        return [rule for rule in reversed(self._rules) if rule.matches(action, subject_type)]

    def permitted_fields_of(
        self,
        action: str,
        subject: Subject | str,
        fields_from: Callable[[Rule], Iterable[str]] = default_fields_from,
    ) -> list[str]:
        """
        Compute the fields an action is permitted on for a subject.

        Rules are applied lowest priority first: granting rules add their
        fields, inverted rules remove theirs. Rules whose conditions do not
        match the subject instance are skipped.

        Params:
            action: Action name
            subject: Subject instance or bare subject type
            fields_from: Extracts the field list of a rule

        Returns:
            Permitted field names in the order they were granted
        """
        rules = self.rules_for(action, detect_subject_type(subject))
        permitted: dict[str, None] = {}

        for rule in reversed(rules):
            if not rule.matches_conditions(subject):
                continue
            for field_name in fields_from(rule):
                if rule.inverted:
                    permitted.pop(field_name, None)
                else:
                    permitted[field_name] = None

        return list(permitted)

    def can(self, action: str, subject: Subject | str, field_name: str | None = None) -> bool:
        """
        Check whether an action is allowed on a subject.

        Params:
            action: Action name
            subject: Subject instance or bare subject type
            field_name: Optional field the action targets

        Returns:
            True if the highest-priority applicable rule grants the action
        """
        for rule in self.rules_for(action, detect_subject_type(subject)):
            if rule.matches_conditions(subject) and rule.matches_field(field_name):
                return not rule.inverted
        return False
