"""
Permission rules and subjects.

A Rule states that an action may (or, when inverted, may not) be performed on
a subject type, optionally limited to a list of fields and to instances
matching a set of conditions. A Subject tags a data instance with the model
uid it belongs to, so rules can be matched against the instance.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from attrs import field, frozen

from schemaguard.exceptions import RuleDefinitionError

MANAGE_ACTION = "manage"
ALL_SUBJECTS = "all"

CONDITION_OPERATORS = frozenset({"$eq", "$ne", "$in", "$nin"})

_MISSING = object()


def _as_names(value: str | Iterable[str]) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def _as_fields(value: str | Iterable[str] | None) -> tuple[str, ...] | None:
    # None and an empty list are different: None means no field restriction
    if value is None:
        return None
    return _as_names(value)


def _is_operator_mapping(expected: Any) -> bool:
    return isinstance(expected, Mapping) and bool(expected) and all(
        isinstance(key, str) and key.startswith("$") for key in expected
    )


def _lookup(data: Mapping[str, Any], path: str) -> Any:
    current: Any = data
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _matches_condition(value: Any, expected: Any) -> bool:
    if not _is_operator_mapping(expected):
        return value == expected

    for operator, operand in expected.items():
        if operator == "$eq" and value != operand:
            return False
        if operator == "$ne" and value == operand:
            return False
        if operator == "$in" and value not in operand:
            return False
        if operator == "$nin" and value in operand:
            return False
    return True


@frozen
class Subject:
    """A data instance tagged with its model uid."""

    subject_type: str
    data: Mapping[str, Any] = field(factory=dict, hash=False)


def as_subject(subject_type: str, data: Mapping[str, Any] | None) -> Subject:
    """
    Tag a data instance with its subject type.

    Params:
        subject_type: Model uid the instance belongs to
        data: The instance; non-mapping values are treated as an empty instance

    Returns:
        Subject usable for condition matching
    """
    return Subject(subject_type, data if isinstance(data, Mapping) else {})


def detect_subject_type(subject: Subject | str) -> str:
    """Return the subject type of a Subject or of a bare type name."""
    if isinstance(subject, Subject):
        return subject.subject_type
    return subject


@frozen
class Rule:
    """
    A single authorization statement.

    Params:
        action: Action name or names the rule applies to ("manage" matches every action)
        subject: Subject type or types the rule applies to ("all" matches every type)
        fields: Fields the rule is limited to; None means no field restriction
        conditions: Mapping of dotted data path to expected value or operator mapping
        inverted: True for a rule that forbids rather than grants
    """

    action: tuple[str, ...] = field(converter=_as_names)
    subject: tuple[str, ...] = field(converter=_as_names)
    fields: tuple[str, ...] | None = field(default=None, converter=_as_fields)
    conditions: Mapping[str, Any] | None = field(default=None, hash=False)
    inverted: bool = False

    @action.validator
    def _check_action(self, attribute, value):
        if not value or not all(value):
            raise RuleDefinitionError("a rule needs at least one non-empty action")

    @subject.validator
    def _check_subject(self, attribute, value):
        if not value or not all(value):
            raise RuleDefinitionError("a rule needs at least one non-empty subject type")

    @conditions.validator
    def _check_conditions(self, attribute, value):
        if value is None:
            return
        for path, expected in value.items():
            if _is_operator_mapping(expected):
                unknown = set(expected) - CONDITION_OPERATORS
                if unknown:
                    raise RuleDefinitionError(
                        f"unsupported condition operator {sorted(unknown)[0]!r} on '{path}'"
                    )

    @property
    def has_fields(self) -> bool:
        return self.fields is not None

    def matches(self, action: str, subject_type: str) -> bool:
        """Check whether the rule applies to an action on a subject type."""
        action_matches = action in self.action or MANAGE_ACTION in self.action
        subject_matches = subject_type in self.subject or ALL_SUBJECTS in self.subject
        return action_matches and subject_matches

    def matches_conditions(self, subject: Subject | str) -> bool:
        """
        Check the rule's conditions against a subject.

        A bare subject type carries no instance, so only a granting rule
        can be assumed to apply to it.
        """
        if self.conditions is None:
            return True
        if not isinstance(subject, Subject):
            return not self.inverted

        for path, expected in self.conditions.items():
            value = _lookup(subject.data, path)
            if value is _MISSING:
                value = None
            if not _matches_condition(value, expected):
                return False
        return True

    def matches_field(self, field_name: str | None) -> bool:
        if self.fields is None:
            return True
        if field_name is None:
            return not self.inverted
        return field_name in self.fields
