"""
Ability evaluation for schemaguard.

This package provides permission rules, subjects and the Ability evaluator
the field authorization resolver consults.
"""

from schemaguard.ability.ability import Ability, default_fields_from
from schemaguard.ability.rules import (
    ALL_SUBJECTS,
    MANAGE_ACTION,
    Rule,
    Subject,
    as_subject,
    detect_subject_type,
)

__all__ = [
    "Ability",
    "Rule",
    "Subject",
    "as_subject",
    "detect_subject_type",
    "default_fields_from",
    "MANAGE_ACTION",
    "ALL_SUBJECTS",
]
