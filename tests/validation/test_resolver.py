"""
Tests for the field authorization resolver.

Focus Areas:
1. Unrestricted access when no matching rule names fields
2. Explicitly empty field lists restricting to static fields
3. Mixed field-bearing and field-less rules
4. Conditions evaluated against the subject instance
"""

import pytest

from schemaguard.ability import Ability, Rule, as_subject
from schemaguard.validation import FieldAuthorizationResolver, FieldGrant

from conftest import ARTICLE, AUTHOR


def resolve(rules, action="read", subject=ARTICLE) -> FieldGrant:
    return FieldAuthorizationResolver(Ability(rules)).resolve(action, subject)


class TestFieldGrant:
    """Test FieldGrant helpers."""

    def test_unrestricted(self):
        """No fields and no field-bearing rule means every field is allowed."""
        grant = FieldGrant(fields=(), has_field_bearing_rule=False)
        assert grant.unrestricted is True
        assert grant.permitted is None
        assert grant.with_static_fields(["id"]) is None

    def test_explicitly_empty(self):
        """No fields from a field-bearing rule restricts to the static fields."""
        grant = FieldGrant(fields=(), has_field_bearing_rule=True)
        assert grant.unrestricted is False
        assert grant.permitted == frozenset()
        assert grant.with_static_fields(["id", "createdAt"]) == {"id", "createdAt"}

    def test_with_static_fields(self):
        """Static fields are added to the granted ones."""
        grant = FieldGrant(fields=("title",), has_field_bearing_rule=True)
        assert grant.with_static_fields(["id"]) == {"title", "id"}


class TestFieldAuthorizationResolver:
    """Test resolving grants from an ability."""

    def test_rule_without_fields(self):
        """A rule that names no fields leaves the principal unrestricted."""
        assert resolve([Rule("read", ARTICLE)]).unrestricted is True

    def test_no_matching_rules(self):
        """Without any matching rule there is no field restriction either."""
        grant = resolve([Rule("read", AUTHOR, fields=["name"])])
        assert grant.unrestricted is True

    def test_rule_with_fields(self):
        """A field list becomes the permitted set."""
        grant = resolve([Rule("read", ARTICLE, fields=["title", "body"])])
        assert grant.unrestricted is False
        assert grant.permitted == {"title", "body"}

    def test_rule_with_empty_fields(self):
        """An explicitly empty field list restricts without granting anything."""
        grant = resolve([Rule("read", ARTICLE, fields=[])])
        assert grant.unrestricted is False
        assert grant.has_field_bearing_rule is True
        assert grant.fields == ()

    @pytest.mark.parametrize(
        "rules",
        [
            [Rule("read", ARTICLE, fields=["title"]), Rule("read", ARTICLE)],
            [Rule("read", ARTICLE), Rule("read", ARTICLE, fields=["title"])],
        ],
    )
    def test_mixed_rules(self, rules):
        """A field-less rule does not widen a field-bearing one, whatever the order."""
        grant = resolve(rules)
        assert grant.unrestricted is False
        assert grant.permitted == {"title"}

    def test_union_of_rules(self):
        """Field lists of several rules are merged."""
        grant = resolve([
            Rule("read", ARTICLE, fields=["title"]),
            Rule("read", ARTICLE, fields=["author.name"]),
        ])
        assert grant.fields == ("title", "author.name")

    def test_inverted_rule(self):
        """Inverted rules remove fields from the union."""
        grant = resolve([
            Rule("read", ARTICLE, fields=["title", "body"]),
            Rule("read", ARTICLE, fields=["body"], inverted=True),
        ])
        assert grant.permitted == {"title"}

    def test_conditions(self):
        """Conditional rules only contribute for matching instances."""
        rules = [
            Rule("read", ARTICLE, fields=["title"]),
            Rule("read", ARTICLE, fields=["body"], conditions={"locale": "en"}),
        ]
        assert resolve(rules, subject=as_subject(ARTICLE, {"locale": "en"})).permitted == {"title", "body"}
        assert resolve(rules, subject=as_subject(ARTICLE, {"locale": "fr"})).permitted == {"title"}

    def test_manage_all(self):
        """Wildcard rules apply to every action and subject."""
        grant = resolve([Rule("manage", "all", fields=["title"])], action="delete")
        assert grant.permitted == {"title"}
