"""
Shared test fixtures and utilities for the schemaguard test suite.
"""

import pytest

from schemaguard.ability import Ability, Rule
from schemaguard.core import PASS, Visitor
from schemaguard.structure import SchemaRegistry
from schemaguard.validation import PermissionsValidator

ARTICLE = "api::article.article"
AUTHOR = "api::author.author"
CATEGORY = "api::category.category"
ADMIN_USER = "admin::user"
ADMIN_ROLE = "admin::role"

SCHEMA_DEFINITIONS = [
    {
        "uid": ARTICLE,
        "attributes": {
            "title": {"type": "string"},
            "body": {"type": "richtext"},
            "accessCode": {"type": "password"},
            "internalNotes": {"type": "text", "config": {"hidden": True}},
            "views": {"type": "integer", "visible": False},
            "score": {"type": "integer", "visible": False, "writable": False},
            "createdAt": {"type": "datetime"},
            "updatedAt": {"type": "datetime"},
            "publishedAt": {"type": "datetime"},
            "author": {"type": "relation", "relation": "manyToOne", "target": AUTHOR},
            "categories": {"type": "relation", "relation": "manyToMany", "target": CATEGORY},
            "related": {"type": "relation", "relation": "morphToMany"},
            "seo": {"type": "component", "component": "shared.seo"},
            "blocks": {"type": "dynamiczone", "components": ["shared.quote", "shared.rich-text"]},
            "createdBy": {"type": "relation", "relation": "oneToOne", "target": ADMIN_USER, "private": True},
            "updatedBy": {"type": "relation", "relation": "oneToOne", "target": ADMIN_USER, "private": True},
        },
    },
    {
        "uid": AUTHOR,
        "attributes": {
            "name": {"type": "string"},
            "email": {"type": "email"},
            "password": {"type": "password"},
            "bio": {"type": "text", "config": {"hidden": True}},
            "articles": {"type": "relation", "relation": "oneToMany", "target": ARTICLE},
        },
    },
    {
        "uid": CATEGORY,
        "attributes": {
            "name": {"type": "string"},
            "slug": {"type": "uid"},
            "internalCode": {"type": "string", "config": {"hidden": True}},
        },
    },
    {
        "uid": ADMIN_USER,
        "attributes": {
            "firstname": {"type": "string"},
            "lastname": {"type": "string"},
            "username": {"type": "string"},
            "email": {"type": "email"},
            "password": {"type": "password"},
            "resetPasswordToken": {"type": "string", "private": True},
            "isActive": {"type": "boolean"},
            "roles": {"type": "relation", "relation": "manyToMany", "target": ADMIN_ROLE},
        },
    },
    {
        "uid": ADMIN_ROLE,
        "attributes": {
            "name": {"type": "string"},
            "code": {"type": "string"},
        },
    },
    {
        "uid": "shared.seo",
        "model_type": "component",
        "attributes": {
            "metaTitle": {"type": "string"},
            "metaDescription": {"type": "text"},
        },
    },
    {
        "uid": "shared.quote",
        "model_type": "component",
        "attributes": {
            "text": {"type": "text"},
            "source": {"type": "string"},
        },
    },
    {
        "uid": "shared.rich-text",
        "model_type": "component",
        "attributes": {
            "content": {"type": "richtext"},
        },
    },
]


class RecordingVisitor(Visitor):
    """Visitor that lets every node through and remembers it."""

    def __init__(self):
        self.nodes = []

    def visit(self, node):
        self.nodes.append(node)
        return PASS

    @property
    def keys(self) -> list[str]:
        return [node.key for node in self.nodes]

    def node(self, key: str):
        """Return the first recorded node for a key."""
        return next(node for node in self.nodes if node.key == key)


@pytest.fixture
def registry() -> SchemaRegistry:
    """Registry with articles, authors, categories, admin users and components."""
    return SchemaRegistry.from_definitions(SCHEMA_DEFINITIONS)


@pytest.fixture
def article_schema(registry):
    return registry.get_model(ARTICLE)


@pytest.fixture
def recorder() -> RecordingVisitor:
    return RecordingVisitor()


@pytest.fixture
def make_validator(registry):
    """Build a PermissionsValidator on articles from a list of rules.

    Usage:
        def test_something(make_validator):
            validator = make_validator([Rule("read", ARTICLE)])
    """

    def _make(rules: list[Rule], action: str = "read", model: str = ARTICLE) -> PermissionsValidator:
        return PermissionsValidator(Ability(rules), action, model, registry)

    return _make
