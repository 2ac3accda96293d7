"""
Traversal of query sort clauses.

Accepted shapes:
    "title"                         single attribute
    "title:desc,publishedAt:asc"    comma separated clauses
    "author.name:desc"              sort on an attribute of a related model
    ["title:asc", "author.name"]    list of clauses
    {"title": "asc", "author": {"name": "desc"}}
"""

from collections.abc import Sequence
from typing import Any

from schemaguard.core.path_utils import NodePath
from schemaguard.core.tree_node import VisitNode
from schemaguard.core.visitor import Visitor
from schemaguard.structure.schema import Schema
from schemaguard.traversal.base import Traversal

SORT_ORDERS = frozenset({"asc", "desc"})


def is_sort_order(token: str) -> bool:
    return token.lower() in SORT_ORDERS


def tokenize_sort(sort: str) -> list[str]:
    """
    Split a sort string on dots and colons.

    Examples:
        "author.name:desc" -> ["author", "name", "desc"]
        "title" -> ["title"]
    """
    return [token for part in sort.split(".") for token in part.split(":") if token]


def recompose_sort(tokens: list[str]) -> str | None:
    """
    Join sort tokens back into a sort string.

    Examples:
        ["name", "desc"] -> "name:desc"
        ["asc"] -> "asc"
        [] -> None
    """
    if not tokens:
        return None

    sort = tokens[0]
    for token in tokens[1:]:
        sort = f"{sort}:{token}" if is_sort_order(token) else f"{sort}.{token}"
    return sort


def compose_sort(key: str, value: Any) -> str:
    if not value:
        return key
    if is_sort_order(value):
        return f"{key}:{value}"
    return f"{key}.{value}"


class SortTraversal(Traversal):
    """Walks `sort` query parameters."""

    async def walk(self, visitors: Sequence[Visitor], schema: Schema, sort: Any, path: NodePath) -> Any:
        if isinstance(sort, str) and "," in sort:
            clauses = [await self.walk(visitors, schema, clause.strip(), path) for clause in sort.split(",")]
            return ",".join(clause for clause in clauses if clause)

        if isinstance(sort, list):
            clauses = [
                await self.walk(visitors, schema, clause, path.index(position))
                for position, clause in enumerate(sort)
            ]
            return [clause for clause in clauses if clause]

        if isinstance(sort, str):
            return await self._walk_clause(visitors, schema, sort.strip(), path)

        if isinstance(sort, dict):
            return await self.walk_mapping(visitors, schema, sort, path)

        return sort

    async def _walk_clause(self, visitors: Sequence[Visitor], schema: Schema, clause: str, path: NodePath) -> str | None:
        tokens = tokenize_sort(clause)
        if not tokens:
            return clause

        key = tokens[0]
        node = await self.visit(visitors, self.make_node(key, recompose_sort(tokens[1:]), schema, path))
        if node is None:
            return None
        return compose_sort(key, await self.descend(visitors, node))

    async def descend(self, visitors: Sequence[Visitor], node: VisitNode) -> Any:
        if node.value is None or node.attribute is None:
            return node.value

        target = self.target_schema(node.attribute)
        if target is None:
            return node.value
        return await self.walk(visitors, target, node.value, node.path)
