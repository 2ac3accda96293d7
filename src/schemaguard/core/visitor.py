"""
Visitor abstraction shared by the traversals and the visitor library.

A visitor inspects one VisitNode and answers with a tagged result: let the
node through, fail the whole traversal, or rewrite the node's value (which
includes omitting the key altogether).
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from schemaguard.core.tree_node import VisitNode


@dataclass(frozen=True)
class Pass:
    """The node is acceptable as is."""


@dataclass(frozen=True)
class Fail:
    """The node is rejected; the traversal stops with a ValidationError."""

    reason: str


@dataclass(frozen=True)
class Rewrite:
    """The node's value is replaced before the traversal descends into it."""

    value: Any = None
    omitted: bool = False

    @classmethod
    def omit(cls) -> "Rewrite":
        """Remove the key from its container."""
        return cls(omitted=True)


VisitResult = Pass | Fail | Rewrite

PASS = Pass()


class Visitor(ABC):
    """
    Base class for node visitors.

    Visitors are stateless apart from configuration closed over at
    construction time. `visit` may be a plain method or a coroutine.
    """

    @abstractmethod
    def visit(self, node: "VisitNode") -> VisitResult | Awaitable[VisitResult]:
        """
        Inspect a node.

        Params:
            node: The node being visited

        Returns:
            PASS, a Fail carrying the rejection reason, or a Rewrite
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
