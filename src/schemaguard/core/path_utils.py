"""
Path utilities shared by every traversal.

A traversal tracks two dotted paths at the same time: the raw path, which
follows every key and array index of the input, and the attribute path, which
only follows keys naming schema attributes and therefore skips operators,
keywords and array positions.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PathComponents:
    """Result of splitting a path into its components."""

    first_part: str
    remainder: str
    has_remainder: bool

    @classmethod
    def split_path(cls, path: str) -> "PathComponents":
        """
        Split a path at the first dot separator.

        Params:
            path: Path string to split (e.g., "author.avatar.formats")

        Returns:
            PathComponents with first_part, remainder, and has_remainder flag

        Examples:
            "author.avatar.formats" -> PathComponents("author", "avatar.formats", True)
            "title" -> PathComponents("title", "", False)
        """
        if not path or "." not in path:
            return cls(first_part=path, remainder="", has_remainder=False)

        first_part, remainder = path.split(".", 1)
        return cls(first_part=first_part, remainder=remainder, has_remainder=True)


@dataclass(frozen=True)
class NodePath:
    """
    Location of a traversal node inside the input.

    Both components are None at the root of a traversal.
    """

    raw: str | None = None
    attribute: str | None = None

    def child(self, key: str, is_attribute: bool) -> "NodePath":
        """
        Step into a key of the current mapping.

        Params:
            key: The key being entered
            is_attribute: Whether the key names an attribute of the current schema

        Returns:
            New NodePath; the attribute path only grows for attribute keys
        """
        raw = key if self.raw is None else f"{self.raw}.{key}"
        attribute = self.attribute
        if is_attribute:
            attribute = key if self.attribute is None else f"{self.attribute}.{key}"
        return NodePath(raw=raw, attribute=attribute)

    def index(self, position: int) -> "NodePath":
        """Step into an array element."""
        return NodePath(raw=f"{self.raw or ''}[{position}]", attribute=self.attribute)

    def fragment(self, uid: str) -> "NodePath":
        """Step into a polymorphic fragment keyed by model uid."""
        return NodePath(raw=f"{self.raw or ''}[{uid}]", attribute=self.attribute)

    def __str__(self) -> str:
        return self.raw or ""


ROOT_PATH = NodePath()


def contained_paths(path: str) -> list[str]:
    """
    List every prefix of a dotted path, shortest first.

    Params:
        path: Dotted attribute path

    Returns:
        List of prefixes including the path itself

    Examples:
        "author.avatar.url" -> ["author", "author.avatar", "author.avatar.url"]
    """
    if not path:
        return []
    parts = path.split(".")
    return [".".join(parts[: index + 1]) for index in range(len(parts))]
