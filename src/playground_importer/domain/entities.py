"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union


class TemplateKind(str, Enum):
    """Project framework a playground is scaffolded for."""

    REACT = "REACT"
    NEXTJS = "NEXTJS"
    EXPRESS = "EXPRESS"
    VUE = "VUE"
    HONO = "HONO"
    ANGULAR = "ANGULAR"


DEFAULT_TEMPLATE = TemplateKind.REACT


class EntryKind(str, Enum):
    """Type of an object returned by the GitHub contents API."""

    FILE = "file"
    DIR = "dir"
    OTHER = "other"  # symlink, submodule


# ── Remote payloads ─────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class RemoteEntry:
    """A single object from a contents API directory listing."""

    name: str
    path: str
    kind: EntryKind
    size: int = 0
    raw_type: str = ""


@dataclass(frozen=True, slots=True)
class RepoMetadata:
    """High-level metadata about a GitHub repository."""

    owner: str
    name: str
    description: str | None = None


# ── Reconstructed file tree ─────────────────────────────────────────────────


@dataclass(slots=True)
class FileNode:
    """A file with its decoded text content."""

    contents: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"file": {"contents": self.contents}}


@dataclass(slots=True)
class DirectoryNode:
    """A directory mapping entry names to child nodes."""

    entries: dict[str, TreeNode] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"directory": {name: node.to_dict() for name, node in self.entries.items()}}

    def count_files(self) -> int:
        """Return the number of file nodes in this subtree."""
        total = 0
        for node in self.entries.values():
            if isinstance(node, DirectoryNode):
                total += node.count_files()
            else:
                total += 1
        return total


TreeNode = Union[FileNode, DirectoryNode]


def serialize_tree(root: DirectoryNode) -> dict[str, Any]:
    """Return the JSON storage shape of a root directory (its bare entries)."""
    return root.to_dict()["directory"]


@dataclass(frozen=True, slots=True)
class SkipRecord:
    """An entry excluded from the imported tree, and why."""

    name: str
    reason: str


# ── Users & playgrounds ─────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Identity:
    """The authenticated user making a request."""

    id: str


@dataclass(slots=True)
class Playground:
    """A user-owned project record."""

    id: str
    title: str
    template: TemplateKind
    user_id: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class PlaygroundView:
    """A playground as shown on the owner's dashboard."""

    playground: Playground
    is_starred: bool = False


@dataclass(frozen=True, slots=True)
class TemplateFile:
    """The serialized file tree attached to a playground."""

    playground_id: str
    content: dict[str, Any]


@dataclass(frozen=True, slots=True)
class ImportResult:
    """The outcome of a successful repository import."""

    playground_id: str
    message: str
    template: TemplateKind
    tree: DirectoryNode
    skipped: list[SkipRecord] = field(default_factory=list)
    success: bool = True

    @property
    def skipped_files(self) -> int:
        return len(self.skipped)
