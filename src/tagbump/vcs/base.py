"""Repository capability interface and value types.

Components depend on the TagRepository protocol rather than on git
directly, so tests can drive them with an in-memory repository.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

MERGE_PREFIX = "Merge "


@dataclass(frozen=True)
class Tag:
    """A tag and the commit it (ultimately) marks."""

    name: str
    target: str


@dataclass(frozen=True)
class Commit:
    """A commit as seen by the history walk.

    Attributes:
        sha: Full 40-hex commit id
        parents: Parent ids, mainline parent first
        summary: First line of the commit message
    """

    sha: str
    parents: tuple[str, ...]
    summary: str

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @property
    def first_parent(self) -> str | None:
        return self.parents[0] if self.parents else None

    @property
    def is_merge(self) -> bool:
        """True for real merges and for commits whose summary reads like one."""
        return len(self.parents) > 1 or self.summary.startswith(MERGE_PREFIX)


class TagRepository(Protocol):
    """Operations on the local tag namespace and commit graph."""

    def tag_exists(self, name: str) -> bool: ...

    def create_tag(self, name: str, target: str) -> None:
        """Create a lightweight tag. Must fail if the tag already exists."""
        ...

    def resolve_to_commit(self, name: str) -> str:
        """Peel a tag down to the commit it marks."""
        ...

    def head_commit(self) -> str: ...

    def all_tags(self) -> list[Tag]: ...

    def get_commit(self, sha: str) -> Commit: ...
