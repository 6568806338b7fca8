"""Test doubles and git helpers shared across tests."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Iterable, Mapping
from pathlib import Path

import pytest

from tagbump.exceptions import TagCreationFailedError, TagNotFoundError, UnbornHeadError
from tagbump.vcs.base import Commit, Tag

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def sha_for(index: int) -> str:
    """Deterministic 40-hex commit id."""
    return f"{index:08x}" * 5


class FakeRepository:
    """In-memory TagRepository."""

    def __init__(
        self,
        commits: Iterable[Commit] = (),
        tags: Mapping[str, str] | None = None,
        head: str | None = None,
    ) -> None:
        self.commits = {c.sha: c for c in commits}
        self.tags = dict(tags or {})
        self.head = head
        self.checked: list[str] = []
        self.created: list[tuple[str, str]] = []
        self.visited: list[str] = []

    def tag_exists(self, name: str) -> bool:
        self.checked.append(name)
        return name in self.tags

    def create_tag(self, name: str, target: str) -> None:
        if name in self.tags:
            raise TagCreationFailedError(f"Failed to create lightweight tag '{name}'")
        self.tags[name] = target
        self.created.append((name, target))

    def resolve_to_commit(self, name: str) -> str:
        try:
            return self.tags[name]
        except KeyError:
            raise TagNotFoundError(f"Tag '{name}' not found") from None

    def head_commit(self) -> str:
        if self.head is None:
            raise UnbornHeadError("Repository has no commits yet")
        return self.head

    def all_tags(self) -> list[Tag]:
        return [Tag(name, target) for name, target in sorted(self.tags.items())]

    def get_commit(self, sha: str) -> Commit:
        self.visited.append(sha)
        return self.commits[sha]


def git(repo: Path, *args: str) -> str:
    result = subprocess.run(["git", *args], cwd=repo, capture_output=True, text=True, check=True)
    return result.stdout.strip()


def commit(repo: Path, message: str) -> str:
    """Create an empty commit and return its id."""
    git(repo, "commit", "--allow-empty", "-q", "-m", message)
    return git(repo, "rev-parse", "HEAD")
