"""Shared fixtures for tagbump tests."""

from __future__ import annotations

import shutil
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

import pytest

from tagbump.vcs.base import Commit
from tests.helpers import FakeRepository, git, sha_for


@pytest.fixture
def make_repo() -> Callable[..., FakeRepository]:
    """Build a FakeRepository with a linear mainline.

    ``summaries`` are listed oldest first; commit ``i`` gets id
    ``sha_for(i + 1)``. Indices in ``merges`` get a second parent from a
    side-branch commit that is not on the mainline. ``tags`` maps tag
    names to mainline indices.
    """

    def _make(
        summaries: Iterable[str] = (),
        *,
        merges: Iterable[int] = (),
        tags: Mapping[str, int] | None = None,
    ) -> FakeRepository:
        merges = set(merges)
        commits = []
        previous: str | None = None
        for index, summary in enumerate(summaries):
            parents: tuple[str, ...] = (previous,) if previous else ()
            if index in merges:
                side = Commit(sha=sha_for(1000 + index), parents=parents, summary="side work")
                commits.append(side)
                parents = (*parents, side.sha)
            current = Commit(sha=sha_for(index + 1), parents=parents, summary=summary)
            commits.append(current)
            previous = current.sha

        tag_map = {name: sha_for(index + 1) for name, index in (tags or {}).items()}
        return FakeRepository(commits=commits, tags=tag_map, head=previous)

    return _make


@pytest.fixture
def pubspec(tmp_path: Path) -> Path:
    """A pubspec.yaml at version 1.2.3+4 with surrounding content."""
    path = tmp_path / "pubspec.yaml"
    path.write_text(
        "name: demo_app\n"
        "description: A demo app.\n"
        "# The version line below is managed by tagbump\n"
        "version: 1.2.3+4\n"
        "\n"
        "environment:\n"
        "  sdk: '>=3.0.0 <4.0.0'\n"
    )
    return path


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Path:
    """An empty git repository with an identity configured."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "config", "user.name", "Test")
    git(repo, "config", "user.email", "test@test.com")
    git(repo, "config", "commit.gpgsign", "false")
    git(repo, "config", "tag.gpgsign", "false")
    return repo


@pytest.fixture
def temp_git_repo_with_pubspec(temp_git_repo: Path) -> Path:
    """A git repository with a committed pubspec.yaml at version 1.2.3+4."""
    (temp_git_repo / "pubspec.yaml").write_text("name: demo_app\nversion: 1.2.3+4\n")
    git(temp_git_repo, "add", "pubspec.yaml")
    git(temp_git_repo, "commit", "-q", "-m", "Initial commit")
    return temp_git_repo
