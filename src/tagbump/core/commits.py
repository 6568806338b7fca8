"""Commit history extraction for changelogs.

The walk follows only first parents from HEAD, so commits merged in from
side branches are not listed individually. Merge commits themselves are
skipped and do not count against the commit limit.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tagbump.exceptions import NoCommitsFoundError

if TYPE_CHECKING:
    from tagbump.vcs.base import Commit, TagRepository

logger = logging.getLogger(__name__)

DEFAULT_MAX_COMMITS = 50


def format_commit_line(commit: Commit) -> str:
    """Format a commit as ``<short sha> <summary>``."""
    return f"{commit.short_sha} {commit.summary}"


def previous_tag_boundary(repo: TagRepository, previous_tag: str | None) -> str | None:
    """Return the commit the history walk stops at, or None to walk to the root."""
    if previous_tag is None:
        return None
    return repo.resolve_to_commit(previous_tag)


def collect_commit_log(
    repo: TagRepository,
    stop_at: str | None = None,
    max_commits: int = DEFAULT_MAX_COMMITS,
) -> list[str]:
    """Collect one-line commit summaries from HEAD back to ``stop_at``.

    Args:
        repo: Repository to walk
        stop_at: Boundary commit, excluded from the result
        max_commits: Maximum number of lines to emit

    Returns:
        Formatted lines, newest first

    Raises:
        NoCommitsFoundError: If no lines were produced
    """
    lines: list[str] = []
    sha: str | None = repo.head_commit()

    while sha is not None:
        if stop_at is not None and sha == stop_at:
            break
        if len(lines) >= max_commits:
            break

        commit = repo.get_commit(sha)
        if commit.is_merge:
            logger.debug("Skipping merge commit %s", commit.short_sha)
        else:
            lines.append(format_commit_line(commit))
        sha = commit.first_parent

    if not lines:
        raise NoCommitsFoundError("No commits found for changelog.")
    return lines
