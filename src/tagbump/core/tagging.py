"""Tag the current manifest version before it is bumped.

Running this before every bump guarantees that each version written to
the manifest was tagged at least once before being superseded, which is
what lets the changelog find the previous release reliably.

Failures to inspect the repository or manifest are not fatal here: the
step is advisory and the bump proceeds without a tag. Only losing a
tag-creation race is reported as an error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from tagbump.core.version import parse_version, tag_core
from tagbump.exceptions import (
    InvalidSemverError,
    NotAGitRepositoryError,
    ProjectError,
    UnbornHeadError,
)
from tagbump.project.pubspec import get_pubspec_version
from tagbump.vcs.base import TagRepository
from tagbump.vcs.git import GitRepository

logger = logging.getLogger(__name__)


class TagPrefix(StrEnum):
    """Naming convention for created tags."""

    V = "v"
    NONE = "none"


class TagSyncState(StrEnum):
    """Outcome of a tag synchronization."""

    NOT_A_REPO = "not_a_repo"
    NO_VERSION = "no_version"
    INVALID_VERSION = "invalid_version"
    UNBORN_HEAD = "unborn_head"
    ALREADY_TAGGED = "already_tagged"
    CREATED = "created"

    @property
    def skipped(self) -> bool:
        return self not in (TagSyncState.ALREADY_TAGGED, TagSyncState.CREATED)


@dataclass(frozen=True)
class TagSyncResult:
    """What the synchronizer did.

    Attributes:
        state: Final state
        version: Version string read from the manifest, if any
        tag: Tag that was found or created, if any
    """

    state: TagSyncState
    version: str | None = None
    tag: str | None = None


def tag_candidates(core: str) -> tuple[str, str]:
    """Return the bare and prefixed tag names for a version core."""
    return core, f"v{core}"


def preferred_tag_name(core: str, tag_prefix: TagPrefix) -> str:
    bare, prefixed = tag_candidates(core)
    return prefixed if tag_prefix == TagPrefix.V else bare


def ensure_current_version_tag(
    pubspec_path: Path,
    tag_prefix: TagPrefix = TagPrefix.V,
    *,
    repo: TagRepository | None = None,
    discover: Callable[[Path], TagRepository] = GitRepository.discover,
) -> TagSyncResult:
    """Make sure the manifest's current version has a tag.

    If neither ``X.Y.Z`` nor ``vX.Y.Z`` exists, a lightweight tag using the
    preferred convention is created at HEAD.

    Args:
        pubspec_path: Path to pubspec.yaml
        tag_prefix: Naming convention for a newly created tag
        repo: Repository to use; discovered from the manifest's directory if None
        discover: Repository discovery function

    Returns:
        The synchronization result

    Raises:
        TagCreationFailedError: If creating the tag failed
    """
    if repo is None:
        try:
            repo = discover(pubspec_path.parent)
        except NotAGitRepositoryError:
            logger.info("Skipping tag check (not in a git repository)")
            return TagSyncResult(TagSyncState.NOT_A_REPO)

    try:
        version_str = get_pubspec_version(pubspec_path)
    except ProjectError as e:
        logger.info("Skipping tag check (no version found in pubspec): %s", e)
        return TagSyncResult(TagSyncState.NO_VERSION)

    try:
        version = parse_version(version_str)
    except InvalidSemverError as e:
        logger.info("Skipping tag check (%s)", e)
        return TagSyncResult(TagSyncState.INVALID_VERSION, version=version_str)

    core = tag_core(version)
    bare, prefixed = tag_candidates(core)

    # Either convention counts as tagged
    for name in (bare, prefixed):
        if repo.tag_exists(name):
            logger.info(
                "Tag already exists for current version %s (checked '%s' and '%s')",
                version_str,
                bare,
                prefixed,
            )
            return TagSyncResult(TagSyncState.ALREADY_TAGGED, version=version_str, tag=name)

    try:
        head = repo.head_commit()
    except UnbornHeadError:
        logger.info("Skipping tag creation (repository has no commits yet)")
        return TagSyncResult(TagSyncState.UNBORN_HEAD, version=version_str)

    tag = preferred_tag_name(core, tag_prefix)
    repo.create_tag(tag, head)
    logger.info("Created lightweight tag '%s' for current version %s", tag, version_str)
    return TagSyncResult(TagSyncState.CREATED, version=version_str, tag=tag)
