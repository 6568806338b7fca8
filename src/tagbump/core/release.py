"""Version bump workflow: tag the current version, then write the next one."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tagbump.core.tagging import TagPrefix, TagSyncResult, ensure_current_version_tag
from tagbump.core.version import VersionPart, bump_version, parse_version
from tagbump.project.pubspec import get_pubspec_version, update_pubspec_version

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    import semver

    from tagbump.vcs.base import TagRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BumpResult:
    """Outcome of a version bump.

    Attributes:
        path: Manifest that was (or would be) updated
        previous: Version before the bump
        current: Version after the bump
        tag_sync: Result of tagging the previous version, None on a dry run
    """

    path: Path
    previous: semver.Version
    current: semver.Version
    tag_sync: TagSyncResult | None = None


def bump_pubspec(
    pubspec_path: Path,
    part: VersionPart,
    tag_prefix: TagPrefix = TagPrefix.V,
    *,
    dry_run: bool = False,
    repo: TagRepository | None = None,
    discover: Callable[[Path], TagRepository] | None = None,
) -> BumpResult:
    """Bump the version in pubspec.yaml.

    The current version is tagged first (see ensure_current_version_tag).
    On a dry run nothing is tagged or written.

    Raises:
        ProjectError: If the manifest cannot be read or written
        VersionNotFoundError: If the manifest has no version
        InvalidSemverError: If the current version is not semver
        TagCreationFailedError: If tagging the current version failed
    """
    previous = parse_version(get_pubspec_version(pubspec_path))
    current = bump_version(previous, part)

    if dry_run:
        return BumpResult(path=pubspec_path, previous=previous, current=current)

    sync_kwargs = {"repo": repo}
    if discover is not None:
        sync_kwargs["discover"] = discover
    tag_sync = ensure_current_version_tag(pubspec_path, tag_prefix, **sync_kwargs)

    update_pubspec_version(pubspec_path, str(current))
    logger.info("Bumped version %s -> %s", previous, current)
    return BumpResult(path=pubspec_path, previous=previous, current=current, tag_sync=tag_sync)
