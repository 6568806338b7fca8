"""Release tag discovery: which tag is being released and which came before."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tagbump.core.version import parse_tag_version
from tagbump.exceptions import NoTagOnHeadError

if TYPE_CHECKING:
    import semver

    from tagbump.vcs.base import Tag, TagRepository

logger = logging.getLogger(__name__)

INITIAL_RELEASE = "initial"


@dataclass(frozen=True)
class ChangeRange:
    """The tags bounding a release.

    Attributes:
        current_tag: Tag being released
        previous_tag: Most recent earlier version tag, None for the first release
    """

    current_tag: str
    previous_tag: str | None = None

    @property
    def since(self) -> str:
        return self.previous_tag or INITIAL_RELEASE


def sorted_version_tags(repo: TagRepository) -> list[tuple[semver.Version, Tag]]:
    """Return version tags sorted newest first by semver precedence.

    Tags whose name (minus an optional ``v``) is not a semantic version are
    ignored. Versions of equal precedence, such as ``v1.0.0`` and ``1.0.0``,
    keep name order.
    """
    decorated = []
    for tag in repo.all_tags():
        version = parse_tag_version(tag.name)
        if version is None:
            logger.debug("Ignoring non-version tag '%s'", tag.name)
            continue
        decorated.append((version, tag))

    decorated.sort(key=lambda item: item[1].name)
    decorated.sort(key=lambda item: item[0], reverse=True)
    return decorated


def detect_current_tag(repo: TagRepository, explicit: str | None = None) -> str:
    """Determine the tag being released.

    Args:
        repo: Repository to inspect
        explicit: Tag given by the caller, used verbatim when set

    Returns:
        Tag name

    Raises:
        NoTagOnHeadError: If no tag was given and none points at HEAD
    """
    if explicit:
        return explicit

    head = repo.head_commit()
    for tag in repo.all_tags():
        if tag.target == head:
            return tag.name

    raise NoTagOnHeadError("No tag found on HEAD. Use --tag to specify one.")


def find_previous_tag(repo: TagRepository, current: str) -> str | None:
    """Find the version tag released before ``current``.

    When ``current`` is itself a version tag this is its immediate
    descending neighbour: the newest tag with strictly lower precedence,
    so an alias like ``1.0.0`` next to ``v1.0.0`` is never picked. For a
    non-version tag name, the newest version tag other than it is used.

    Returns:
        Name of the next-most-recent version tag, or None for an initial release
    """
    current_version = parse_tag_version(current)
    for version, tag in sorted_version_tags(repo):
        if tag.name == current:
            continue
        if current_version is None or version < current_version:
            return tag.name
    return None


def resolve_change_range(repo: TagRepository, explicit: str | None = None) -> ChangeRange:
    current = detect_current_tag(repo, explicit)
    return ChangeRange(current_tag=current, previous_tag=find_previous_tag(repo, current))
