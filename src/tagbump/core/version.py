"""Semantic version parsing and bumping.

Versions are represented as ``semver.Version``. Ordering follows semver
precedence (prerelease aware, build metadata ignored). The build metadata
is used as a monotonically increasing release-build counter, the way
Flutter uses ``version: 1.2.3+4`` in pubspec.yaml.
"""

from __future__ import annotations

import re
from enum import StrEnum

import semver

from tagbump.exceptions import InvalidSemverError

# Build counter assigned after a major/minor/patch bump
INITIAL_BUILD = "1"

_BUILD_NUMBER_RE = re.compile(r"[0-9]+")


class VersionPart(StrEnum):
    """Which part of the version to increment."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    BUILD = "build"


def parse_version(text: str) -> semver.Version:
    """Parse a semantic version string.

    Args:
        text: Version string such as ``1.2.3``, ``1.2.3-beta.1`` or ``1.2.3+4``

    Returns:
        Parsed version

    Raises:
        InvalidSemverError: If the string is not a valid semantic version
    """
    try:
        return semver.Version.parse(text.strip())
    except (ValueError, TypeError) as e:
        raise InvalidSemverError(text, str(e)) from e


def build_number(version: semver.Version) -> int:
    """Return the numeric build counter, or 0 if absent or non-numeric."""
    if version.build and _BUILD_NUMBER_RE.fullmatch(version.build):
        return int(version.build)
    return 0


def bump_version(version: semver.Version, part: VersionPart) -> semver.Version:
    """Compute the next version. Pure, the input is not modified.

    Major, minor and patch bumps clear the prerelease and reset the build
    counter to 1. A build bump increments the build counter and keeps
    everything else.
    """
    if part == VersionPart.MAJOR:
        return version.replace(
            major=version.major + 1, minor=0, patch=0, prerelease=None, build=INITIAL_BUILD
        )
    if part == VersionPart.MINOR:
        return version.replace(
            minor=version.minor + 1, patch=0, prerelease=None, build=INITIAL_BUILD
        )
    if part == VersionPart.PATCH:
        return version.replace(patch=version.patch + 1, prerelease=None, build=INITIAL_BUILD)
    if part == VersionPart.BUILD:
        return version.replace(build=str(build_number(version) + 1))
    raise ValueError(f"Unknown version part: {part!r}")


def tag_core(version: semver.Version) -> str:
    """Return ``MAJOR.MINOR.PATCH[-PRERELEASE]``, dropping build metadata."""
    core = f"{version.major}.{version.minor}.{version.patch}"
    if version.prerelease:
        core = f"{core}-{version.prerelease}"
    return core


def strip_tag_prefix(name: str) -> str:
    """Strip a single leading ``v`` from a tag name."""
    return name[1:] if name.startswith("v") else name


def parse_tag_version(name: str) -> semver.Version | None:
    """Parse a tag name as a version, accepting an optional ``v`` prefix.

    Returns None when the name is not a version tag.
    """
    try:
        return semver.Version.parse(strip_tag_prefix(name))
    except ValueError:
        return None
