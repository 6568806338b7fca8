"""pubspec.yaml version manipulation.

This module provides functionality for reading and updating
the version number in pubspec.yaml files.

It preserves formatting and comments by using regex-based
replacement of the single ``version:`` line rather than full
YAML parsing and rewriting.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import yaml

from tagbump.exceptions import ProjectError, VersionNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_PUBSPEC = "pubspec.yaml"

# Fallback for documents that are not valid YAML
_VERSION_LINE_RE = re.compile(r"^version:[ \t]*(.+)$", re.MULTILINE)

# Groups: prefix ("version:" plus spacing), opening quote, value, closing quote
_VERSION_VALUE_RE = re.compile(
    r"""^(version:[ \t]*)(["']?)([^\s"'#]+)(["']?)""",
    re.MULTILINE,
)


def read_pubspec_version(content: str) -> str | None:
    """Extract the version string from pubspec.yaml content.

    YAML parsing is tried first since it copes with quoting and key order.
    If the document is not valid YAML, or has no usable version field,
    the first line matching ``version: ...`` is used instead.

    Args:
        content: Text of the manifest

    Returns:
        Version string, or None if no non-empty version is declared
    """
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError:
        document = None

    if isinstance(document, dict):
        value = document.get("version")
        if value is not None and not isinstance(value, (dict, list)):
            version = str(value).strip()
            if version:
                return version

    match = _VERSION_LINE_RE.search(content)
    if match:
        version = match.group(1).strip()
        if version:
            return version
    return None


def read_pubspec_text(path: Path) -> str:
    """Read a manifest, keeping its line endings intact.

    Raises:
        ProjectError: If the file cannot be read
    """
    try:
        with path.open(encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ProjectError(f"Failed to read {path}: {e}") from e


def get_pubspec_version(path: Path) -> str:
    """Get the version from pubspec.yaml.

    Args:
        path: Path to pubspec.yaml

    Returns:
        Version string

    Raises:
        ProjectError: If the file cannot be read
        VersionNotFoundError: If version cannot be found
    """
    version = read_pubspec_version(read_pubspec_text(path))
    if version is None:
        raise VersionNotFoundError(f"Could not find version in {path}. Expected a 'version:' line.")
    return version


def update_pubspec_version(path: Path, new_version: str) -> Path:
    """Update the version in pubspec.yaml.

    Only the value on the ``version:`` line changes. Indentation after the
    colon, quoting, trailing comments and every other line are kept
    byte-for-byte.

    Args:
        path: Path to pubspec.yaml
        new_version: New version string to set

    Returns:
        Path to the updated pubspec.yaml

    Raises:
        VersionNotFoundError: If version cannot be found
        ProjectError: If the file cannot be read or written
    """
    content = read_pubspec_text(path)

    new_content, count = _VERSION_VALUE_RE.subn(
        lambda m: f"{m.group(1)}{m.group(2)}{new_version}{m.group(4)}",
        content,
        count=1,
    )

    if count == 0:
        raise VersionNotFoundError(
            f"Could not find version to update in {path}. Expected a 'version:' line."
        )

    if new_content == content:
        raise ProjectError(f"Version in {path} was not updated. It may already be {new_version}.")

    try:
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(new_content)
    except OSError as e:
        raise ProjectError(f"Failed to write {path}: {e}") from e
    return path
