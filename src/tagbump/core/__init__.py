"""Core business logic for tagbump.

This module contains the fundamental building blocks:
- Semantic version parsing and bumping
- Tagging the current version before a bump
- Finding the release range between version tags
- First-parent commit history extraction
- Changelog composition with a deterministic fallback
"""

from __future__ import annotations

from tagbump.core.changelog import (
    build_prompt,
    compose_changelog,
    generate_fallback_changelog,
    render_custom_prompt,
)
from tagbump.core.commits import collect_commit_log, format_commit_line
from tagbump.core.language import resolve_language
from tagbump.core.tagging import (
    TagPrefix,
    TagSyncResult,
    TagSyncState,
    ensure_current_version_tag,
)
from tagbump.core.tags import (
    ChangeRange,
    detect_current_tag,
    find_previous_tag,
    resolve_change_range,
    sorted_version_tags,
)
from tagbump.core.version import VersionPart, bump_version, parse_version, tag_core

__all__ = [
    # Version
    "VersionPart",
    "bump_version",
    "parse_version",
    "tag_core",
    # Tagging
    "TagPrefix",
    "TagSyncResult",
    "TagSyncState",
    "ensure_current_version_tag",
    # Range
    "ChangeRange",
    "detect_current_tag",
    "find_previous_tag",
    "resolve_change_range",
    "sorted_version_tags",
    # Commits
    "collect_commit_log",
    "format_commit_line",
    # Changelog
    "build_prompt",
    "compose_changelog",
    "generate_fallback_changelog",
    "render_custom_prompt",
    "resolve_language",
]
