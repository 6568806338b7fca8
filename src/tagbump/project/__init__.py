"""Project manifest handling."""

from __future__ import annotations

from tagbump.project.pubspec import (
    get_pubspec_version,
    read_pubspec_version,
    update_pubspec_version,
)

__all__ = [
    "get_pubspec_version",
    "read_pubspec_version",
    "update_pubspec_version",
]
