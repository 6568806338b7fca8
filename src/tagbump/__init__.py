"""tagbump: version tagging, bumping and changelogs for pubspec-based projects."""

from __future__ import annotations

__version__ = "0.1.0"
