"""Version control access for tagbump."""

from __future__ import annotations

from tagbump.vcs.base import Commit, Tag, TagRepository
from tagbump.vcs.git import GitRepository

__all__ = [
    "Commit",
    "GitRepository",
    "Tag",
    "TagRepository",
]
