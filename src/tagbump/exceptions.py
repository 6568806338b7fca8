"""Exception hierarchy for tagbump.

All errors raised by tagbump derive from TagbumpError so that the
command layer can report them uniformly and exit non-zero.
"""

from __future__ import annotations


class TagbumpError(Exception):
    """Base class for all tagbump errors."""


# Configuration


class ConfigError(TagbumpError):
    """Configuration could not be loaded."""


class ConfigValidationError(ConfigError):
    """Configuration was found but is invalid."""


# Project / manifest


class ProjectError(TagbumpError):
    """The project manifest could not be read or written."""


class VersionNotFoundError(ProjectError):
    """No version field was found in the manifest."""


class InvalidSemverError(TagbumpError):
    """A version string does not follow semantic versioning."""

    def __init__(self, version: str, reason: str | None = None) -> None:
        self.version = version
        message = f"Invalid semantic version '{version}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


# Git


class GitError(TagbumpError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        self.stderr = stderr
        if stderr:
            message = f"{message}\n{stderr.strip()}"
        super().__init__(message)


class NotAGitRepositoryError(GitError):
    """The directory is not inside a git repository."""


class UnbornHeadError(GitError):
    """HEAD does not point at a commit yet."""


class TagNotFoundError(GitError):
    """A tag does not exist."""


class TagCreationFailedError(GitError):
    """A tag could not be created, usually because it already exists."""


# Changelog


class ChangelogError(TagbumpError):
    """Changelog generation failed."""


class NoTagOnHeadError(ChangelogError):
    """No tag resolves to the HEAD commit."""


class NoCommitsFoundError(ChangelogError):
    """The requested range contains no (non-merge) commits."""


class InvalidLanguageError(ChangelogError):
    """A language identifier could not be resolved."""


class ApiCallFailedError(ChangelogError):
    """The summarization API call failed or returned nothing usable."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
