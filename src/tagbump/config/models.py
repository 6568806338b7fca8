"""Configuration models for tagbump.

Configuration is read from an optional ``tagbump:`` section of
pubspec.yaml. Command-line options override these values.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from tagbump.ai.client import DEFAULT_BASE_URL, DEFAULT_MAX_TOKENS, DEFAULT_MODEL, DEFAULT_TIMEOUT
from tagbump.core.changelog import DEFAULT_LANGUAGE
from tagbump.core.commits import DEFAULT_MAX_COMMITS
from tagbump.core.tagging import TagPrefix
from tagbump.project.pubspec import DEFAULT_PUBSPEC


class BumpConfig(BaseModel):
    """Settings for the bump command."""

    model_config = ConfigDict(extra="forbid")

    pubspec: Path = Field(default=Path(DEFAULT_PUBSPEC), description="Path to pubspec.yaml")
    tag_prefix: TagPrefix = Field(
        default=TagPrefix.V,
        description="Naming convention for auto-created tags: 'v' or 'none'",
    )


class ChangelogConfig(BaseModel):
    """Settings for the changelog command."""

    model_config = ConfigDict(extra="forbid")

    max_commits: int = Field(default=DEFAULT_MAX_COMMITS, ge=1)
    model: str = DEFAULT_MODEL
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, ge=1)
    lang: str = DEFAULT_LANGUAGE
    prompt: str | None = Field(
        default=None,
        description="Custom prompt; {tag}, {prev_tag}, {git_log} and {lang} are substituted",
    )
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    api_key: str | None = None
    base_url: str | None = None


class TagbumpConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    bump: BumpConfig = Field(default_factory=BumpConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)


class ApiSettings(BaseModel):
    """Resolved summarization API settings, fixed for the whole run."""

    model_config = ConfigDict(frozen=True)

    api_key: str | None
    base_url: str = DEFAULT_BASE_URL

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)
