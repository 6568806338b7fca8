"""Configuration management for tagbump."""

from __future__ import annotations

from tagbump.config.loader import load_config, resolve_api_settings
from tagbump.config.models import (
    ApiSettings,
    BumpConfig,
    ChangelogConfig,
    TagbumpConfig,
)

__all__ = [
    "ApiSettings",
    "BumpConfig",
    "ChangelogConfig",
    "TagbumpConfig",
    "load_config",
    "resolve_api_settings",
]
