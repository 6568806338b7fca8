"""Configuration loading.

Handles finding pubspec.yaml, extracting the ``tagbump:`` section and
resolving environment fallbacks for the summarization API once at
startup.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from tagbump.ai.client import DEFAULT_BASE_URL
from tagbump.config.models import ApiSettings, ChangelogConfig, TagbumpConfig
from tagbump.exceptions import ConfigError, ConfigValidationError
from tagbump.project.pubspec import DEFAULT_PUBSPEC

CONFIG_SECTION = "tagbump"

API_KEY_ENV_VARS = ("ANTHROPIC_API_KEY", "ANTHROPIC_AUTH_TOKEN")
BASE_URL_ENV_VAR = "ANTHROPIC_BASE_URL"


def find_pubspec(start: Path | None = None) -> Path | None:
    """Find pubspec.yaml by searching up from ``start`` (default: cwd)."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / DEFAULT_PUBSPEC
        if candidate.is_file():
            return candidate
    return None


def load_pubspec_yaml(path: Path) -> dict[str, Any]:
    """Load pubspec.yaml as a mapping.

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {path}: {e}") from e
    return data if isinstance(data, dict) else {}


def extract_tagbump_config(pubspec: Mapping[str, Any]) -> dict[str, Any]:
    """Extract the ``tagbump:`` section, or an empty dict if absent."""
    section = pubspec.get(CONFIG_SECTION)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigValidationError(f"'{CONFIG_SECTION}' must be a mapping")
    return section


def load_config(pubspec_path: Path | None = None) -> TagbumpConfig:
    """Load tagbump configuration.

    A missing manifest, or one without a ``tagbump:`` section, yields the
    defaults. A manifest that is not valid YAML also yields the defaults,
    since the version can still be read line by line.

    Raises:
        ConfigValidationError: If the section is present but invalid
    """
    if pubspec_path is None:
        pubspec_path = find_pubspec()
    if pubspec_path is None or not pubspec_path.is_file():
        return TagbumpConfig()

    try:
        data = load_pubspec_yaml(pubspec_path)
    except ConfigError:
        return TagbumpConfig()

    try:
        return TagbumpConfig.model_validate(extract_tagbump_config(data))
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid '{CONFIG_SECTION}' configuration: {e}") from e


def resolve_api_settings(
    config: ChangelogConfig,
    env: Mapping[str, str] | None = None,
) -> ApiSettings:
    """Resolve the API key and base URL.

    Explicit configuration wins, then environment variables
    (``ANTHROPIC_API_KEY``, then ``ANTHROPIC_AUTH_TOKEN`` for the key and
    ``ANTHROPIC_BASE_URL`` for the URL), then the default endpoint.
    """
    env = os.environ if env is None else env

    api_key = config.api_key
    if not api_key:
        api_key = next((env[name] for name in API_KEY_ENV_VARS if env.get(name)), None)

    base_url = config.base_url or env.get(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL
    return ApiSettings(api_key=api_key, base_url=base_url)
