"""Implementation of the 'changelog' command.

Finds the release tag and its predecessor, collects the commit log
between them and writes a summarized changelog.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from tagbump.ai.client import MessagesClient
from tagbump.config import load_config, resolve_api_settings
from tagbump.core.changelog import compose_changelog
from tagbump.core.commits import collect_commit_log, previous_tag_boundary
from tagbump.core.language import resolve_language
from tagbump.core.tags import resolve_change_range
from tagbump.exceptions import TagbumpError
from tagbump.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from tagbump.config.models import ChangelogConfig


def _apply_overrides(config: ChangelogConfig, **overrides: object) -> ChangelogConfig:
    """Return config with every non-None override applied."""
    updates = {key: value for key, value in overrides.items() if value is not None}
    return config.model_copy(update=updates)


def run_changelog(
    path: str | None,
    tag: str | None,
    output: str | None,
    max_commits: int | None,
    model: str | None,
    api_key: str | None,
    base_url: str | None,
    prompt: str | None,
    lang: str | None,
    timeout: float | None,
    err_console: Console,
) -> None:
    """Run the changelog command.

    Args:
        path: Optional path to project directory
        tag: Release tag, auto-detected from HEAD if None
        output: File to write, stdout if None
        max_commits: Maximum number of commits to include
        model: Model identifier
        api_key: API key, falls back to the environment
        base_url: API base URL, falls back to the environment
        prompt: Custom prompt template
        lang: Changelog language
        timeout: Request timeout in seconds
        err_console: Console for progress and error output
    """
    project_path = Path(path) if path else Path.cwd()

    # Load configuration
    try:
        config = load_config(project_path / "pubspec.yaml")
    except TagbumpError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    settings = _apply_overrides(
        config.changelog,
        max_commits=max_commits,
        model=model,
        api_key=api_key,
        base_url=base_url,
        prompt=prompt,
        lang=lang,
        timeout=timeout,
    )
    api = resolve_api_settings(settings)

    try:
        language = resolve_language(settings.lang)
        repo = GitRepository.discover(project_path)
        change_range = resolve_change_range(repo, tag)

        err_console.print(
            f"Generating changelog for [cyan]{change_range.current_tag}[/] "
            f"(since [cyan]{change_range.since}[/])..."
        )

        log_lines = collect_commit_log(
            repo,
            stop_at=previous_tag_boundary(repo, change_range.previous_tag),
            max_commits=settings.max_commits,
        )
    except TagbumpError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e

    client = None
    if api.has_credentials:
        client = MessagesClient(
            api_key=api.api_key,
            base_url=api.base_url,
            model=settings.model,
            max_tokens=settings.max_tokens,
            timeout=settings.timeout,
        )

    changelog = compose_changelog(
        change_range, log_lines, language, client, template=settings.prompt
    )

    if output is None:
        sys.stdout.write(f"{changelog}\n")
        return

    output_path = Path(output)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(changelog, encoding="utf-8")
    except OSError as e:
        err_console.print(f"[red]Error:[/] Failed to write {output_path}: {e}")
        raise SystemExit(1) from e
    err_console.print(f"Changelog written to: [cyan]{output_path}[/]")
