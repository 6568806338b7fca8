"""Changelog generation via a remote summarization API.

The commit log for a release is turned into a prompt and summarized.
When the summarization is unavailable for any reason the changelog
falls back to a plain bullet list of the commit log, so a changelog is
always produced.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tagbump.core.tags import INITIAL_RELEASE
from tagbump.exceptions import ApiCallFailedError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tagbump.ai.client import SummarizationClient
    from tagbump.core.tags import ChangeRange

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "English"

DEFAULT_PROMPT = """\
Write a concise changelog for release {tag} (since {prev_tag}).

Git log:
{git_log}

Rules:
- Group by: Features, Fixes, Improvements, Other
- Skip empty groups
- Use markdown with bullet points
- Keep it short and user-facing
- Write in {lang}
- Do NOT wrap in code blocks"""


def render_custom_prompt(
    template: str,
    tag: str,
    prev_tag: str | None,
    git_log: str,
    lang: str,
) -> str:
    """Substitute ``{tag}``, ``{prev_tag}``, ``{git_log}`` and ``{lang}``.

    Placeholders are replaced literally; any other braces in the template
    are left as they are.
    """
    return (
        template.replace("{tag}", tag)
        .replace("{prev_tag}", prev_tag or INITIAL_RELEASE)
        .replace("{git_log}", git_log)
        .replace("{lang}", lang)
    )


def build_prompt(tag: str, prev_tag: str | None, git_log: str, lang: str) -> str:
    """Build the built-in changelog prompt."""
    return render_custom_prompt(DEFAULT_PROMPT, tag, prev_tag, git_log, lang)


def generate_fallback_changelog(prev_tag: str | None, log_lines: Sequence[str]) -> str:
    """Generate a simple changelog when summarization is not available.

    Args:
        prev_tag: Previous release tag, None for the initial release
        log_lines: Formatted commit log lines, newest first

    Returns:
        Markdown with one bullet per commit log line, in order
    """
    bullets = "\n".join(f"- {line}" for line in log_lines)
    return f"## Changes since {prev_tag or INITIAL_RELEASE}\n\n{bullets}"


def compose_changelog(
    change_range: ChangeRange,
    log_lines: Sequence[str],
    lang: str,
    client: SummarizationClient | None,
    *,
    template: str | None = None,
) -> str:
    """Compose the changelog for a release.

    Args:
        change_range: Current and previous tag
        log_lines: Formatted commit log lines, newest first
        lang: Resolved language name for the summary
        client: Summarization client, None when no credentials are configured
        template: Custom prompt template, the built-in one is used if None

    Returns:
        The summarized changelog, or the fallback bullet list
    """
    git_log = "\n".join(log_lines)
    if template is not None:
        prompt = render_custom_prompt(
            template, change_range.current_tag, change_range.previous_tag, git_log, lang
        )
    else:
        prompt = build_prompt(change_range.current_tag, change_range.previous_tag, git_log, lang)

    if client is None:
        logger.warning("No API key configured. Falling back to git log.")
        return generate_fallback_changelog(change_range.previous_tag, log_lines)

    try:
        return client.summarize(prompt)
    except ApiCallFailedError as e:
        logger.warning("AI changelog failed: %s. Falling back to git log.", e)
        return generate_fallback_changelog(change_range.previous_tag, log_lines)
