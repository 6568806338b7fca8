"""Command-line interface for tagbump."""

from __future__ import annotations

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from tagbump import __version__
from tagbump.cli.commands.bump import run_bump
from tagbump.cli.commands.changelog import run_changelog
from tagbump.core.tagging import TagPrefix
from tagbump.core.version import VersionPart

app = typer.Typer(
    name="tagbump",
    help="Tag the current version, bump pubspec.yaml and write changelogs.",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"tagbump {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version."),
    ] = None,
) -> None:
    _configure_logging(verbose)


@app.command()
def bump(
    part: Annotated[VersionPart, typer.Argument(help="The part of the version to increment.")],
    pubspec: Annotated[
        str | None, typer.Option("--pubspec", help="Path to pubspec.yaml.")
    ] = None,
    tag_prefix: Annotated[
        TagPrefix | None,
        typer.Option(
            "--tag-prefix",
            help="Tag prefix for the auto-created tag: 'v' for v1.2.3, 'none' for 1.2.3.",
        ),
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Show the next version without changing anything.")
    ] = False,
) -> None:
    """Tag the current version if needed, then bump it."""
    run_bump(part, pubspec, tag_prefix, dry_run, console, err_console)


@app.command()
def changelog(
    tag: Annotated[
        str | None, typer.Option("--tag", help="Current release tag. Auto-detected if omitted.")
    ] = None,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output file path. Prints to stdout if omitted."),
    ] = None,
    max_commits: Annotated[
        int | None, typer.Option("--max-commits", min=1, help="Max number of commits to include.")
    ] = None,
    model: Annotated[str | None, typer.Option("--model", help="Model to use.")] = None,
    api_key: Annotated[
        str | None,
        typer.Option(
            "--api-key", help="API key. Falls back to ANTHROPIC_API_KEY, then ANTHROPIC_AUTH_TOKEN."
        ),
    ] = None,
    base_url: Annotated[
        str | None,
        typer.Option("--base-url", help="API base URL. Falls back to ANTHROPIC_BASE_URL."),
    ] = None,
    prompt: Annotated[
        str | None,
        typer.Option(
            "--prompt",
            help="Custom prompt. {tag}, {prev_tag}, {git_log} and {lang} are replaced.",
        ),
    ] = None,
    lang: Annotated[
        str | None, typer.Option("--lang", help="Changelog language (name or ISO 639 code).")
    ] = None,
    timeout: Annotated[
        float | None, typer.Option("--timeout", min=0.1, help="API timeout in seconds.")
    ] = None,
    path: Annotated[str | None, typer.Option("--path", help="Project directory.")] = None,
) -> None:
    """Generate a changelog for the release tag on HEAD."""
    run_changelog(
        path,
        tag,
        output,
        max_commits,
        model,
        api_key,
        base_url,
        prompt,
        lang,
        timeout,
        err_console,
    )


def main() -> None:
    app()
