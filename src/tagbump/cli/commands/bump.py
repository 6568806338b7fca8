"""Implementation of the 'bump' command.

The bump command tags the current version (if untagged) and writes the
next version to pubspec.yaml.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.panel import Panel

from tagbump.config import load_config
from tagbump.config.loader import find_pubspec
from tagbump.core.release import bump_pubspec
from tagbump.core.tagging import TagPrefix, TagSyncState
from tagbump.exceptions import TagbumpError

if TYPE_CHECKING:
    from rich.console import Console

    from tagbump.core.version import VersionPart


def run_bump(
    part: VersionPart,
    pubspec: str | None,
    tag_prefix: TagPrefix | None,
    dry_run: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the bump command.

    Args:
        part: Version part to increment
        pubspec: Optional path to pubspec.yaml
        tag_prefix: Tag naming convention, overrides configuration
        dry_run: Only report the next version
        console: Console for standard output
        err_console: Console for error output
    """
    # Config and bump target come from the same manifest
    manifest = Path(pubspec) if pubspec else find_pubspec()

    # Load configuration
    try:
        config = load_config(manifest)
    except TagbumpError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    pubspec_path = manifest or config.bump.pubspec
    effective_prefix = tag_prefix or config.bump.tag_prefix

    try:
        result = bump_pubspec(pubspec_path, part, effective_prefix, dry_run=dry_run)
    except TagbumpError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e

    if dry_run:
        console.print(
            Panel(
                f"Would bump [cyan]{result.previous}[/] to [green]{result.current}[/] "
                f"in [cyan]{pubspec_path}[/]\n"
                "and tag the current version if it is untagged.",
                title="[yellow]Dry Run Preview[/]",
                border_style="yellow",
            )
        )
        return

    sync = result.tag_sync
    if sync is not None and sync.state == TagSyncState.CREATED:
        console.print(f"  [green]✓[/] Created lightweight tag [cyan]{sync.tag}[/]")
    elif sync is not None and sync.state == TagSyncState.ALREADY_TAGGED:
        console.print(f"  [dim]Tag {sync.tag} already exists for {sync.version}[/]")
    elif sync is not None:
        console.print(f"  [yellow]Skipped tagging ({sync.state.value.replace('_', ' ')})[/]")

    console.print(f"Bumped version to: [green]{result.current}[/]")
