"""``changekit release`` and ``changekit notes`` commands."""

from __future__ import annotations

from typing import Optional

import typer
from rich.markup import escape
from rich.panel import Panel

from changekit_cli.changelog.document import ChangelogDocument, extract_release_notes
from changekit_cli.cli.helpers import console, exit_with_error, print_json, project_config, relative_to_root
from changekit_cli.core.constants import PENDING_MARKER
from changekit_cli.exceptions import ChangekitError, EmptyRelease, InvalidVersion
from changekit_cli.release.engine import apply_release, is_releasable, pending_release_content, plan_release
from changekit_cli.release.metadata import read_project_version
from changekit_cli.release.version import BumpType, bump_version

_MENU = (
    ("1", BumpType.MAJOR, "Major (breaking changes)"),
    ("2", BumpType.MINOR, "Minor (new features)     "),
    ("3", BumpType.PATCH, "Patch (bug fixes)        "),
)
_CUSTOM_CHOICE = "4"


def _prompt_version_choice(current: str) -> tuple[BumpType | None, str | None]:
    """Ask for the release type; returns ``(bump, explicit_version)``."""
    console.print("\nWhat type of release is this?")
    for key, bump, label in _MENU:
        console.print(f"  {key}) {label} - {current} → {bump_version(current, bump)}")
    console.print(f"  {_CUSTOM_CHOICE}) Custom version\n")

    while True:
        choice = typer.prompt("Enter choice (1-4)").strip()
        for key, bump, _label in _MENU:
            if choice == key:
                return bump, None
        if choice == _CUSTOM_CHOICE:
            return None, typer.prompt("Enter custom version (e.g., 1.2.3)").strip()
        typer.echo(f"Error: Invalid choice '{choice}'. Enter 1-4.")


def _confirm_or_cancel(message: str) -> None:
    if not typer.confirm(message, default=False):
        console.print("Release cancelled.")
        raise typer.Exit(0)


def release(
    ctx: typer.Context,
    custom_version: Optional[str] = typer.Option(
        None,
        "--custom-version",
        envvar="CUSTOM_VERSION",
        help="Explicit version to release (overrides --type)",
    ),
    release_type: Optional[str] = typer.Option(
        None,
        "--type",
        "-t",
        envvar="RELEASE_TYPE",
        help="Version bump: major, minor or patch",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        envvar="FORCE_RELEASE",
        help="Release even if the pending section is empty",
    ),
    skip_prompts: bool = typer.Option(
        False,
        "--yes",
        "-y",
        envvar="SKIP_PROMPTS",
        help="Never prompt; a release type or version must then be given",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the release without writing files"),
    as_json: bool = typer.Option(False, "--json", help="Render the release result as JSON (implies --yes)"),
) -> None:
    """Promote the pending changelog section to a new dated version."""
    config = project_config(ctx)
    show = not as_json
    # JSON output must stay parseable, so never prompt on stdout.
    skip_prompts = skip_prompts or as_json

    try:
        current = read_project_version(config.version_path)
        if show:
            console.print(f"Current version: [green]{escape(current)}[/green]")

        bump: str | None = release_type
        explicit = custom_version
        if not explicit and not bump:
            if skip_prompts:
                raise InvalidVersion(
                    "A release type is required in non-interactive mode. "
                    "Use --type major|minor|patch (RELEASE_TYPE) or --custom-version."
                )
            bump, explicit = _prompt_version_choice(current)

        content = pending_release_content(
            ChangelogDocument.load(config.changelog_path).text,
            path=config.changelog_path,
        )
        if not is_releasable(content) and not force:
            if skip_prompts:
                raise EmptyRelease(PENDING_MARKER)
            console.print(f"[yellow]Warning:[/yellow] {escape(f'[{PENDING_MARKER}]')} section appears empty")
            _confirm_or_cancel("Continue anyway?")
            force = True

        plan = plan_release(config, bump=bump, explicit=explicit, force=force)
    except ChangekitError as exc:
        exit_with_error(exc)

    if show:
        console.print(f"\n[green]Releasing version: {escape(plan.version)}[/green]\n")
        console.print("[bold]Changes to be released:[/bold]\n")
        console.print(plan.notes.rstrip("\n") or "(none)", markup=False, highlight=False)
        console.print()

    if not skip_prompts and not dry_run:
        _confirm_or_cancel("Proceed with release?")

    if dry_run:
        if show:
            console.print("[dim](No changes made - dry-run mode)[/dim]")
    else:
        try:
            apply_release(plan)
        except OSError as exc:
            exit_with_error(f"Failed to write release files: {exc}")
        if show:
            console.print(f"[green]✓[/green] Updated {escape(relative_to_root(plan.changelog.path, config.root))}")
            console.print(f"[green]✓[/green] Updated {escape(relative_to_root(plan.metadata_path, config.root))}")
            if not plan.links_updated:
                console.print("[yellow]Warning:[/yellow] comparison links not updated (no repository URL)")

    if as_json:
        payload = plan.to_dict()
        payload["dry_run"] = dry_run
        print_json(payload)
        return

    console.print(
        Panel(
            escape(plan.notes.rstrip("\n")) or "(empty)",
            title=f"Release notes for {escape(plan.tag)}",
            border_style="cyan",
        )
    )
    console.print(f"Version:  [green]{escape(plan.version)}[/green]")
    console.print(f"Tag:      [green]{escape(plan.tag)}[/green]")


def notes(
    ctx: typer.Context,
    version: str = typer.Argument(..., help="Released version, e.g. 1.2.0"),
) -> None:
    """Print the changelog notes recorded for VERSION."""
    config = project_config(ctx)
    try:
        document = ChangelogDocument.load(config.changelog_path)
    except ChangekitError as exc:
        exit_with_error(exc)

    content = extract_release_notes(document.text, version)
    if content is None:
        typer.echo(f"No changelog entry found for {version}.")
        return
    typer.echo(content, nl=False)


__all__ = ["notes", "release"]
