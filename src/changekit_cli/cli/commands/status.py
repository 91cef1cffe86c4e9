"""``changekit status`` command."""

from __future__ import annotations

from typing import Any

import typer
from rich.markup import escape
from rich.table import Table

from changekit_cli.changelog.document import ChangelogDocument, release_state
from changekit_cli.cli.helpers import console, exit_with_error, print_json, project_config, relative_to_root
from changekit_cli.core.config import ProjectConfig
from changekit_cli.exceptions import ChangekitError
from changekit_cli.fragments.store import scan_fragments
from changekit_cli.release.metadata import read_project_version


def _collect_status(config: ProjectConfig) -> dict[str, Any]:
    scan = scan_fragments(config.fragments_path)
    document = ChangelogDocument.load(config.changelog_path)
    state, latest = release_state(document.text)

    try:
        current: str | None = read_project_version(config.version_path)
    except ChangekitError:
        current = None

    return {
        "root": str(config.root),
        "changelog": relative_to_root(config.changelog_path, config.root),
        "state": str(state),
        "latest_release": latest,
        "current_version": current,
        "fragments": [
            {
                "file": fragment.filename,
                "type": fragment.type,
                "issue": fragment.issue,
                "pr": fragment.pr,
                "title": fragment.title,
            }
            for fragment in scan.fragments
        ],
        "failures": [str(failure) for failure in scan.failures],
    }


def status(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Render status as JSON"),
) -> None:
    """Show pending fragments and the changelog release state."""
    config = project_config(ctx)
    try:
        payload = _collect_status(config)
    except ChangekitError as exc:
        exit_with_error(exc)

    if as_json:
        print_json(payload)
        return

    console.print(f"Changelog:       {escape(payload['changelog'])}")
    console.print(f"State:           [cyan]{payload['state']}[/cyan]")
    console.print(f"Latest release:  {escape(payload['latest_release'] or '(none)')}")
    console.print(f"Project version: {escape(payload['current_version'] or '(unknown)')}")
    console.print()

    if not payload["fragments"]:
        console.print(f"No pending fragments in {escape(config.fragments_dir)}/")
    else:
        table = Table(title="Pending Fragments", show_header=True, header_style="bold")
        table.add_column("File")
        table.add_column("Type")
        table.add_column("Issue", justify="right")
        table.add_column("Title")
        for item in payload["fragments"]:
            table.add_row(
                escape(item["file"] or "?"),
                escape(item["type"]),
                f"#{item['issue']}",
                escape(item["title"]),
            )
        console.print(table)

    for failure in payload["failures"]:
        console.print(f"[yellow]Warning:[/yellow] Failed to parse {escape(failure)}")


__all__ = ["status"]
