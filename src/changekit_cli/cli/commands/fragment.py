"""``changekit create-fragment`` command."""

from __future__ import annotations

from typing import Optional

import typer

from changekit_cli.cli.helpers import console, exit_with_error, project_config, relative_to_root
from changekit_cli.exceptions import ChangekitError
from changekit_cli.fragments.creator import build_draft, write_fragment
from changekit_cli.fragments.prompts import prompt_draft


def _structured_body(body: Optional[list[str]], description: Optional[str]) -> list[str] | None:
    lines = list(body or [])
    if description:
        # Scripts pass multi-line descriptions with a literal "\n" separator.
        lines.extend(description.split("\\n"))
    return lines or None


def create_fragment(
    ctx: typer.Context,
    issue: Optional[str] = typer.Option(None, "--issue", "-i", help="Issue number the change belongs to"),
    change_type: Optional[str] = typer.Option(
        None,
        "--type",
        "-t",
        help="Change type: added, changed, deprecated, removed, fixed, security",
    ),
    pr: Optional[str] = typer.Option(None, "--pr", help="Pull request number (0 or omitted if not known yet)"),
    title: Optional[str] = typer.Option(None, "--title", help="One-line summary of the change"),
    body: Optional[list[str]] = typer.Option(None, "--body", "-b", help="Description bullet (repeatable)"),
    description: Optional[str] = typer.Option(
        None,
        "--description",
        help="Description bullets separated by a literal \\n",
    ),
) -> None:
    """Create a changelog fragment, interactively or from options.

    Passing --issue or --type switches to non-interactive mode, which
    requires both and silently replaces an existing fragment for the issue.
    """
    config = project_config(ctx)
    fragments_dir = config.fragments_path

    if issue is not None or change_type is not None:
        try:
            draft = build_draft(
                issue=issue,
                change_type=change_type,
                pr=pr,
                title=title,
                body=_structured_body(body, description),
            )
            path = write_fragment(fragments_dir, draft, overwrite=True)
        except ChangekitError as exc:
            exit_with_error(exc)
        console.print(f"Fragment created: {relative_to_root(path, config.root)}")
        return

    console.print("\n[bold]Creating a changelog fragment[/bold]\n")
    try:
        draft = prompt_draft(fragments_dir)
        if draft is None:
            console.print("Cancelled.")
            raise typer.Exit(0)
        path = write_fragment(fragments_dir, draft, overwrite=True)
    except ChangekitError as exc:
        exit_with_error(exc)

    console.print(f"\n[green]✓[/green] Fragment created: {relative_to_root(path, config.root)}")
    console.print("\nNext steps:")
    console.print("  1. Review the fragment file")
    console.print("  2. Commit it with your changes")
    console.print("  3. Create a pull request\n")


__all__ = ["create_fragment"]
