"""``changekit aggregate`` command."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape
from rich.rule import Rule

from changekit_cli.changelog.aggregate import AggregationReport, aggregate_fragments
from changekit_cli.cli.helpers import console, exit_with_error, project_config, relative_to_root
from changekit_cli.core.constants import PENDING_MARKER
from changekit_cli.exceptions import ChangekitError


def _print_failures(report: AggregationReport) -> None:
    for failure in report.failures:
        console.print(f"[yellow]Warning:[/yellow] Failed to parse {escape(str(failure))}")


def _print_fragments(report: AggregationReport) -> None:
    console.print(f"Found {len(report.fragments)} fragment(s):")
    for fragment in report.fragments:
        console.print(
            f"  - {escape(fragment.filename or '?')}: "
            f"{escape(f'[{fragment.type}]')} {escape(fragment.title)} (#{fragment.issue})"
        )
    console.print()


def _print_preview(report: AggregationReport) -> None:
    console.print("\n[bold]Preview of aggregated changelog:[/bold]\n")
    console.print(Rule())
    console.print(report.section.rstrip("\n"), markup=False, highlight=False)
    console.print(Rule())
    console.print("\n[dim](No changes made - dry-run mode)[/dim]\n")
    if report.retire is not None:
        console.print(f"Would delete {len(report.retire.planned)} fragment file(s):")
        for path in report.retire.planned:
            console.print(f"   - {escape(path.name)}")


def _print_applied(report: AggregationReport, root: Path) -> None:
    console.print(f"[green]✓[/green] {escape(relative_to_root(report.changelog_path, root))} updated successfully")
    if report.retire is None:
        return
    for failure in report.retire.failures:
        console.print(f"[yellow]Warning:[/yellow] {escape(str(failure))}")
    console.print(f"Deleted {len(report.retire.deleted)} fragment file(s)")


def aggregate(
    ctx: typer.Context,
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview the merged section without changing any file"),
) -> None:
    """Merge pending fragments into the changelog and delete them."""
    config = project_config(ctx)

    console.print("\n[bold]Aggregating changelog fragments...[/bold]\n")
    try:
        report = aggregate_fragments(config, dry_run=dry_run)
    except ChangekitError as exc:
        exit_with_error(exc)

    _print_failures(report)
    if report.is_noop:
        console.print(f"No changelog fragments found in {escape(config.fragments_dir)}/")
        console.print('   Use "changekit create-fragment" to create a fragment.\n')
        return

    _print_fragments(report)
    if report.had_pending_content:
        verb = "would be" if dry_run else "were"
        console.print(
            f"[yellow]Warning:[/yellow] {escape(f'[{PENDING_MARKER}]')} section already has content; "
            f"the aggregated fragments {verb} prepended.\n"
        )

    if dry_run:
        _print_preview(report)
        return

    _print_applied(report, config.root)
    console.print("\n[green]Aggregation complete![/green]\n")


__all__ = ["aggregate"]
