#!/usr/bin/env python3
"""
changekit CLI - changelog fragments and releases.

Usage:
    changekit init
    changekit create-fragment --issue 123 --type added --title "New widget"
    changekit aggregate --dry-run
    changekit release --type minor
    changekit notes 1.2.0

Or install globally:
    pip install changekit-cli
    changekit --help
"""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version as _pkg_version
from pathlib import Path
from typing import Optional

import typer

from changekit_cli.cli.commands import register_commands
from changekit_cli.cli.helpers import console

try:
    __version__ = _pkg_version("changekit-cli")
except PackageNotFoundError:
    __version__ = "0.0.0"

app = typer.Typer(
    name="changekit",
    help="Collect changelog fragments and cut versioned releases",
    add_completion=False,
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"changekit {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        help="Project root (defaults to the nearest directory with .changekit/, .git or CHANGELOG.md)",
        file_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    show_version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Manage changelog fragments and releases."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    ctx.obj = {"root": root}


register_commands(app)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
