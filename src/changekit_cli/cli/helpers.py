"""Shared CLI helpers: console, project resolution and error reporting."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from changekit_cli.core.config import ProjectConfig, load_project_config
from changekit_cli.core.paths import resolve_project_root
from changekit_cli.exceptions import ChangekitError

console = Console(soft_wrap=True)


def project_root(ctx: typer.Context) -> Path:
    options = ctx.obj if isinstance(ctx.obj, dict) else {}
    return resolve_project_root(options.get("root"))


def project_config(ctx: typer.Context) -> ProjectConfig:
    """Load the project config for the invoked command or exit with 1."""
    try:
        return load_project_config(project_root(ctx))
    except ChangekitError as exc:
        exit_with_error(exc)


def exit_with_error(exc: Exception | str) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(str(exc))}")
    raise typer.Exit(1)


def print_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, sort_keys=True, default=str))


def relative_to_root(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


__all__ = [
    "console",
    "exit_with_error",
    "print_json",
    "project_config",
    "project_root",
    "relative_to_root",
]
