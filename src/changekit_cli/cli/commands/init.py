"""``changekit init`` command."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from changekit_cli.cli.helpers import console, exit_with_error, project_root, relative_to_root
from changekit_cli.core.config import config_path, load_project_config, save_project_config
from changekit_cli.core.constants import PENDING_MARKER
from changekit_cli.core.fileio import atomic_write_text
from changekit_cli.exceptions import ChangekitError

CHANGELOG_TEMPLATE = f"""# Changelog

All notable changes to this project will be documented in this file.

The format is based on [Keep a Changelog](https://keepachangelog.com/en/1.1.0/),
and this project adheres to [Semantic Versioning](https://semver.org/spec/v2.0.0.html).

## [{PENDING_MARKER}]
"""

FRAGMENTS_README = """# Changelog fragments

Each pull request adds one file here, named after its issue number
(for example `123.md`). Create one with `changekit create-fragment`.

```markdown
---
type: added
issue: 123
pr: 456
title: "Short summary of the change"
---

- What changed
- Why it matters to users
```

Valid types: added, changed, deprecated, removed, fixed, security.
`changekit aggregate` merges every fragment into the changelog and
deletes the files. This README is never treated as a fragment.
"""


def _write_if_missing(path: Path, content: str, root: Path) -> None:
    label = escape(relative_to_root(path, root))
    if path.exists():
        console.print(f"[dim]-[/dim] {label} already exists")
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    atomic_write_text(path, content)
    console.print(f"[green]✓[/green] Created {label}")


def init(
    ctx: typer.Context,
    fragments_dir: Optional[str] = typer.Option(None, "--fragments-dir", help="Directory holding pending fragments"),
    changelog: Optional[str] = typer.Option(None, "--changelog", help="Changelog file path"),
    version_file: Optional[str] = typer.Option(
        None,
        "--version-file",
        help="File carrying the project version (pyproject.toml or package.json)",
    ),
    repository_url: Optional[str] = typer.Option(
        None,
        "--repository-url",
        help="Base URL used for comparison links, e.g. https://github.com/owner/repo",
    ),
    tag_prefix: Optional[str] = typer.Option(None, "--tag-prefix", help="Prefix for release tags"),
) -> None:
    """Set up changekit in the project: config, fragments directory and changelog.

    Existing files are left alone; options given here update the config.
    """
    root = project_root(ctx)
    try:
        config = load_project_config(root)
        if fragments_dir is not None:
            config.fragments_dir = fragments_dir.strip()
        if changelog is not None:
            config.changelog = changelog.strip()
        if version_file is not None:
            config.version_file = version_file.strip()
        if repository_url is not None:
            config.repository_url = repository_url.strip().rstrip("/") or None
        if tag_prefix is not None:
            config.tag_prefix = tag_prefix.strip()

        existed = config_path(root).exists()
        save_project_config(config)
    except (ChangekitError, OSError) as exc:
        exit_with_error(exc)

    verb = "Updated" if existed else "Created"
    console.print(f"[green]✓[/green] {verb} {escape(relative_to_root(config_path(root), root))}")

    try:
        _write_if_missing(config.fragments_path / "README.md", FRAGMENTS_README, root)
        _write_if_missing(config.changelog_path, CHANGELOG_TEMPLATE, root)
    except OSError as exc:
        exit_with_error(exc)

    console.print("\n[bold green]changekit is ready.[/bold green]")
    console.print('Run "changekit create-fragment" to record your first change.\n')


__all__ = ["CHANGELOG_TEMPLATE", "FRAGMENTS_README", "init"]
