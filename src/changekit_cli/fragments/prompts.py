"""Typer prompts for interactive fragment creation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

import typer

from changekit_cli.exceptions import InvalidFragmentInput

from .creator import (
    BODY_SENTINEL,
    collect_body_lines,
    fragment_path,
    resolve_change_type,
    validate_issue,
    validate_pr,
    validate_title,
)
from .models import MENU_ORDER, TAXONOMY, ChangeType, FragmentDraft

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _ask(prompt_msg: str, validate: Callable[[str], T], *, default: str | None = None) -> T:
    """Prompt until *validate* accepts the answer.

    Raises:
        typer.Abort: If the user cancels with Ctrl+C or input ends
    """
    while True:
        if default is None:
            response = typer.prompt(prompt_msg)
        else:
            response = typer.prompt(prompt_msg, default=default, show_default=False)
        try:
            return validate(response)
        except InvalidFragmentInput as exc:
            typer.echo(f"Error: {exc}. Try again.")


def display_change_types() -> None:
    typer.echo("\nAvailable change types:")
    for index, change_type in enumerate(MENU_ORDER, start=1):
        typer.echo(f"  {index}. {change_type.value:<12} - {TAXONOMY[change_type].description}")
    typer.echo("")


def prompt_issue() -> int:
    return _ask("Issue or PR number", validate_issue)


def prompt_change_type() -> ChangeType:
    display_change_types()
    return _ask(
        "Change type (number or name)",
        lambda value: resolve_change_type(value, allow_index=True),
    )


def prompt_pr() -> int:
    return _ask(
        "PR number (optional, press Enter to skip)",
        lambda value: validate_pr(value, allow_zero=False),
        default="",
    )


def prompt_title() -> str:
    return _ask("Brief title", validate_title)


def _read_body_line() -> str | None:
    try:
        return typer.prompt("-", default="", show_default=False, prompt_suffix=" ")
    except typer.Abort:
        return None


def prompt_body() -> tuple[str, ...]:
    """Read description bullets one per line.

    Raises:
        InvalidFragmentInput: If no lines were entered
    """
    typer.echo("\nDescription (bullet points, one per line):")
    typer.echo(f'(Press Enter on an empty line or type "{BODY_SENTINEL}" when finished)\n')
    return collect_body_lines(_read_body_line)


def confirm_overwrite(path: Path, issue: int) -> bool:
    return typer.confirm(
        f"Fragment for issue #{issue} already exists ({path.name}). Overwrite?",
        default=False,
    )


def prompt_draft(fragments_dir: Path) -> FragmentDraft | None:
    """Run the interactive questionnaire.

    Returns:
        The validated draft, or None when the user declines to overwrite
        an existing fragment
    """
    issue = prompt_issue()
    existing = fragment_path(fragments_dir, issue)
    if existing.exists() and not confirm_overwrite(existing, issue):
        logger.debug("Overwrite of %s declined", existing.name)
        return None

    change_type = prompt_change_type()
    pr = prompt_pr()
    title = prompt_title()
    body = prompt_body()
    return FragmentDraft(type=change_type, issue=issue, title=title, body=body, pr=pr)


__all__ = [
    "confirm_overwrite",
    "display_change_types",
    "prompt_body",
    "prompt_change_type",
    "prompt_draft",
    "prompt_issue",
    "prompt_pr",
    "prompt_title",
]
