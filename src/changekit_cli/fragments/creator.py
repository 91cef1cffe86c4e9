"""Fragment creation: field validation, rendering and persistence.

Both the interactive prompts and the structured ``--issue/--type`` path
produce a :class:`FragmentDraft` through the validators here, so every
written fragment parses back to the same ``(type, issue, pr, title, body)``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from changekit_cli.core.constants import FRAGMENT_DELIMITER, FRAGMENT_EXTENSION
from changekit_cli.exceptions import FragmentExists, InvalidFragmentInput

from .models import MENU_ORDER, ChangeType, FragmentDraft, parse_change_type

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Change description"
DEFAULT_BODY = ("Brief description of the change",)
BODY_SENTINEL = "done"


def validate_issue(value: str | int) -> int:
    """Return *value* as a positive integer issue number."""
    text = str(value).strip()
    if not text.isdecimal() or int(text) <= 0:
        raise InvalidFragmentInput(
            f"Issue number must be a positive integer, got '{value}'"
        )
    return int(text)


def validate_pr(value: str | int | None, *, allow_zero: bool = True) -> int:
    """Return the PR number; empty or missing means 0 (not yet known)."""
    if value is None:
        return 0
    text = str(value).strip()
    if not text:
        return 0
    if not text.isdecimal() or (int(text) == 0 and not allow_zero):
        qualifier = "a non-negative" if allow_zero else "a positive"
        raise InvalidFragmentInput(f"PR number must be {qualifier} integer, got '{value}'")
    return int(text)


def resolve_change_type(value: str, *, allow_index: bool = False) -> ChangeType:
    """Resolve a change type by name, or by 1-based menu index.

    Args:
        value: User input, e.g. ``"fixed"`` or ``"2"``
        allow_index: Accept menu positions from :data:`MENU_ORDER`

    Raises:
        InvalidFragmentInput: If the value matches neither form
    """
    text = value.strip()
    if allow_index and text.isdecimal():
        index = int(text)
        if 1 <= index <= len(MENU_ORDER):
            return MENU_ORDER[index - 1]
    change_type = parse_change_type(text)
    if change_type is None:
        valid = ", ".join(t.value for t in ChangeType)
        raise InvalidFragmentInput(
            f"Invalid change type '{value}'. Must be one of: {valid}"
        )
    return change_type


def validate_title(value: str) -> str:
    title = value.strip()
    if not title:
        raise InvalidFragmentInput("Title cannot be empty")
    if "\n" in title or "\r" in title:
        raise InvalidFragmentInput("Title must be a single line")
    return title


def normalize_body(lines: Iterable[str]) -> tuple[str, ...]:
    """Split, strip and drop blank body lines; reject an empty result.

    Every entry becomes one bullet per physical line, so a value carrying
    embedded newlines is written and read back as the same lines.
    """
    body = tuple(
        part.strip()
        for line in lines
        if line
        for part in line.splitlines()
        if part.strip()
    )
    if not body:
        raise InvalidFragmentInput("Description cannot be empty")
    return body


def collect_body_lines(read_line: Callable[[], str | None]) -> tuple[str, ...]:
    """Read body lines until an empty line, ``done``, or end of input.

    *read_line* returns None at end of input. This is the line loop behind
    the interactive prompt; callers with a ready list can skip it and call
    :func:`normalize_body` directly.
    """
    lines: list[str] = []
    while True:
        line = read_line()
        if line is None:
            break
        stripped = line.strip()
        if not stripped or stripped.lower() == BODY_SENTINEL:
            break
        lines.append(stripped)
    return normalize_body(lines)


def build_draft(
    *,
    issue: str | int | None,
    change_type: str | None,
    pr: str | int | None = None,
    title: str | None = None,
    body: Iterable[str] | None = None,
) -> FragmentDraft:
    """Validate structured (non-interactive) input into a draft.

    ``issue`` and ``change_type`` are required; title and body fall back
    to placeholder text and ``pr`` to 0.
    """
    if issue is None or change_type is None:
        raise InvalidFragmentInput(
            "Both --issue and --type are required for non-interactive mode"
        )
    body_lines = list(body) if body is not None else []
    return FragmentDraft(
        type=resolve_change_type(change_type),
        issue=validate_issue(issue),
        title=validate_title(title) if title is not None else DEFAULT_TITLE,
        body=normalize_body(body_lines) if body_lines else DEFAULT_BODY,
        pr=validate_pr(pr),
    )


def render_fragment(draft: FragmentDraft) -> str:
    """Render fragment file content for *draft*."""
    description = "\n".join(f"- {line}" for line in draft.body)
    return (
        f"{FRAGMENT_DELIMITER}\n"
        f"type: {draft.type.value}\n"
        f"issue: {draft.issue}\n"
        f"pr: {draft.pr}\n"
        f'title: "{draft.title}"\n'
        f"{FRAGMENT_DELIMITER}\n"
        "\n"
        f"{description}\n"
    )


def fragment_path(fragments_dir: Path, issue: int) -> Path:
    """One file per issue: ``<fragments_dir>/<issue>.md``."""
    return fragments_dir / f"{issue}{FRAGMENT_EXTENSION}"


def write_fragment(fragments_dir: Path, draft: FragmentDraft, *, overwrite: bool = True) -> Path:
    """Write *draft* to its issue-derived path, creating the directory.

    Raises:
        FragmentExists: If the file exists and ``overwrite`` is False
    """
    path = fragment_path(fragments_dir, draft.issue)
    if path.exists() and not overwrite:
        raise FragmentExists(path)
    fragments_dir.mkdir(parents=True, exist_ok=True)
    if path.exists():
        logger.info("Overwriting existing fragment %s", path.name)
    path.write_text(render_fragment(draft), encoding="utf-8")
    return path


__all__ = [
    "BODY_SENTINEL",
    "DEFAULT_BODY",
    "DEFAULT_TITLE",
    "build_draft",
    "collect_body_lines",
    "fragment_path",
    "normalize_body",
    "render_fragment",
    "resolve_change_type",
    "validate_issue",
    "validate_pr",
    "validate_title",
    "write_fragment",
]
