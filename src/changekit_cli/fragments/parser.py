"""Parse fragment text into :class:`Fragment` records.

Fragment layout::

    ---
    type: added
    issue: 42
    pr: 0
    title: "Short summary"
    ---

    - First body line
    - Second body line

The metadata block is a flat list of ``key: value`` lines, deliberately
not full YAML so titles containing colons need no escaping. This module
performs no I/O and no taxonomy validation of ``type``.
"""

from __future__ import annotations

import re
from pathlib import Path

from changekit_cli.core.constants import FRAGMENT_DELIMITER
from changekit_cli.exceptions import MalformedFragment

from .models import Fragment

_META_LINE_RE = re.compile(r"^(?P<key>\w+):\s*(?P<value>.*?)\s*$")
_INT_RE = re.compile(r"^\d+$")
_BULLET_RE = re.compile(r"^[-*]\s+")

REQUIRED_KEYS = ("type", "issue", "title")


def unquote(value: str) -> str:
    """Strip one pair of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def split_body_lines(body: str) -> tuple[str, ...]:
    """Return non-blank body lines with a leading bullet marker removed."""
    lines: list[str] = []
    for raw in body.splitlines():
        stripped = raw.strip()
        if not stripped:
            continue
        lines.append(_BULLET_RE.sub("", stripped, count=1))
    return tuple(lines)


def _split_frontmatter(text: str) -> tuple[list[str], str]:
    lines = text.lstrip("\ufeff").lstrip("\r\n").splitlines()
    if not lines or lines[0].strip() != FRAGMENT_DELIMITER:
        raise MalformedFragment(
            f"expected opening '{FRAGMENT_DELIMITER}' on the first line"
        )
    for index in range(1, len(lines)):
        if lines[index].strip() == FRAGMENT_DELIMITER:
            return lines[1:index], "\n".join(lines[index + 1:])
    raise MalformedFragment(f"missing closing '{FRAGMENT_DELIMITER}' delimiter")


def _parse_metadata(meta_lines: list[str]) -> dict[str, str]:
    metadata: dict[str, str] = {}
    for line in meta_lines:
        match = _META_LINE_RE.match(line.strip())
        if match is None:
            continue
        value = unquote(match.group("value")).strip()
        if value:
            metadata[match.group("key")] = value
    return metadata


def _parse_int(key: str, value: str, *, allow_zero: bool) -> int:
    if not _INT_RE.match(value):
        raise MalformedFragment(f"'{key}' must be an integer, found '{value}'")
    number = int(value)
    if number == 0 and not allow_zero:
        raise MalformedFragment(f"'{key}' must be a positive integer, found '{value}'")
    return number


def parse_fragment(text: str, source: Path | None = None) -> Fragment:
    """Parse one fragment.

    Args:
        text: Raw fragment file content
        source: Backing file, attached to the result and to any error

    Returns:
        The parsed Fragment

    Raises:
        MalformedFragment: If the delimiters, a required key, a valid
            issue number or the body are missing
    """
    try:
        meta_lines, body_text = _split_frontmatter(text)
        metadata = _parse_metadata(meta_lines)

        missing = [key for key in REQUIRED_KEYS if key not in metadata]
        if missing:
            raise MalformedFragment(f"missing required key(s): {', '.join(missing)}")

        issue = _parse_int("issue", metadata["issue"], allow_zero=False)
        pr = _parse_int("pr", metadata["pr"], allow_zero=True) if "pr" in metadata else 0

        body = split_body_lines(body_text)
        if not body:
            raise MalformedFragment("body is empty after the metadata block")
    except MalformedFragment as exc:
        if source is not None and exc.path is None:
            raise MalformedFragment(exc.reason, path=source) from None
        raise

    return Fragment(
        type=metadata["type"],
        issue=issue,
        title=metadata["title"],
        body=body,
        pr=pr,
        source=source,
    )


def read_fragment(path: Path) -> Fragment:
    """Read and parse a fragment file."""
    return parse_fragment(path.read_text(encoding="utf-8"), source=path)


__all__ = [
    "REQUIRED_KEYS",
    "parse_fragment",
    "read_fragment",
    "split_body_lines",
    "unquote",
]
