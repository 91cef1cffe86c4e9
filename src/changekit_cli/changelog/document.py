"""Changelog document model and section lookup.

The changelog is handled as an explicit immutable value: commands load a
:class:`ChangelogDocument`, derive a new one through pure text
transformations, and only then save it. Nothing is streamed to disk
mid-operation.

Recognised structure (Keep a Changelog)::

    # Changelog

    ## [Unreleased]

    ### Added
    ...

    ## [1.2.0] - 2026-01-31
    ...

    [Unreleased]: https://example.com/compare/v1.2.0...HEAD
    [1.2.0]: https://example.com/compare/v1.1.0...v1.2.0
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from enum import StrEnum
from pathlib import Path

from changekit_cli.core.constants import PENDING_MARKER
from changekit_cli.core.fileio import atomic_write_text
from changekit_cli.exceptions import MissingChangelog, MissingPendingSection

logger = logging.getLogger(__name__)

HEADER_RE = re.compile(r"^##\s+\[(?P<label>[^\]]+)\](?:\s*-\s*(?P<date>.+?))?\s*$")
LINK_RE = re.compile(r"^\[(?P<label>[^\]]+)\]:\s*(?P<url>\S+)\s*$")
SUBSECTION_PREFIX = "### "


class ReleaseState(StrEnum):
    """Whether the pending section holds unreleased content."""

    PENDING = "pending"
    RELEASED = "released"


@dataclass(frozen=True)
class ChangelogDocument:
    path: Path
    text: str

    @classmethod
    def load(cls, path: Path) -> "ChangelogDocument":
        if not path.is_file():
            raise MissingChangelog(path)
        return cls(path=path, text=path.read_text(encoding="utf-8"))

    @property
    def lines(self) -> list[str]:
        return self.text.splitlines()

    def with_text(self, text: str) -> "ChangelogDocument":
        return replace(self, text=text)

    def save(self) -> None:
        atomic_write_text(self.path, self.text)


@dataclass(frozen=True)
class Section:
    """Line span of one version section.

    ``header`` is the index of the ``## [...]`` line; ``end`` is the
    exclusive index of the first line after the section body.
    """

    label: str
    header: int
    end: int
    date: str | None = None

    @property
    def body_start(self) -> int:
        return self.header + 1


def links_start(lines: list[str]) -> int:
    """Index of the first line of the trailing link block (or ``len(lines)``).

    The block is the last run of link lines (blank lines allowed between
    them) below the last ``## [...]`` header. Text after the block, such
    as a footer comment, does not belong to any section.
    """
    floor = 0
    for index, line in enumerate(lines):
        if HEADER_RE.match(line):
            floor = index + 1

    end = len(lines)
    while end > floor and not LINK_RE.match(lines[end - 1]):
        end -= 1
    if end == floor:
        return len(lines)

    start = end - 1
    while start > floor and (not lines[start - 1].strip() or LINK_RE.match(lines[start - 1])):
        start -= 1
    while not LINK_RE.match(lines[start]):
        start += 1
    return start


def iter_sections(lines: list[str]) -> list[Section]:
    """Return every ``## [label]`` section in document order."""
    stop = links_start(lines)
    headers: list[tuple[int, re.Match[str]]] = []
    for index, line in enumerate(lines[:stop]):
        match = HEADER_RE.match(line)
        if match is not None:
            headers.append((index, match))

    sections: list[Section] = []
    for position, (index, match) in enumerate(headers):
        end = headers[position + 1][0] if position + 1 < len(headers) else stop
        sections.append(
            Section(
                label=match.group("label").strip(),
                header=index,
                end=end,
                date=match.group("date"),
            )
        )
    return sections


def find_section(lines: list[str], label: str) -> Section | None:
    for section in iter_sections(lines):
        if section.label == label:
            return section
    return None


def find_pending_section(
    lines: list[str],
    *,
    marker: str = PENDING_MARKER,
    path: Path | None = None,
) -> Section:
    """Locate the pending-marker section.

    When the marker appears more than once the first occurrence is used.

    Raises:
        MissingPendingSection: If no ``## [<marker>]`` header exists
    """
    matches = [section for section in iter_sections(lines) if section.label == marker]
    if not matches:
        raise MissingPendingSection(path, marker)
    if len(matches) > 1:
        logger.warning(
            "Found %d '## [%s]' headers; using the first one (line %d)",
            len(matches),
            marker,
            matches[0].header + 1,
        )
    return matches[0]


def trim_blank_edges(lines: list[str]) -> list[str]:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


def section_content(lines: list[str], section: Section) -> list[str]:
    """Body lines of *section* without surrounding blank lines."""
    return trim_blank_edges(lines[section.body_start:section.end])


def has_subsections(content: list[str]) -> bool:
    return any(line.startswith(SUBSECTION_PREFIX) for line in content)


def released_versions(text: str, *, marker: str = PENDING_MARKER) -> list[str]:
    """Released version labels in document order (newest first)."""
    return [section.label for section in iter_sections(text.splitlines()) if section.label != marker]


def release_state(text: str, *, marker: str = PENDING_MARKER) -> tuple[ReleaseState, str | None]:
    """Classify the document for the release state machine.

    Returns:
        ``(PENDING, latest)`` when the pending section holds content,
        otherwise ``(RELEASED, latest)``; ``latest`` is the newest released
        version or None
    """
    lines = text.splitlines()
    pending = find_pending_section(lines, marker=marker)
    versions = released_versions(text, marker=marker)
    latest = versions[0] if versions else None
    if section_content(lines, pending):
        return ReleaseState.PENDING, latest
    return ReleaseState.RELEASED, latest


def extract_release_notes(text: str, version: str) -> str | None:
    """Return the content stored under ``## [<version>]`` or None."""
    lines = text.splitlines()
    section = find_section(lines, version)
    if section is None:
        return None
    content = section_content(lines, section)
    return "\n".join(content) + "\n" if content else ""


def join_lines(lines: list[str]) -> str:
    return "\n".join(lines).rstrip("\n") + "\n"


__all__ = [
    "ChangelogDocument",
    "HEADER_RE",
    "LINK_RE",
    "ReleaseState",
    "Section",
    "extract_release_notes",
    "find_pending_section",
    "find_section",
    "has_subsections",
    "iter_sections",
    "join_lines",
    "links_start",
    "release_state",
    "released_versions",
    "section_content",
    "trim_blank_edges",
]
