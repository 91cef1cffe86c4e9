"""Insert a rendered section directly below the pending-marker header."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from changekit_cli.core.constants import PENDING_MARKER

from .document import find_pending_section, join_lines, section_content, trim_blank_edges

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeResult:
    """Merged document text plus what the merge found and inserted."""

    text: str
    inserted: str
    had_pending_content: bool


def merge_section(
    text: str,
    block: str,
    *,
    marker: str = PENDING_MARKER,
    path: Path | None = None,
) -> MergeResult:
    """Return *text* with *block* inserted right after ``## [<marker>]``.

    Content already under the marker is kept below the new block; this is
    reported through ``had_pending_content`` and a logged warning rather
    than treated as an error. The input text is never modified.

    Raises:
        MissingPendingSection: If the marker header is absent
    """
    lines = text.splitlines()
    pending = find_pending_section(lines, marker=marker, path=path)

    had_pending_content = bool(section_content(lines, pending))
    if had_pending_content:
        logger.warning(
            "[%s] section already has content; new entries will be prepended",
            marker,
        )

    block_lines = trim_blank_edges(block.splitlines())
    rest = trim_blank_edges(lines[pending.body_start:])
    merged = lines[:pending.body_start] + [""] + block_lines + [""] + rest
    return MergeResult(
        text=join_lines(merged),
        inserted=join_lines(block_lines) if block_lines else "",
        had_pending_content=had_pending_content,
    )


__all__ = ["MergeResult", "merge_section"]
