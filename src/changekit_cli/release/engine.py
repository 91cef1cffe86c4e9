"""Release cut: move pending changelog content under a dated version header.

The transition is computed entirely in memory as a :class:`ReleasePlan`;
:func:`apply_release` is the only step that touches disk, so a failed
validation leaves the changelog and version metadata untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from changekit_cli.changelog.document import (
    ChangelogDocument,
    find_pending_section,
    has_subsections,
    join_lines,
    section_content,
    trim_blank_edges,
)
from changekit_cli.core.config import ProjectConfig
from changekit_cli.core.constants import PENDING_MARKER
from changekit_cli.core.fileio import atomic_write_text
from changekit_cli.exceptions import EmptyRelease

from .links import resolve_repository_url, update_compare_links
from .metadata import read_project_version, render_project_version
from .version import BumpType, resolve_new_version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReleasePlan:
    """A fully computed release, ready to be written."""

    previous_version: str
    version: str
    tag: str
    release_date: str
    notes: str
    changelog: ChangelogDocument
    metadata_path: Path
    metadata_text: str
    original_metadata_text: str
    links_updated: bool

    def to_dict(self) -> dict[str, object]:
        return {
            "previous_version": self.previous_version,
            "version": self.version,
            "tag": self.tag,
            "date": self.release_date,
            "notes": self.notes,
            "changelog": str(self.changelog.path),
            "version_file": str(self.metadata_path),
        }


def pending_release_content(text: str, *, marker: str = PENDING_MARKER, path: Path | None = None) -> list[str]:
    """Lines currently under the pending marker, blank edges trimmed."""
    lines = text.splitlines()
    return section_content(lines, find_pending_section(lines, marker=marker, path=path))


def is_releasable(content: list[str]) -> bool:
    """A release needs at least one ``### <Type>`` subsection."""
    return has_subsections(content)


def cut_release_text(
    text: str,
    *,
    version: str,
    previous: str,
    release_date: str,
    base_url: str | None,
    tag_prefix: str = "v",
    marker: str = PENDING_MARKER,
    force: bool = False,
    path: Path | None = None,
) -> tuple[str, str, bool]:
    """Rewrite changelog *text* for a release of *version*.

    Returns:
        ``(new_text, notes, links_updated)``; ``notes`` is exactly the
        content placed under the new version header

    Raises:
        MissingPendingSection: If the pending header is absent
        EmptyRelease: If the pending section has no subsections and
            *force* is False
    """
    lines = text.splitlines()
    pending = find_pending_section(lines, marker=marker, path=path)
    content = section_content(lines, pending)
    if not is_releasable(content):
        if not force:
            raise EmptyRelease(marker)
        logger.warning("[%s] section appears empty (continuing due to force)", marker)

    version_section = [f"## [{version}] - {release_date}"]
    if content:
        version_section += [""] + content
    after = trim_blank_edges(lines[pending.end:])
    rewritten = lines[:pending.header + 1] + [""] + version_section + [""] + after

    links_updated = False
    if base_url:
        rewritten = update_compare_links(
            rewritten,
            base=base_url,
            version=version,
            previous=previous,
            tag_prefix=tag_prefix,
            marker=marker,
        )
        links_updated = True
    else:
        logger.warning("No repository URL available; comparison links left unchanged")

    notes = "\n".join(content) + "\n" if content else ""
    return join_lines(rewritten), notes, links_updated


def plan_release(
    config: ProjectConfig,
    *,
    bump: BumpType | str | None = None,
    explicit: str | None = None,
    force: bool = False,
    release_date: date | None = None,
) -> ReleasePlan:
    """Compute the release without writing anything.

    Raises:
        ProjectMetadataError: If the current version cannot be read
        InvalidVersion: If no valid, strictly greater version results
        MissingChangelog, MissingPendingSection: If the changelog is unusable
        EmptyRelease: If there is nothing to release and *force* is False
    """
    current = read_project_version(config.version_path)
    version = resolve_new_version(current, bump=bump, explicit=explicit)
    document = ChangelogDocument.load(config.changelog_path)

    base_url = resolve_repository_url(config.repository_url, document.lines, config.root)
    stamp = (release_date or date.today()).isoformat()
    new_text, notes, links_updated = cut_release_text(
        document.text,
        version=version,
        previous=current,
        release_date=stamp,
        base_url=base_url,
        tag_prefix=config.tag_prefix,
        force=force,
        path=document.path,
    )

    original_metadata_text = config.version_path.read_text(encoding="utf-8")
    metadata_text = render_project_version(config.version_path, original_metadata_text, version)
    return ReleasePlan(
        previous_version=current,
        version=version,
        tag=f"{config.tag_prefix}{version}",
        release_date=stamp,
        notes=notes,
        changelog=document.with_text(new_text),
        metadata_path=config.version_path,
        metadata_text=metadata_text,
        original_metadata_text=original_metadata_text,
        links_updated=links_updated,
    )


def apply_release(plan: ReleasePlan) -> None:
    """Write the planned version metadata, then the changelog.

    Each file is replaced atomically. If the changelog cannot be written the
    metadata file is restored before the error propagates, so a failed
    release leaves both files as they were.
    """
    atomic_write_text(plan.metadata_path, plan.metadata_text)
    try:
        plan.changelog.save()
    except OSError:
        logger.error("Changelog write failed; restoring %s", plan.metadata_path.name)
        atomic_write_text(plan.metadata_path, plan.original_metadata_text)
        raise
    logger.debug("Released %s (%s)", plan.version, plan.tag)


__all__ = [
    "ReleasePlan",
    "apply_release",
    "cut_release_text",
    "is_releasable",
    "pending_release_content",
    "plan_release",
]
