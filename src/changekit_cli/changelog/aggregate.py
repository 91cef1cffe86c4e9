"""Aggregation workflow: scan → render → merge → write → retire fragments."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from changekit_cli.core.config import ProjectConfig
from changekit_cli.exceptions import MalformedFragment
from changekit_cli.fragments.lifecycle import RetireResult, retire_fragments
from changekit_cli.fragments.models import Fragment
from changekit_cli.fragments.store import scan_fragments

from .document import ChangelogDocument
from .merge import merge_section
from .render import render_section

logger = logging.getLogger(__name__)


@dataclass
class AggregationReport:
    """Everything the ``aggregate`` command needs to print a summary."""

    dry_run: bool
    changelog_path: Path
    fragments: list[Fragment] = field(default_factory=list)
    failures: list[MalformedFragment] = field(default_factory=list)
    section: str = ""
    had_pending_content: bool = False
    applied: bool = False
    retire: RetireResult | None = None

    @property
    def is_noop(self) -> bool:
        return not self.fragments


def aggregate_fragments(config: ProjectConfig, *, dry_run: bool = False) -> AggregationReport:
    """Merge every pending fragment into the changelog.

    With no parsable fragments this is a no-op and the changelog is not
    even opened. The changelog is written in one atomic replace before any
    fragment file is deleted; dry runs only report what would happen.

    Raises:
        MissingChangelog: If the changelog file does not exist
        MissingPendingSection: If it has no pending-marker header
    """
    scan = scan_fragments(config.fragments_path)
    report = AggregationReport(
        dry_run=dry_run,
        changelog_path=config.changelog_path,
        fragments=scan.fragments,
        failures=scan.failures,
    )
    if scan.is_empty:
        logger.debug("No fragments in %s; nothing to aggregate", config.fragments_path)
        return report

    report.section = render_section(scan.fragments, keep_unknown=config.unknown_types == "keep")

    document = ChangelogDocument.load(config.changelog_path)
    merged = merge_section(document.text, report.section, path=document.path)
    report.had_pending_content = merged.had_pending_content

    if dry_run:
        report.retire = retire_fragments(scan.fragments, dry_run=True)
        return report

    document.with_text(merged.text).save()
    report.applied = True
    logger.debug("Wrote %d fragment(s) into %s", len(scan.fragments), document.path)

    report.retire = retire_fragments(scan.fragments)
    return report


__all__ = ["AggregationReport", "aggregate_fragments"]
