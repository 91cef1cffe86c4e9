"""Changelog document handling: structure lookup, rendering and merging."""

from .aggregate import AggregationReport, aggregate_fragments
from .document import (
    ChangelogDocument,
    ReleaseState,
    extract_release_notes,
    find_pending_section,
    release_state,
    released_versions,
)
from .merge import MergeResult, merge_section
from .render import group_fragments, render_section

__all__ = [
    "AggregationReport",
    "ChangelogDocument",
    "MergeResult",
    "ReleaseState",
    "aggregate_fragments",
    "extract_release_notes",
    "find_pending_section",
    "group_fragments",
    "merge_section",
    "release_state",
    "released_versions",
    "render_section",
]
