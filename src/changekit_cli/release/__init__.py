"""Release engine: version arithmetic, metadata and changelog promotion."""

from .engine import (
    ReleasePlan,
    apply_release,
    cut_release_text,
    is_releasable,
    pending_release_content,
    plan_release,
)
from .metadata import read_project_version, render_project_version
from .version import BumpType, bump_version, parse_release_version, resolve_new_version

__all__ = [
    "BumpType",
    "ReleasePlan",
    "apply_release",
    "bump_version",
    "cut_release_text",
    "is_releasable",
    "parse_release_version",
    "pending_release_content",
    "plan_release",
    "read_project_version",
    "render_project_version",
    "resolve_new_version",
]
