"""Changelog fragments: model, parsing, discovery, creation and cleanup.

Public API surface -- consumers import from this package.
"""

from .creator import (
    build_draft,
    fragment_path,
    render_fragment,
    resolve_change_type,
    write_fragment,
)
from .lifecycle import RetireResult, retire_fragments
from .models import (
    DEFAULT_CHANGE_TYPE,
    MENU_ORDER,
    TAXONOMY,
    ChangeType,
    ChangeTypeInfo,
    Fragment,
    FragmentDraft,
    parse_change_type,
)
from .parser import parse_fragment, read_fragment
from .store import FragmentScan, list_fragment_files, scan_fragments

__all__ = [
    "ChangeType",
    "ChangeTypeInfo",
    "DEFAULT_CHANGE_TYPE",
    "Fragment",
    "FragmentDraft",
    "FragmentScan",
    "MENU_ORDER",
    "RetireResult",
    "TAXONOMY",
    "build_draft",
    "fragment_path",
    "list_fragment_files",
    "parse_change_type",
    "parse_fragment",
    "read_fragment",
    "render_fragment",
    "resolve_change_type",
    "retire_fragments",
    "scan_fragments",
    "write_fragment",
]
