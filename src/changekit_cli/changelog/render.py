"""Group pending fragments by change type and render a changelog section.

Rendering is pure: the output depends only on the fragment values, never
on the order the files were enumerated in.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from changekit_cli.fragments.models import DEFAULT_CHANGE_TYPE, TAXONOMY, Fragment, parse_change_type

from .document import SUBSECTION_PREFIX

logger = logging.getLogger(__name__)

_UNKNOWN_PRIORITY = len(TAXONOMY) + 1


def group_key(fragment: Fragment, *, keep_unknown: bool = False) -> str:
    """Return the grouping key for *fragment*.

    Missing types always map to ``changed``. Unknown types map to
    ``changed`` too unless *keep_unknown* is set, in which case the
    lowercased raw type becomes its own group.
    """
    raw = (fragment.type or "").strip()
    change_type = parse_change_type(raw)
    if change_type is not None:
        return change_type.value
    if not raw:
        return DEFAULT_CHANGE_TYPE.value
    if keep_unknown:
        return raw.lower()
    logger.warning(
        "Fragment #%d has unknown type '%s'; grouping under '%s'",
        fragment.issue,
        raw,
        DEFAULT_CHANGE_TYPE.value,
    )
    return DEFAULT_CHANGE_TYPE.value


def group_sort_key(key: str) -> tuple[int, str]:
    """Taxonomy priority first; unknown groups after, ordered by name."""
    change_type = parse_change_type(key)
    if change_type is None:
        return (_UNKNOWN_PRIORITY, key)
    return (TAXONOMY[change_type].priority, key)


def group_heading(key: str) -> str:
    change_type = parse_change_type(key)
    if change_type is None:
        return key.title()
    return TAXONOMY[change_type].heading


def group_fragments(
    fragments: Iterable[Fragment],
    *,
    keep_unknown: bool = False,
) -> list[tuple[str, list[Fragment]]]:
    """Group and order fragments.

    Returns:
        ``(key, fragments)`` pairs in taxonomy order, each group sorted
        ascending by issue number (then title, for a total order)
    """
    groups: dict[str, list[Fragment]] = {}
    for fragment in fragments:
        groups.setdefault(group_key(fragment, keep_unknown=keep_unknown), []).append(fragment)
    return [
        (key, sorted(groups[key], key=lambda f: (f.issue, f.title, f.body)))
        for key in sorted(groups, key=group_sort_key)
    ]


def render_entry(fragment: Fragment) -> list[str]:
    lines = [f"- **{fragment.title}** (#{fragment.issue})"]
    lines.extend(f"  - {line}" for line in fragment.body)
    return lines


def render_section(fragments: Iterable[Fragment], *, keep_unknown: bool = False) -> str:
    """Render the pending section body (without the pending header).

    Each group becomes ``### <Heading>`` followed by one entry per fragment
    and a blank line after every entry. Returns an empty string when there
    are no fragments.
    """
    lines: list[str] = []
    for key, members in group_fragments(fragments, keep_unknown=keep_unknown):
        lines.append(f"{SUBSECTION_PREFIX}{group_heading(key)}")
        lines.append("")
        for fragment in members:
            lines.extend(render_entry(fragment))
            lines.append("")
    if not lines:
        return ""
    return "\n".join(lines).rstrip("\n") + "\n"


__all__ = [
    "group_fragments",
    "group_heading",
    "group_key",
    "group_sort_key",
    "render_entry",
    "render_section",
]
