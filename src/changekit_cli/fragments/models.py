"""Fragment data model and the change-type taxonomy.

A fragment is one pending changelog record backed by a single file in the
fragments directory. The taxonomy table drives ordering, section headings
and the interactive menu, so adding a change type is a one-line edit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path


class ChangeType(StrEnum):
    """Keep a Changelog change categories."""

    ADDED = "added"
    CHANGED = "changed"
    DEPRECATED = "deprecated"
    REMOVED = "removed"
    FIXED = "fixed"
    SECURITY = "security"


@dataclass(frozen=True)
class ChangeTypeInfo:
    priority: int
    heading: str
    description: str


TAXONOMY: dict[ChangeType, ChangeTypeInfo] = {
    ChangeType.ADDED: ChangeTypeInfo(1, "Added", "New features or functionality"),
    ChangeType.CHANGED: ChangeTypeInfo(2, "Changed", "Changes to existing functionality"),
    ChangeType.DEPRECATED: ChangeTypeInfo(3, "Deprecated", "Features marked for future removal"),
    ChangeType.REMOVED: ChangeTypeInfo(4, "Removed", "Removed features or functionality"),
    ChangeType.FIXED: ChangeTypeInfo(5, "Fixed", "Bug fixes and corrections"),
    ChangeType.SECURITY: ChangeTypeInfo(6, "Security", "Security patches or vulnerability fixes"),
}

# Menu order shown by the interactive creator (most common first).
MENU_ORDER: tuple[ChangeType, ...] = (
    ChangeType.ADDED,
    ChangeType.FIXED,
    ChangeType.CHANGED,
    ChangeType.DEPRECATED,
    ChangeType.REMOVED,
    ChangeType.SECURITY,
)

DEFAULT_CHANGE_TYPE = ChangeType.CHANGED


def parse_change_type(value: str | None) -> ChangeType | None:
    """Return the ChangeType for *value* (case-insensitive) or None."""
    if not value:
        return None
    try:
        return ChangeType(value.strip().lower())
    except ValueError:
        return None


@dataclass(frozen=True)
class Fragment:
    """One parsed changelog fragment.

    ``type`` is kept as the raw string from the file; the parser does not
    check it against the taxonomy. ``source`` is the backing file and only
    exists while the fragment is pending, so it is excluded from equality.
    """

    type: str
    issue: int
    title: str
    body: tuple[str, ...]
    pr: int = 0
    source: Path | None = field(default=None, compare=False)

    @property
    def change_type(self) -> ChangeType | None:
        return parse_change_type(self.type)

    @property
    def filename(self) -> str | None:
        return self.source.name if self.source is not None else None


@dataclass(frozen=True)
class FragmentDraft:
    """Validated field values for a fragment that is about to be written."""

    type: ChangeType
    issue: int
    title: str
    body: tuple[str, ...]
    pr: int = 0

    def to_fragment(self, source: Path | None = None) -> Fragment:
        return Fragment(
            type=self.type.value,
            issue=self.issue,
            title=self.title,
            body=self.body,
            pr=self.pr,
            source=source,
        )


__all__ = [
    "ChangeType",
    "ChangeTypeInfo",
    "DEFAULT_CHANGE_TYPE",
    "Fragment",
    "FragmentDraft",
    "MENU_ORDER",
    "TAXONOMY",
    "parse_change_type",
]
