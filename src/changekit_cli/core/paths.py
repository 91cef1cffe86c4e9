"""Project root discovery."""

from __future__ import annotations

from pathlib import Path

from .constants import CHANGEKIT_DIR, DEFAULT_CHANGELOG

_ROOT_MARKERS = (CHANGEKIT_DIR, ".git", DEFAULT_CHANGELOG)


def locate_project_root(start: Path | None = None) -> Path | None:
    """Walk up from *start* looking for a directory that holds a root marker.

    Markers are checked in order for each ancestor: ``.changekit/``,
    ``.git`` and ``CHANGELOG.md``. Returns None when nothing matches.
    """
    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        for marker in _ROOT_MARKERS:
            if (candidate / marker).exists():
                return candidate
    return None


def resolve_project_root(explicit: Path | None = None) -> Path:
    """Return the explicit root, the located root, or the working directory."""
    if explicit is not None:
        return explicit.resolve()
    return locate_project_root() or Path.cwd().resolve()


__all__ = ["locate_project_root", "resolve_project_root"]
