"""Fragment directory scanning.

Enumerates candidate fragment files, parses each one, and collects parse
failures instead of raising them so a single malformed file never blocks
aggregation of the others.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from changekit_cli.core.constants import FRAGMENT_EXTENSION, RESERVED_FRAGMENT_NAMES
from changekit_cli.exceptions import MalformedFragment

from .models import Fragment
from .parser import read_fragment

logger = logging.getLogger(__name__)


@dataclass
class FragmentScan:
    """Result of scanning a fragments directory."""

    fragments: list[Fragment] = field(default_factory=list)
    failures: list[MalformedFragment] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.fragments


def is_fragment_file(path: Path) -> bool:
    """True for ``*.md`` files that are not reserved placeholders."""
    name = path.name
    if not name.endswith(FRAGMENT_EXTENSION):
        return False
    if name in RESERVED_FRAGMENT_NAMES or name.startswith("_"):
        return False
    return path.is_file()


def list_fragment_files(fragments_dir: Path) -> list[Path]:
    """Return candidate fragment files sorted by name.

    A missing directory yields an empty list.
    """
    if not fragments_dir.is_dir():
        return []
    return sorted(
        (path for path in fragments_dir.iterdir() if is_fragment_file(path)),
        key=lambda path: path.name,
    )


def scan_fragments(fragments_dir: Path) -> FragmentScan:
    """Parse every fragment file in *fragments_dir*.

    Args:
        fragments_dir: Directory holding pending fragments

    Returns:
        FragmentScan with parsed fragments (each carrying its source path)
        and one MalformedFragment per file that failed to parse
    """
    scan = FragmentScan()
    for path in list_fragment_files(fragments_dir):
        try:
            scan.fragments.append(read_fragment(path))
        except MalformedFragment as exc:
            logger.warning("Skipping malformed fragment %s: %s", path.name, exc.reason)
            scan.failures.append(exc)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping unreadable fragment %s: %s", path.name, exc)
            scan.failures.append(MalformedFragment(f"unreadable: {exc}", path=path))
    logger.debug(
        "Scanned %s: %d fragment(s), %d failure(s)",
        fragments_dir,
        len(scan.fragments),
        len(scan.failures),
    )
    return scan


__all__ = ["FragmentScan", "is_fragment_file", "list_fragment_files", "scan_fragments"]
