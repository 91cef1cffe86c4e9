"""Retire fragment files once their content is merged into the changelog."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from changekit_cli.exceptions import DeleteFailure

from .models import Fragment

logger = logging.getLogger(__name__)


@dataclass
class RetireResult:
    """Outcome of a cleanup pass.

    In dry-run mode ``planned`` lists the files that would be removed and
    nothing else is populated.
    """

    dry_run: bool
    planned: list[Path] = field(default_factory=list)
    deleted: list[Path] = field(default_factory=list)
    failures: list[DeleteFailure] = field(default_factory=list)


def retire_fragments(fragments: list[Fragment], *, dry_run: bool = False) -> RetireResult:
    """Delete the backing file of every merged fragment.

    Deletion is best-effort per file: a failure is recorded and logged and
    the remaining files are still processed. The changelog update that
    preceded this call is never rolled back.
    """
    paths = [fragment.source for fragment in fragments if fragment.source is not None]
    result = RetireResult(dry_run=dry_run, planned=paths)
    if dry_run:
        return result

    for path in paths:
        try:
            path.unlink()
        except OSError as exc:
            failure = DeleteFailure(path, exc.strerror or str(exc))
            logger.warning("%s", failure)
            result.failures.append(failure)
        else:
            result.deleted.append(path)
    return result


__all__ = ["RetireResult", "retire_fragments"]
