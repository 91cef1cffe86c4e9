"""Exception hierarchy for changelog fragment and release operations."""

from __future__ import annotations

from pathlib import Path


class ChangekitError(Exception):
    """Base exception for changekit errors."""
    pass


class ConfigError(ChangekitError):
    """Raised when .changekit/config.yaml is unreadable or invalid."""


class MalformedFragment(ChangekitError):
    """A fragment file could not be parsed.

    Raised by the parser and collected (not propagated) by the fragment
    store, so one bad file never blocks the rest of a batch.
    """

    def __init__(self, reason: str, path: Path | None = None):
        """Initialize MalformedFragment.

        Args:
            reason: What was expected and what was found
            path: Fragment file, when known
        """
        self.reason = reason
        self.path = path
        if path is not None:
            super().__init__(f"{path.name}: {reason}")
        else:
            super().__init__(reason)


class InvalidFragmentInput(ChangekitError):
    """User-supplied fragment fields failed validation."""


class FragmentExists(ChangekitError):
    """A fragment for this issue is already pending and overwrite was refused."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Fragment {path.name} already exists")


class MissingChangelog(ChangekitError):
    """The changelog document does not exist."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Changelog not found at {path}")


class MissingPendingSection(ChangekitError):
    """The changelog has no pending-marker header to merge into."""

    def __init__(self, path: Path | None, marker: str):
        self.path = path
        self.marker = marker
        where = path.name if path is not None else "changelog"
        super().__init__(
            f"Expected a '## [{marker}]' header in {where} but none was found"
        )


class InvalidVersion(ChangekitError):
    """Release version could not be computed or does not advance."""


class EmptyRelease(ChangekitError):
    """The pending section has no change subsections to release."""

    def __init__(self, marker: str):
        self.marker = marker
        super().__init__(
            f"[{marker}] section appears empty. Use --force to release anyway."
        )


class ProjectMetadataError(ChangekitError):
    """The project version could not be read from or written to metadata."""


class DeleteFailure(ChangekitError):
    """A consumed fragment file could not be removed.

    Collected per file during cleanup; never aborts the run.
    """

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to delete {path.name}: {reason}")


__all__ = [
    "ChangekitError",
    "ConfigError",
    "DeleteFailure",
    "EmptyRelease",
    "FragmentExists",
    "InvalidFragmentInput",
    "InvalidVersion",
    "MalformedFragment",
    "MissingChangelog",
    "MissingPendingSection",
    "ProjectMetadataError",
]
