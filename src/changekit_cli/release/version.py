"""Semantic version parsing and bump arithmetic."""

from __future__ import annotations

from enum import StrEnum

from packaging.version import InvalidVersion as _PackagingInvalidVersion
from packaging.version import Version

from changekit_cli.exceptions import InvalidVersion


class BumpType(StrEnum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


def parse_release_version(value: str) -> Version:
    """Parse and validate a release version string.

    Accepted forms:
    - X.Y.Z
    - X.Y.ZaN / X.Y.ZbN / X.Y.ZrcN (and their SemVer spellings such as
      ``X.Y.Z-rc.1``, which normalise to the same version)
    """
    try:
        parsed = Version(value)
    except _PackagingInvalidVersion as exc:
        raise InvalidVersion(f"Value '{value}' is not a valid release version.") from exc

    if parsed.epoch != 0:
        raise InvalidVersion(f"Version '{value}' must not use an epoch.")
    if parsed.local is not None:
        raise InvalidVersion(f"Version '{value}' must not include a local segment.")
    if parsed.post is not None or parsed.dev is not None:
        raise InvalidVersion(f"Version '{value}' must not include post or dev segments.")
    if len(parsed.release) != 3:
        raise InvalidVersion(f"Version '{value}' must use three release components (X.Y.Z).")
    return parsed


def bump_version(current: str, bump: BumpType | str) -> str:
    """Apply a major/minor/patch bump to *current*.

    >>> bump_version("1.2.3", "minor")
    '1.3.0'
    """
    try:
        kind = BumpType(str(bump).strip().lower())
    except ValueError as exc:
        raise InvalidVersion(
            f"Invalid release type '{bump}'. Must be: major, minor, or patch"
        ) from exc

    major, minor, patch = parse_release_version(current).release
    if kind is BumpType.MAJOR:
        return f"{major + 1}.0.0"
    if kind is BumpType.MINOR:
        return f"{major}.{minor + 1}.0"
    return f"{major}.{minor}.{patch + 1}"


def resolve_new_version(
    current: str,
    *,
    bump: BumpType | str | None = None,
    explicit: str | None = None,
) -> str:
    """Compute the next release version.

    An explicit version wins and is used verbatim; otherwise *bump* is
    applied to *current*. The result must be strictly greater than
    *current*.

    Raises:
        InvalidVersion: If neither input is given, a value does not parse,
            or the result does not advance past *current*
    """
    explicit = (explicit or "").strip() or None
    if explicit is not None:
        new_version = explicit
    elif bump:
        new_version = bump_version(current, bump)
    else:
        raise InvalidVersion(
            "A release type (major, minor, patch) or an explicit version is required."
        )

    if parse_release_version(new_version) <= parse_release_version(current):
        raise InvalidVersion(
            f"Version {new_version} does not advance beyond current version {current}."
        )
    return new_version


__all__ = ["BumpType", "bump_version", "parse_release_version", "resolve_new_version"]
