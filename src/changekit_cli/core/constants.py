"""Shared path and format constants for changekit projects."""

from __future__ import annotations

CHANGEKIT_DIR = ".changekit"
CONFIG_FILENAME = "config.yaml"

DEFAULT_FRAGMENTS_DIR = ".changeset"
DEFAULT_CHANGELOG = "CHANGELOG.md"
DEFAULT_VERSION_FILE = "pyproject.toml"
DEFAULT_TAG_PREFIX = "v"

FRAGMENT_EXTENSION = ".md"
RESERVED_FRAGMENT_NAMES = frozenset({"README.md"})
FRAGMENT_DELIMITER = "---"

PENDING_MARKER = "Unreleased"

__all__ = [
    "CHANGEKIT_DIR",
    "CONFIG_FILENAME",
    "DEFAULT_CHANGELOG",
    "DEFAULT_FRAGMENTS_DIR",
    "DEFAULT_TAG_PREFIX",
    "DEFAULT_VERSION_FILE",
    "FRAGMENT_DELIMITER",
    "FRAGMENT_EXTENSION",
    "PENDING_MARKER",
    "RESERVED_FRAGMENT_NAMES",
]
