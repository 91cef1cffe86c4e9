"""Read and rewrite the project version in pyproject.toml or package.json.

Rewriting is a targeted text substitution so comments, ordering and
formatting of the metadata file survive a release.
"""

from __future__ import annotations

import json
import re
import tomllib
from pathlib import Path

from changekit_cli.exceptions import ProjectMetadataError

_TOML_TABLE_RE = re.compile(r"^\s*\[")
_TOML_VERSION_RE = re.compile(r"""^(?P<prefix>\s*version\s*=\s*)(?P<quote>["'])(?P<value>[^"']*)(?P=quote)""")
_JSON_VERSION_RE = re.compile(r'(?P<prefix>"version"\s*:\s*")(?P<value>[^"]*)(?P<suffix>")')


def _is_json(path: Path) -> bool:
    return path.suffix == ".json"


def read_project_version(path: Path) -> str:
    """Return the declared project version.

    Raises:
        ProjectMetadataError: If the file is missing, unparsable, or has
            no string version
    """
    if not path.is_file():
        raise ProjectMetadataError(
            f"{path.name} not found at {path} - run from the project root or set version_file."
        )
    text = path.read_text(encoding="utf-8")
    try:
        if _is_json(path):
            version = json.loads(text).get("version")
        else:
            version = tomllib.loads(text).get("project", {}).get("version")
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, AttributeError) as exc:
        raise ProjectMetadataError(f"Unable to parse {path.name}: {exc}") from exc

    if version is None:
        where = "version" if _is_json(path) else "[project].version"
        raise ProjectMetadataError(f"Unable to locate {where} in {path.name}.")
    if not isinstance(version, str):
        raise ProjectMetadataError(f"{path.name} version must be a string.")
    return version


def _render_toml(text: str, version: str) -> str | None:
    lines = text.splitlines(keepends=True)
    in_project = False
    for index, line in enumerate(lines):
        if _TOML_TABLE_RE.match(line):
            in_project = line.strip() == "[project]"
            continue
        if not in_project:
            continue
        match = _TOML_VERSION_RE.match(line)
        if match:
            quote = match.group("quote")
            lines[index] = (
                f"{match.group('prefix')}{quote}{version}{quote}" + line[match.end():]
            )
            return "".join(lines)
    return None


def render_project_version(path: Path, text: str, version: str) -> str:
    """Return *text* (the content of *path*) with the version replaced.

    Raises:
        ProjectMetadataError: If no version declaration can be found
    """
    if _is_json(path):
        updated, count = _JSON_VERSION_RE.subn(
            lambda m: f"{m.group('prefix')}{version}{m.group('suffix')}", text, count=1
        )
        rendered = updated if count else None
    else:
        rendered = _render_toml(text, version)

    if rendered is None:
        raise ProjectMetadataError(f"No version declaration to update in {path.name}.")
    return rendered


__all__ = ["read_project_version", "render_project_version"]
