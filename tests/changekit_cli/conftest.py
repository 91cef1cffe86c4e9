from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from tests.changekit_cli.support import CHANGELOG_TEXT, PYPROJECT_TEXT, REPOSITORY_URL, fragment_text


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    """A project root with a changelog, pyproject.toml and empty .changeset/."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "CHANGELOG.md").write_text(CHANGELOG_TEXT, encoding="utf-8")
    (root / "pyproject.toml").write_text(PYPROJECT_TEXT, encoding="utf-8")
    (root / ".changeset").mkdir()
    (root / ".changeset" / "README.md").write_text("# Fragments\n", encoding="utf-8")
    config_dir = root / ".changekit"
    config_dir.mkdir()
    (config_dir / "config.yaml").write_text(f"repository_url: {REPOSITORY_URL}\n", encoding="utf-8")
    return root


@pytest.fixture()
def add_fragment(project: Path) -> Callable[..., Path]:
    """Write ``.changeset/<issue>.md`` from keyword fields."""

    def _add(issue: int = 1, **fields) -> Path:
        path = project / ".changeset" / f"{issue}.md"
        path.write_text(fragment_text(issue=issue, **fields), encoding="utf-8")
        return path

    return _add
