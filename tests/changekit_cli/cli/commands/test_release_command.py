"""Tests for ``changekit release`` and ``changekit notes``."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from changekit_cli import app
from changekit_cli.core.config import load_project_config
from changekit_cli.release.metadata import read_project_version
from tests.changekit_cli.support import CHANGELOG_TEXT, PYPROJECT_TEXT

runner = CliRunner()

PENDING = CHANGELOG_TEXT.replace(
    "## [Unreleased]\n",
    "## [Unreleased]\n\n### Added\n\n- **Widgets** (#5)\n  - Adds widgets\n",
)


@pytest.fixture()
def pending_project(project: Path) -> Path:
    (project / "CHANGELOG.md").write_text(PENDING, encoding="utf-8")
    return project


def _invoke(project: Path, *args: str, input: str | None = None, env: dict[str, str] | None = None):
    return runner.invoke(app, ["--root", str(project), *args], input=input, env=env)


def _version(project: Path) -> str:
    return read_project_version(load_project_config(project).version_path)


def test_release_with_type_and_yes(pending_project: Path) -> None:
    result = _invoke(pending_project, "release", "--type", "minor", "--yes")

    assert result.exit_code == 0, result.output
    assert "Tag:      v1.3.0" in result.output
    assert "Widgets" in result.output
    assert _version(pending_project) == "1.3.0"
    changelog = (pending_project / "CHANGELOG.md").read_text(encoding="utf-8")
    assert "## [Unreleased]\n\n## [1.3.0] - " in changelog
    assert "[1.3.0]: https://github.com/acme/widget/compare/v1.2.3...v1.3.0" in changelog


def test_release_reads_environment(pending_project: Path) -> None:
    result = _invoke(pending_project, "release", env={"RELEASE_TYPE": "patch", "SKIP_PROMPTS": "1"})

    assert result.exit_code == 0, result.output
    assert _version(pending_project) == "1.2.4"


def test_custom_version_overrides_type(pending_project: Path) -> None:
    result = _invoke(pending_project, "release", "--type", "major", "--custom-version", "1.5.0", "--yes")

    assert result.exit_code == 0, result.output
    assert _version(pending_project) == "1.5.0"


def test_non_advancing_version_leaves_files_untouched(pending_project: Path) -> None:
    result = _invoke(pending_project, "release", "--custom-version", "1.2.3", "--yes")

    assert result.exit_code == 1
    assert "does not advance" in result.output
    assert (pending_project / "CHANGELOG.md").read_text(encoding="utf-8") == PENDING
    assert (pending_project / "pyproject.toml").read_text(encoding="utf-8") == PYPROJECT_TEXT


def test_non_interactive_release_needs_a_type(pending_project: Path) -> None:
    result = _invoke(pending_project, "release", "--yes")

    assert result.exit_code == 1
    assert "release type is required" in result.output


def test_empty_section_requires_force(project: Path) -> None:
    result = _invoke(project, "release", "--type", "patch", "--yes")

    assert result.exit_code == 1
    assert "appears empty" in result.output
    assert _version(project) == "1.2.3"

    forced = _invoke(project, "release", "--type", "patch", "--yes", "--force")

    assert forced.exit_code == 0, forced.output
    assert _version(project) == "1.2.4"


def test_dry_run_json_writes_nothing(pending_project: Path) -> None:
    result = _invoke(pending_project, "release", "--type", "minor", "--yes", "--dry-run", "--json")

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["version"] == "1.3.0"
    assert payload["previous_version"] == "1.2.3"
    assert payload["tag"] == "v1.3.0"
    assert payload["dry_run"] is True
    assert payload["notes"].startswith("### Added")
    assert (pending_project / "CHANGELOG.md").read_text(encoding="utf-8") == PENDING


def test_json_release_never_prompts(pending_project: Path) -> None:
    result = _invoke(pending_project, "release", "--type", "minor", "--json")

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["version"] == "1.3.0"
    assert payload["dry_run"] is False
    assert _version(pending_project) == "1.3.0"


def test_json_release_without_type_fails_instead_of_prompting(pending_project: Path) -> None:
    result = _invoke(pending_project, "release", "--json")

    assert result.exit_code == 1
    assert "release type is required" in result.output
    assert (pending_project / "CHANGELOG.md").read_text(encoding="utf-8") == PENDING


def test_interactive_menu_and_confirmation(pending_project: Path) -> None:
    result = _invoke(pending_project, "release", input="2\ny\n")

    assert result.exit_code == 0, result.output
    assert "1.2.3 → 2.0.0" in result.output
    assert "1.2.3 → 1.3.0" in result.output
    assert "1.2.3 → 1.2.4" in result.output
    assert _version(pending_project) == "1.3.0"


def test_interactive_custom_version(pending_project: Path) -> None:
    result = _invoke(pending_project, "release", input="7\n4\n3.0.0\ny\n")

    assert result.exit_code == 0, result.output
    assert "Invalid choice '7'" in result.output
    assert _version(pending_project) == "3.0.0"


def test_declined_confirmation_cancels(pending_project: Path) -> None:
    result = _invoke(pending_project, "release", "--type", "patch", input="n\n")

    assert result.exit_code == 0
    assert "Release cancelled." in result.output
    assert (pending_project / "CHANGELOG.md").read_text(encoding="utf-8") == PENDING


def test_interactive_empty_section_can_continue(project: Path) -> None:
    declined = _invoke(project, "release", "--type", "patch", input="n\n")

    assert declined.exit_code == 0
    assert "Continue anyway?" in declined.output
    assert _version(project) == "1.2.3"

    accepted = _invoke(project, "release", "--type", "patch", input="y\ny\n")

    assert accepted.exit_code == 0, accepted.output
    assert _version(project) == "1.2.4"


def test_notes_prints_released_section(project: Path) -> None:
    result = _invoke(project, "notes", "1.2.3")

    assert result.exit_code == 0
    assert result.output == "### Fixed\n\n- **Crash on empty input** (#3)\n  - Guard against empty payloads\n"


def test_notes_for_unknown_version(project: Path) -> None:
    result = _invoke(project, "notes", "9.9.9")

    assert result.exit_code == 0
    assert "No changelog entry found for 9.9.9." in result.output
