"""Tests for ``changekit create-fragment``."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from changekit_cli import app
from changekit_cli.fragments.parser import read_fragment

runner = CliRunner()


def _invoke(project: Path, *args: str, input: str | None = None):
    return runner.invoke(app, ["--root", str(project), *args], input=input)


def test_structured_mode_writes_fragment(project: Path) -> None:
    result = _invoke(
        project,
        "create-fragment",
        "--issue", "12",
        "--type", "Added",
        "--pr", "40",
        "--title", "Export to CSV",
        "--body", "New export button",
        "--body", "Works offline",
    )

    assert result.exit_code == 0, result.output
    assert "Fragment created: .changeset/12.md" in result.output
    fragment = read_fragment(project / ".changeset" / "12.md")
    assert (fragment.type, fragment.issue, fragment.pr, fragment.title) == ("added", 12, 40, "Export to CSV")
    assert fragment.body == ("New export button", "Works offline")


def test_structured_mode_splits_description(project: Path) -> None:
    result = _invoke(project, "create-fragment", "-i", "3", "-t", "fixed", "--description", "One\\nTwo")

    assert result.exit_code == 0, result.output
    fragment = read_fragment(project / ".changeset" / "3.md")
    assert fragment.body == ("One", "Two")
    assert fragment.title == "Change description"


def test_structured_mode_requires_both_fields(project: Path) -> None:
    result = _invoke(project, "create-fragment", "--issue", "12")

    assert result.exit_code == 1
    assert "Both --issue and --type are required" in result.output
    assert not (project / ".changeset" / "12.md").exists()


def test_structured_mode_rejects_bad_type(project: Path) -> None:
    result = _invoke(project, "create-fragment", "--issue", "12", "--type", "feature")

    assert result.exit_code == 1
    assert "Invalid change type 'feature'" in result.output


def test_interactive_mode_collects_all_fields(project: Path) -> None:
    answers = "abc\n12\n2\n\nFix login redirect\nRedirect after login\n  Keep query string \n\n"

    result = _invoke(project, "create-fragment", input=answers)

    assert result.exit_code == 0, result.output
    assert "Issue number must be a positive integer" in result.output
    assert "Next steps:" in result.output
    fragment = read_fragment(project / ".changeset" / "12.md")
    assert fragment.type == "fixed"
    assert fragment.pr == 0
    assert fragment.title == "Fix login redirect"
    assert fragment.body == ("Redirect after login", "Keep query string")


def test_interactive_mode_accepts_done_sentinel(project: Path) -> None:
    result = _invoke(project, "add", input="8\nsecurity\n31\nPatch XSS\nEscape titles\ndone\n")

    assert result.exit_code == 0, result.output
    fragment = read_fragment(project / ".changeset" / "8.md")
    assert (fragment.type, fragment.pr, fragment.body) == ("security", 31, ("Escape titles",))


def test_interactive_mode_declined_overwrite_keeps_file(project: Path, add_fragment) -> None:
    existing = add_fragment(12, title="Original")

    result = _invoke(project, "create-fragment", input="12\nn\n")

    assert result.exit_code == 0
    assert "already exists" in result.output
    assert "Cancelled." in result.output
    assert read_fragment(existing).title == "Original"


def test_interactive_mode_confirmed_overwrite(project: Path, add_fragment) -> None:
    existing = add_fragment(12, title="Original")

    result = _invoke(project, "create-fragment", input="12\ny\n1\n\nReplacement\nNew body\n\n")

    assert result.exit_code == 0, result.output
    assert read_fragment(existing).title == "Replacement"
