"""Shared fixtures text for changekit tests."""

from __future__ import annotations

from textwrap import dedent

REPOSITORY_URL = "https://github.com/acme/widget"

CHANGELOG_TEXT = dedent(
    """\
    # Changelog

    All notable changes to this project will be documented in this file.

    ## [Unreleased]

    ## [1.2.3] - 2026-01-10

    ### Fixed

    - **Crash on empty input** (#3)
      - Guard against empty payloads

    [Unreleased]: https://github.com/acme/widget/compare/v1.2.3...HEAD
    [1.2.3]: https://github.com/acme/widget/compare/v1.2.2...v1.2.3
    """
)

PYPROJECT_TEXT = dedent(
    """\
    [build-system]
    requires = ["hatchling"]

    [project]
    name = "widget"
    # bumped by changekit
    version = "1.2.3"
    dependencies = []

    [tool.other]
    version = "9.9.9"
    """
)


def fragment_text(
    *,
    type: str = "added",
    issue: int | str = 1,
    title: str = "Something new",
    body: tuple[str, ...] = ("Detail line",),
    pr: int | str | None = None,
) -> str:
    lines = ["---", f"type: {type}", f"issue: {issue}"]
    if pr is not None:
        lines.append(f"pr: {pr}")
    lines.append(f'title: "{title}"')
    lines.append("---")
    lines.append("")
    lines.extend(f"- {line}" for line in body)
    return "\n".join(lines) + "\n"
