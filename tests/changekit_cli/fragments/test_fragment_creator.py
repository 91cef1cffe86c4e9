"""Tests for fragment field validation and file creation."""

from __future__ import annotations

from pathlib import Path

import pytest

from changekit_cli.exceptions import FragmentExists, InvalidFragmentInput
from changekit_cli.fragments.creator import (
    DEFAULT_BODY,
    DEFAULT_TITLE,
    build_draft,
    collect_body_lines,
    render_fragment,
    resolve_change_type,
    validate_issue,
    validate_pr,
    write_fragment,
)
from changekit_cli.fragments.models import ChangeType, FragmentDraft
from changekit_cli.fragments.parser import read_fragment


@pytest.mark.parametrize("value", ["0", "-3", "abc", "", "1.5", "²"])
def test_validate_issue_rejects_non_positive_input(value: str) -> None:
    with pytest.raises(InvalidFragmentInput):
        validate_issue(value)


def test_validate_issue_accepts_padded_number() -> None:
    assert validate_issue(" 42 ") == 42


def test_validate_pr_treats_empty_as_unknown() -> None:
    assert validate_pr(None) == 0
    assert validate_pr("") == 0
    assert validate_pr("0") == 0
    assert validate_pr("15") == 15


def test_validate_pr_can_require_positive() -> None:
    with pytest.raises(InvalidFragmentInput):
        validate_pr("0", allow_zero=False)


def test_resolve_change_type_by_name_and_menu_index() -> None:
    assert resolve_change_type("Security") is ChangeType.SECURITY
    assert resolve_change_type("2", allow_index=True) is ChangeType.FIXED
    with pytest.raises(InvalidFragmentInput):
        resolve_change_type("2")
    with pytest.raises(InvalidFragmentInput):
        resolve_change_type("7", allow_index=True)


def test_collect_body_lines_stops_at_sentinel() -> None:
    answers = iter(["First", "  Second  ", "done", "never read"])

    assert collect_body_lines(lambda: next(answers)) == ("First", "Second")


def test_collect_body_lines_requires_one_line() -> None:
    with pytest.raises(InvalidFragmentInput, match="cannot be empty"):
        collect_body_lines(lambda: None)


def test_build_draft_requires_issue_and_type() -> None:
    with pytest.raises(InvalidFragmentInput, match="Both --issue and --type"):
        build_draft(issue="5", change_type=None)


def test_build_draft_fills_placeholders() -> None:
    draft = build_draft(issue="5", change_type="fixed")

    assert draft == FragmentDraft(type=ChangeType.FIXED, issue=5, title=DEFAULT_TITLE, body=DEFAULT_BODY, pr=0)


def test_written_fragment_parses_back_to_same_fields(tmp_path: Path) -> None:
    draft = FragmentDraft(
        type=ChangeType.ADDED,
        issue=77,
        title='Support "quoted" names: finally',
        body=("Line one", "Line two"),
        pr=12,
    )

    path = write_fragment(tmp_path / ".changeset", draft)

    assert path == tmp_path / ".changeset" / "77.md"
    assert read_fragment(path) == draft.to_fragment()


def test_multi_line_body_entry_round_trips(tmp_path: Path) -> None:
    draft = build_draft(issue=9, change_type="added", body=["first\nsecond", "  third\r\n\r\n"])

    path = write_fragment(tmp_path, draft)

    assert draft.body == ("first", "second", "third")
    assert read_fragment(path) == draft.to_fragment()


def test_render_fragment_layout() -> None:
    draft = FragmentDraft(type=ChangeType.REMOVED, issue=4, title="Drop v1 API", body=("Gone",))

    assert render_fragment(draft) == (
        "---\ntype: removed\nissue: 4\npr: 0\ntitle: \"Drop v1 API\"\n---\n\n- Gone\n"
    )


def test_write_fragment_refuses_overwrite_when_asked(tmp_path: Path) -> None:
    draft = build_draft(issue=3, change_type="added")
    write_fragment(tmp_path, draft)

    with pytest.raises(FragmentExists):
        write_fragment(tmp_path, draft, overwrite=False)


def test_write_fragment_overwrites_by_default(tmp_path: Path) -> None:
    write_fragment(tmp_path, build_draft(issue=3, change_type="added", title="Old"))
    path = write_fragment(tmp_path, build_draft(issue=3, change_type="added", title="New"))

    assert read_fragment(path).title == "New"
