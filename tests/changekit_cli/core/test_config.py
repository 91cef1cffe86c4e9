"""Tests for .changekit/config.yaml loading and saving."""

from __future__ import annotations

from pathlib import Path

import pytest

from changekit_cli.core.config import ProjectConfig, config_path, load_project_config, save_project_config
from changekit_cli.core.paths import locate_project_root
from changekit_cli.exceptions import ConfigError


def test_defaults_when_config_absent(tmp_path: Path) -> None:
    config = load_project_config(tmp_path)

    assert config == ProjectConfig(root=tmp_path)
    assert config.fragments_path == tmp_path / ".changeset"
    assert config.changelog_path == tmp_path / "CHANGELOG.md"
    assert config.version_path == tmp_path / "pyproject.toml"
    assert config.tag_prefix == "v"
    assert config.unknown_types == "changed"


def test_loads_configured_values(tmp_path: Path) -> None:
    path = config_path(tmp_path)
    path.parent.mkdir()
    path.write_text(
        "fragments_dir: changes\n"
        "changelog: docs/CHANGES.md\n"
        "version_file: package.json\n"
        "repository_url: https://github.com/acme/widget/\n"
        "tag_prefix: release-\n"
        "unknown_types: keep\n",
        encoding="utf-8",
    )

    config = load_project_config(tmp_path)

    assert config.fragments_path == tmp_path / "changes"
    assert config.changelog_path == tmp_path / "docs" / "CHANGES.md"
    assert config.version_path == tmp_path / "package.json"
    assert config.repository_url == "https://github.com/acme/widget"
    assert config.tag_prefix == "release-"
    assert config.unknown_types == "keep"


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("fragments_dir: [unclosed\n", "Failed to parse"),
        ("- just\n- a list\n", "mapping"),
        ("changelog: 12\n", "'changelog' must be a string"),
        ("unknown_types: drop\n", "unknown_types"),
    ],
)
def test_invalid_config_raises(tmp_path: Path, content: str, message: str) -> None:
    path = config_path(tmp_path)
    path.parent.mkdir()
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=message):
        load_project_config(tmp_path)


def test_save_preserves_unrelated_keys(tmp_path: Path) -> None:
    path = config_path(tmp_path)
    path.parent.mkdir()
    path.write_text("# team settings\ncustom: value\nrepository_url: https://old.example/x\n", encoding="utf-8")

    config = load_project_config(tmp_path)
    config.repository_url = None
    config.tag_prefix = ""
    save_project_config(config)

    text = path.read_text(encoding="utf-8")
    assert "custom: value" in text
    assert "repository_url" not in text
    reloaded = load_project_config(tmp_path)
    assert reloaded.tag_prefix == ""
    assert reloaded.repository_url is None


def test_locate_project_root_walks_up(tmp_path: Path) -> None:
    (tmp_path / "CHANGELOG.md").write_text("# Changelog\n", encoding="utf-8")
    nested = tmp_path / "src" / "pkg"
    nested.mkdir(parents=True)

    assert locate_project_root(nested) == tmp_path.resolve()
