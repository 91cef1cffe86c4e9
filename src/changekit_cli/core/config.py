"""Project-scoped changekit configuration in .changekit/config.yaml."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from changekit_cli.exceptions import ConfigError

from .constants import (
    CHANGEKIT_DIR,
    CONFIG_FILENAME,
    DEFAULT_CHANGELOG,
    DEFAULT_FRAGMENTS_DIR,
    DEFAULT_TAG_PREFIX,
    DEFAULT_VERSION_FILE,
)

UNKNOWN_TYPE_POLICIES = ("changed", "keep")


@dataclass(slots=True)
class ProjectConfig:
    """Paths and release settings for one project."""

    root: Path
    fragments_dir: str = DEFAULT_FRAGMENTS_DIR
    changelog: str = DEFAULT_CHANGELOG
    version_file: str = DEFAULT_VERSION_FILE
    repository_url: str | None = None
    tag_prefix: str = DEFAULT_TAG_PREFIX
    unknown_types: str = "changed"

    @property
    def fragments_path(self) -> Path:
        return self.root / self.fragments_dir

    @property
    def changelog_path(self) -> Path:
        return self.root / self.changelog

    @property
    def version_path(self) -> Path:
        return self.root / self.version_file

    def to_dict(self) -> dict[str, object]:
        return {
            "fragments_dir": self.fragments_dir,
            "changelog": self.changelog,
            "version_file": self.version_file,
            "repository_url": self.repository_url,
            "tag_prefix": self.tag_prefix,
            "unknown_types": self.unknown_types,
        }

    @classmethod
    def from_dict(cls, root: Path, data: dict[str, object] | None) -> "ProjectConfig":
        if data is None:
            return cls(root=root)
        if not isinstance(data, dict):
            raise ConfigError("Top level of config.yaml must be a mapping")

        def _text(key: str, default: str | None) -> str | None:
            value = data.get(key)
            if value is None:
                return default
            if not isinstance(value, str):
                raise ConfigError(
                    f"'{key}' must be a string, got {type(value).__name__}"
                )
            return value.strip() or default

        unknown_types = _text("unknown_types", "changed")
        if unknown_types not in UNKNOWN_TYPE_POLICIES:
            raise ConfigError(
                f"'unknown_types' must be one of {', '.join(UNKNOWN_TYPE_POLICIES)}, "
                f"got '{unknown_types}'"
            )

        tag_prefix = data.get("tag_prefix")
        if tag_prefix is not None and not isinstance(tag_prefix, str):
            raise ConfigError("'tag_prefix' must be a string")

        repository_url = _text("repository_url", None)
        return cls(
            root=root,
            fragments_dir=_text("fragments_dir", DEFAULT_FRAGMENTS_DIR),
            changelog=_text("changelog", DEFAULT_CHANGELOG),
            version_file=_text("version_file", DEFAULT_VERSION_FILE),
            repository_url=repository_url.rstrip("/") if repository_url else None,
            tag_prefix=DEFAULT_TAG_PREFIX if tag_prefix is None else tag_prefix.strip(),
            unknown_types=unknown_types,
        )


def config_path(root: Path) -> Path:
    return root / CHANGEKIT_DIR / CONFIG_FILENAME


def load_project_config(root: Path) -> ProjectConfig:
    """Load .changekit/config.yaml, falling back to defaults when absent."""
    path = config_path(root)
    if not path.exists():
        return ProjectConfig(root=root)

    yaml = YAML()
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle)
    except YAMLError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc

    return ProjectConfig.from_dict(root, payload)


def save_project_config(config: ProjectConfig) -> None:
    """Persist config into .changekit/config.yaml, preserving other keys."""
    path = config_path(config.root)
    path.parent.mkdir(parents=True, exist_ok=True)

    yaml = YAML()
    yaml.preserve_quotes = True

    payload: object = {}
    if path.exists():
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle) or {}
    if not isinstance(payload, dict):
        payload = {}

    for key, value in config.to_dict().items():
        if value is None:
            payload.pop(key, None)
        else:
            payload[key] = value

    with path.open("w", encoding="utf-8") as handle:
        yaml.dump(payload, handle)


__all__ = [
    "ProjectConfig",
    "UNKNOWN_TYPE_POLICIES",
    "config_path",
    "load_project_config",
    "save_project_config",
]
