"""Core utilities and configuration exports."""

from .config import ProjectConfig, load_project_config, save_project_config
from .fileio import atomic_write_text
from .paths import locate_project_root, resolve_project_root

__all__ = [
    "ProjectConfig",
    "atomic_write_text",
    "load_project_config",
    "locate_project_root",
    "resolve_project_root",
    "save_project_config",
]
