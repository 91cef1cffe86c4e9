"""CLI helpers exposed for other modules."""

from .helpers import console, exit_with_error, print_json, project_config, project_root

__all__ = ["console", "exit_with_error", "print_json", "project_config", "project_root"]
