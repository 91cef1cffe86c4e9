"""Comparison links at the foot of the changelog."""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path

from changekit_cli.changelog.document import LINK_RE, links_start
from changekit_cli.core.constants import PENDING_MARKER

logger = logging.getLogger(__name__)

_SCP_REMOTE_RE = re.compile(r"^(?:[\w.-]+@)?(?P<host>[\w.-]+):(?P<path>[^/].*)$")


def normalize_remote_url(url: str) -> str | None:
    """Turn a git remote URL into an ``https://host/owner/repo`` base.

    Handles ``git@host:owner/repo.git``, ``ssh://git@host/owner/repo.git``
    and plain HTTPS remotes. Returns None for anything else.
    """
    url = url.strip()
    if not url:
        return None
    if url.startswith(("https://", "http://")):
        base = url
    elif url.startswith("ssh://"):
        rest = url[len("ssh://"):]
        host_part, _, path = rest.partition("/")
        host = host_part.rsplit("@", 1)[-1].split(":", 1)[0]
        base = f"https://{host}/{path}"
    else:
        match = _SCP_REMOTE_RE.match(url)
        if match is None:
            return None
        base = f"https://{match.group('host')}/{match.group('path')}"
    base = base.rstrip("/")
    if base.endswith(".git"):
        base = base[: -len(".git")]
    return base


def git_remote_url(root: Path) -> str | None:
    """Return the normalised ``origin`` remote of the repository at *root*."""
    try:
        result = subprocess.run(
            ["git", "config", "--get", "remote.origin.url"],
            cwd=root,
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except OSError as exc:
        logger.debug("git unavailable: %s", exc)
        return None
    if result.returncode != 0:
        return None
    return normalize_remote_url(result.stdout)


def existing_compare_base(lines: list[str], *, marker: str = PENDING_MARKER) -> str | None:
    """Base URL taken from an existing ``[<marker>]: <base>/compare/...`` link."""
    for line in lines[links_start(lines):]:
        match = LINK_RE.match(line)
        if match and match.group("label") == marker and "/compare/" in match.group("url"):
            return match.group("url").split("/compare/", 1)[0]
    return None


def resolve_repository_url(
    configured: str | None,
    lines: list[str],
    root: Path,
    *,
    marker: str = PENDING_MARKER,
) -> str | None:
    """Configured URL, else the existing pending link's base, else git origin."""
    if configured:
        return configured.rstrip("/")
    return existing_compare_base(lines, marker=marker) or git_remote_url(root)


def update_compare_links(
    lines: list[str],
    *,
    base: str,
    version: str,
    previous: str,
    tag_prefix: str = "v",
    marker: str = PENDING_MARKER,
) -> list[str]:
    """Point the pending link at *version* and add a link for *version*.

    The new version link sits directly below the pending link so the block
    stays newest-first. A document without a link block gets one appended.
    """
    pending_link = f"[{marker}]: {base}/compare/{tag_prefix}{version}...HEAD"
    version_link = f"[{version}]: {base}/compare/{tag_prefix}{previous}...{tag_prefix}{version}"

    start = links_start(lines)
    result = list(lines[:start])
    for line in lines[start:]:
        match = LINK_RE.match(line)
        if match and match.group("label") == version:
            continue
        result.append(line)

    for index in range(start, len(result)):
        match = LINK_RE.match(result[index])
        if match and match.group("label") == marker:
            result[index:index + 1] = [pending_link, version_link]
            return result

    if start < len(result):
        result[start:start] = [pending_link, version_link]
        return result

    while result and not result[-1].strip():
        result.pop()
    return result + ["", pending_link, version_link]


__all__ = [
    "existing_compare_base",
    "git_remote_url",
    "normalize_remote_url",
    "resolve_repository_url",
    "update_compare_links",
]
