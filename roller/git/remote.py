"""Remote URL parsing.

Accepts either a remote name ("origin"), looked up through git config, or a
remote URL in one of the forms git itself understands:

    git@github.com:owner/repo.git
    ssh://git@gitlab.example.com:2222/group/subgroup/repo.git
    git://host/owner/repo
    https://github.com/owner/repo
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit

from roller.core.result import Err, Ok, Result
from roller.git.errors import GitError, from_process_error
from roller.platform.process import CommandRunner, LiveRunner

__all__ = ["RepoSlug", "parse_git_repo", "parse_remote_url"]

logger = logging.getLogger(__name__)

# user@host:path, but not scheme://
_SCP_LIKE_RE = re.compile(r"^(?:[\w.+-]+@)?(?P<host>[\w.-]+):(?!//)(?P<path>.+)$")
_URL_SCHEMES = frozenset({"http", "https", "ssh", "git", "git+ssh", "ssh+git"})


@dataclass(frozen=True, slots=True)
class RepoSlug:
    """Hosted repository coordinates.

    ``owner`` keeps the full namespace, so GitLab subgroups read
    "group/subgroup".
    """

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


def _slug_from_path(path: str) -> RepoSlug | None:
    path = path.strip().strip("/")
    path = path.removesuffix(".git").rstrip("/")
    parts = [p for p in path.split("/") if p]
    if len(parts) < 2:
        return None
    return RepoSlug(owner="/".join(parts[:-1]), name=parts[-1])


def parse_remote_url(url: str) -> RepoSlug | None:
    """Parse a remote URL into owner/name, or None when it is not one."""
    url = url.strip()
    if not url:
        return None

    if "://" in url:
        parts = urlsplit(url)
        if parts.scheme.lower() not in _URL_SCHEMES or not parts.netloc:
            return None
        return _slug_from_path(parts.path)

    scp = _SCP_LIKE_RE.match(url)
    if scp is None:
        return None
    return _slug_from_path(scp.group("path"))


def _looks_like_url(remote: str) -> bool:
    return ":" in remote or "/" in remote


def parse_git_repo(
    remote: str = "origin",
    *,
    cwd: Path | None = None,
    runner: CommandRunner = LiveRunner(),
) -> Result[RepoSlug, GitError]:
    """Resolve a remote name or URL to the hosted repository it points at."""
    url = remote
    if not _looks_like_url(remote):
        result = runner.run(["git", "config", "--get", f"remote.{remote}.url"], cwd or Path.cwd())
        if isinstance(result, Err):
            return Err(from_process_error("config", result.error))
        url = result.value.strip()
        if not url:
            return Err(
                GitError(
                    command="config",
                    message=f'Git remote URL could not be found using "{remote}".',
                )
            )

    slug = parse_remote_url(url)
    if slug is None:
        return Err(GitError(command="remote", message=f"unrecognised remote URL: {url}"))

    logger.debug("remote %s => %s", remote, slug.full_name)
    return Ok(slug)
