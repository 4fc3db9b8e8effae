"""Structured ``git describe`` for independently tagged packages.

``git describe --always --long --dirty --first-parent`` answers in one of two
grammars:

- ``<sha>[-dirty]`` when no matching annotated tag is reachable. The history
  depth is then queried separately with ``git rev-list --count <sha>``.
- ``<tag>-<distance>-g<sha>[-dirty]`` otherwise, where ``<tag>`` may be
  ``scope@version``.

Output matching neither grammar is not an error: it yields a
``DetailedDescription`` whose fields are all ``None``.

Usage:
    match describe_ref(DescribeQuery(match="pkg-a@*")):
        case Ok(DetailedDescription(last_version=version, ref_count=distance)):
            print(f"{version} + {distance} commits")
        case Ok(FallbackDescription(ref_count=count)):
            print(f"untagged, {count} commits")
        case Err(error):
            print(error)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from roller.core.log import TRACE
from roller.core.result import Err, Ok, Result
from roller.git.errors import GitError, from_process_error
from roller.platform.process import CommandRunner, LiveRunner

__all__ = [
    "DescribeQuery",
    "Description",
    "DetailedDescription",
    "FallbackDescription",
    "describe_args",
    "describe_ref",
    "describe_ref_async",
]

logger = logging.getLogger(__name__)

_MINIMAL_SHA_RE = re.compile(r"^([0-9a-f]{7,40})(-dirty)?$")
# the version group drops one leading "v": "scope@v1.2.3" -> "1.2.3"
_DETAILED_RE = re.compile(r"^((?:.*@)?v?(.*))-(\d+)-g([0-9a-f]+)(-dirty)?$")

_LIVE = LiveRunner()


@dataclass(frozen=True, slots=True)
class DescribeQuery:
    """Inputs of a describe call.

    Attributes:
        match: Glob passed to ``--match``
        include_merged_tags: Consider tags reachable through merged branches
            (drops ``--first-parent``)
        cwd: Repository directory; defaults to the process working directory
    """

    match: str | None = None
    include_merged_tags: bool = False
    cwd: Path | None = None

    @property
    def workdir(self) -> Path:
        return self.cwd if self.cwd is not None else Path.cwd()


@dataclass(frozen=True, slots=True)
class FallbackDescription:
    """No annotated tag matched; ``ref_count`` counts all commits up to ``sha``."""

    ref_count: str
    sha: str
    is_dirty: bool


@dataclass(frozen=True, slots=True)
class DetailedDescription:
    """An annotated tag matched.

    Every field but ``is_dirty`` is None when describe output was unrecognised.
    """

    last_tag_name: str | None
    last_version: str | None
    ref_count: str | None
    sha: str | None
    is_dirty: bool


type Description = FallbackDescription | DetailedDescription


@dataclass(frozen=True, slots=True)
class _ShaOnly:
    sha: str
    is_dirty: bool


def describe_args(query: DescribeQuery) -> list[str]:
    """Build the ``git describe`` argument list (without the ``git`` prefix)."""
    args = [
        "describe",
        # fall back to the abbreviated sha when no tag is reachable
        "--always",
        # always emit tag-distance-sha
        "--long",
        "--dirty",
        # prefer tags created on the upstream branch
        "--first-parent",
    ]

    if query.match:
        args.extend(["--match", query.match])

    if query.include_merged_tags:
        args = [arg for arg in args if arg != "--first-parent"]

    return args


def _match(stdout: str) -> _ShaOnly | DetailedDescription:
    sha_only = _MINIMAL_SHA_RE.match(stdout)
    if sha_only is not None:
        return _ShaOnly(sha=sha_only.group(1), is_dirty=sha_only.group(2) is not None)

    detailed = _DETAILED_RE.match(stdout)
    if detailed is None:
        return DetailedDescription(
            last_tag_name=None,
            last_version=None,
            ref_count=None,
            sha=None,
            is_dirty=False,
        )

    last_tag_name, last_version, ref_count, sha, dirty = detailed.groups()
    return DetailedDescription(
        last_tag_name=last_tag_name,
        last_version=last_version,
        ref_count=ref_count,
        sha=sha,
        is_dirty=dirty is not None,
    )


def _rev_list_args(sha: str) -> list[str]:
    return ["git", "rev-list", "--count", sha]


def _log_parsed(query: DescribeQuery, stdout: str, result: Description) -> None:
    logger.debug("git-describe %r => %r", query.match, stdout)
    logger.log(TRACE, "git-describe parsed => %r", result)


def describe_ref(
    query: DescribeQuery = DescribeQuery(),
    *,
    runner: CommandRunner = _LIVE,
) -> Result[Description, GitError]:
    """Describe HEAD relative to the nearest matching tag (blocking)."""
    cwd = query.workdir
    described = runner.run(["git", *describe_args(query)], cwd)
    if isinstance(described, Err):
        return Err(from_process_error("describe", described.error))

    stdout = described.value.strip()
    matched = _match(stdout)

    result: Description
    if isinstance(matched, _ShaOnly):
        # count commits since the beginning of history
        counted = runner.run(_rev_list_args(matched.sha), cwd)
        if isinstance(counted, Err):
            return Err(from_process_error("rev-list", counted.error))
        result = FallbackDescription(
            ref_count=counted.value.strip(), sha=matched.sha, is_dirty=matched.is_dirty
        )
    else:
        result = matched

    _log_parsed(query, stdout, result)
    return Ok(result)


async def describe_ref_async(
    query: DescribeQuery = DescribeQuery(),
    *,
    runner: CommandRunner = _LIVE,
) -> Result[Description, GitError]:
    """Describe HEAD relative to the nearest matching tag (suspending)."""
    cwd = query.workdir
    described = await runner.run_async(["git", *describe_args(query)], cwd)
    if isinstance(described, Err):
        return Err(from_process_error("describe", described.error))

    stdout = described.value.strip()
    matched = _match(stdout)

    result: Description
    if isinstance(matched, _ShaOnly):
        counted = await runner.run_async(_rev_list_args(matched.sha), cwd)
        if isinstance(counted, Err):
            return Err(from_process_error("rev-list", counted.error))
        result = FallbackDescription(
            ref_count=counted.value.strip(), sha=matched.sha, is_dirty=matched.is_dirty
        )
    else:
        result = matched

    _log_parsed(query, stdout, result)
    return Ok(result)
