"""Next-version computation.

How far to bump is not decided here: callers inject a ``WhatBump`` function
(typically a conventional-commits classifier). This module only applies its
decision to the version found by ``describe_ref``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from roller.core.result import Err, Ok, Result
from roller.git.describe import Description, DetailedDescription
from roller.release.errors import ReleaseError
from roller.release.model import ReleaseBump, WhatBump
from roller.release.semver import SemVer, parse_version

__all__ = ["next_version", "version_from_description"]

logger = logging.getLogger(__name__)


def version_from_description(description: Description) -> str | None:
    """Last released version, or None when history carries no usable tag."""
    if isinstance(description, DetailedDescription):
        return description.last_version
    return None


def _next_prerelease(current: SemVer, preid: str) -> SemVer:
    pre = current.prerelease
    if len(pre) == 2 and pre[0] == preid and pre[1].isdigit():
        return SemVer(current.major, current.minor, current.patch, (preid, str(int(pre[1]) + 1)))
    return SemVer(current.major, current.minor, current.patch, (preid, "0"))


def _graduate(current: SemVer, level: ReleaseBump) -> SemVer:
    # a prerelease already sitting on the bumped boundary releases as its base
    match level:
        case "major" if current.minor == 0 and current.patch == 0:
            return current.base
        case "minor" if current.patch == 0:
            return current.base
        case "patch":
            return current.base
        case _:
            return current.bump(level)


def next_version(
    current: str,
    commits: Sequence[str],
    what_bump: WhatBump,
    *,
    preid: str | None = None,
) -> Result[str, ReleaseError]:
    parsed = parse_version(current)
    if parsed is None:
        return Err(
            ReleaseError(
                kind="invalid_version",
                message=f"not a semantic version: {current!r}",
            )
        )

    recommendation = what_bump(commits)
    if recommendation is None:
        logger.debug("no bump for %s (%d commits)", current, len(commits))
        return Ok(current)

    logger.debug("bump %s: %s (%s)", current, recommendation.level, recommendation.reason)

    if parsed.is_prerelease:
        if preid:
            bumped = _next_prerelease(parsed, preid)
        else:
            bumped = _graduate(parsed, recommendation.level)
    else:
        bumped = parsed.bump(recommendation.level)
        if preid:
            bumped = SemVer(bumped.major, bumped.minor, bumped.patch, (preid, "0"))

    return Ok(str(bumped))
