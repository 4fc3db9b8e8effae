"""Publish one hosted release per released package.

Inputs come from the bump/changelog pipeline: the tags it created and one
note group per package (a single "fixed" group in fixed-versioning mode).
Groups without a tag are skipped silently; that is how packages with nothing
to release fall out of the run.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from roller.core.result import Err, Ok, Result
from roller.git.remote import RepoSlug, parse_git_repo
from roller.platform.process import CommandRunner, LiveRunner
from roller.release.clients import ReleaseClient
from roller.release.errors import ReleaseError
from roller.release.model import PublishedRelease, ReleaseNoteGroup, ReleaseRequest
from roller.release.semver import is_prerelease

__all__ = [
    "create_release",
    "publish_releases",
    "resolve_release_requests",
    "resolve_tag",
]

logger = logging.getLogger(__name__)


def resolve_tag(group: ReleaseNoteGroup, tags: Sequence[str]) -> str | None:
    if group.is_fixed:
        return tags[0] if tags else None
    prefix = f"{group.name}@"
    return next((tag for tag in tags if tag.startswith(prefix)), None)


def _version_of(group: ReleaseNoteGroup, tag: str) -> str:
    if group.is_fixed:
        return tag
    return tag.removeprefix(f"{group.name}@")


def resolve_release_requests(
    repo: RepoSlug,
    tags: Sequence[str],
    note_groups: Sequence[ReleaseNoteGroup],
) -> list[ReleaseRequest]:
    """Build a request for every note group that has a tag; drop the rest."""
    resolved = [(group, tag) for group in note_groups if (tag := resolve_tag(group, tags))]
    return [
        ReleaseRequest(
            owner=repo.owner,
            repo=repo.name,
            tag_name=tag,
            name=tag,
            body=group.notes,
            draft=False,
            prerelease=is_prerelease(_version_of(group, tag)),
        )
        for group, tag in resolved
    ]


async def create_release(
    client: ReleaseClient,
    tags: Sequence[str],
    note_groups: Sequence[ReleaseNoteGroup],
    *,
    git_remote: str = "origin",
    cwd: Path | None = None,
    runner: CommandRunner = LiveRunner(),
) -> Result[list[PublishedRelease], ReleaseError]:
    """Create all releases concurrently.

    Every dispatched call runs to completion. If any of them failed, the first
    failure (in note-group order) is returned and the successes are discarded.
    """
    repo = parse_git_repo(git_remote, cwd=cwd, runner=runner)
    if isinstance(repo, Err):
        return Err(
            ReleaseError(
                kind="invalid_remote",
                message=(
                    f"cannot resolve repository from remote {git_remote!r}: "
                    f"{repo.error.message}"
                ),
                hint="Pass --remote with a remote name or URL",
            )
        )

    requests = resolve_release_requests(repo.value, tags, note_groups)
    logger.debug(
        "dispatching %d release(s) to %s: %s",
        len(requests),
        repo.value.full_name,
        ", ".join(r.tag_name for r in requests),
    )

    results = await asyncio.gather(
        *(asyncio.to_thread(client.create_release, request) for request in requests)
    )

    published: list[PublishedRelease] = []
    for result in results:
        if isinstance(result, Err):
            return result
        published.append(result.value)
    return Ok(published)


def publish_releases(
    client: ReleaseClient,
    tags: Sequence[str],
    note_groups: Sequence[ReleaseNoteGroup],
    *,
    git_remote: str = "origin",
    cwd: Path | None = None,
    runner: CommandRunner = LiveRunner(),
) -> Result[list[PublishedRelease], ReleaseError]:
    """Blocking entry point for callers outside an event loop."""
    return asyncio.run(
        create_release(client, tags, note_groups, git_remote=git_remote, cwd=cwd, runner=runner)
    )
