from __future__ import annotations

from pathlib import Path

import typer

from roller.cli._helpers import unwrap_or_exit
from roller.cli.context import CLIContext, build_context
from roller.core.errors import ErrorCode
from roller.core.result import Err, Ok, Result
from roller.git.remote import parse_git_repo
from roller.output.console import Style
from roller.release.clients import create_release_client
from roller.release.model import ReleaseNoteGroup
from roller.release.publish import publish_releases, resolve_release_requests


def _read_note_groups(entries: list[str], cwd: Path) -> Result[list[ReleaseNoteGroup], str]:
    groups: list[ReleaseNoteGroup] = []
    for entry in entries:
        name, sep, file_name = entry.partition("=")
        if not sep or not name.strip() or not file_name.strip():
            return Err(f"invalid --notes value {entry!r} (expected NAME=FILE)")
        path = Path(file_name.strip())
        if not path.is_absolute():
            path = cwd / path
        try:
            notes = path.read_text(encoding="utf-8")
        except OSError as e:
            return Err(f"cannot read notes for {name.strip()}: {e}")
        groups.append(ReleaseNoteGroup(name=name.strip(), notes=notes))
    return Ok(groups)


def _print_plan(
    cli: CLIContext,
    remote: str,
    tags: list[str],
    groups: list[ReleaseNoteGroup],
) -> None:
    repo = unwrap_or_exit(parse_git_repo(remote, cwd=cli.cwd), cli)
    requests = resolve_release_requests(repo, tags, groups)
    cli.console.header(f"dry-run: {len(requests)} release(s) for {repo.full_name}")
    for request in requests:
        suffix = " (prerelease)" if request.prerelease else ""
        cli.console.print(f"  {request.tag_name}{suffix}")
    skipped = len(groups) - len(requests)
    if skipped:
        cli.console.print(f"  {skipped} group(s) without a tag", Style.DIM)


def release(
    ctx: typer.Context,
    tags: list[str] = typer.Option(
        ..., "--tag", help="Tag created by the version bump (repeatable)."
    ),
    notes: list[str] = typer.Option(
        ...,
        "--notes",
        help="NAME=FILE release notes for a package, or fixed=FILE (repeatable).",
    ),
    client_type: str | None = typer.Option(None, "--client", help="github or gitlab."),
    remote: str | None = typer.Option(None, "--remote", help="Git remote name or URL."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show releases without creating them."),
) -> None:
    """Create hosted releases for the given tags."""
    cli = build_context(ctx)

    groups_result = _read_note_groups(notes, cli.cwd)
    if isinstance(groups_result, Err):
        cli.console.error(groups_result.error)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    groups = groups_result.value

    git_remote = remote or cli.config.release.remote
    if dry_run:
        _print_plan(cli, git_remote, tags, groups)
        return

    release_client = unwrap_or_exit(
        create_release_client(client_type or cli.config.release.client), cli
    )

    published = unwrap_or_exit(
        publish_releases(release_client, tags, groups, git_remote=git_remote, cwd=cli.cwd),
        cli,
    )
    for item in published:
        cli.console.success(f"{item.tag_name} {item.url or ''}".rstrip())
