from __future__ import annotations

import json
from dataclasses import asdict

import typer

from roller.cli._helpers import unwrap_or_exit
from roller.cli.context import build_context
from roller.git.describe import DescribeQuery, DetailedDescription, describe_ref
from roller.platform.process import runner_for


def describe(
    ctx: typer.Context,
    match: str | None = typer.Option(
        None, "--match", help="Only consider tags matching this glob."
    ),
    include_merged_tags: bool = typer.Option(
        False,
        "--include-merged-tags",
        help="Also consider tags reachable through merged branches.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not run git."),
) -> None:
    """Describe HEAD relative to the nearest release tag."""
    cli = build_context(ctx)
    query = DescribeQuery(
        match=match if match is not None else cli.config.describe.match,
        include_merged_tags=include_merged_tags or cli.config.describe.include_merged_tags,
        cwd=cli.cwd,
    )
    description = unwrap_or_exit(describe_ref(query, runner=runner_for(dry_run)), cli)

    if as_json:
        kind = "detailed" if isinstance(description, DetailedDescription) else "fallback"
        typer.echo(json.dumps({"kind": kind, **asdict(description)}, sort_keys=True))
        return

    if isinstance(description, DetailedDescription):
        cli.console.header("tagged")
        cli.console.field("tag", description.last_tag_name)
        cli.console.field("version", description.last_version)
        cli.console.field("commits since", description.ref_count)
    else:
        cli.console.header("untagged")
        cli.console.field("commits", description.ref_count)
    cli.console.field("sha", description.sha)
    cli.console.field("dirty", description.is_dirty)
