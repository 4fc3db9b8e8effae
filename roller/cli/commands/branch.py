from __future__ import annotations

import typer

from roller.cli._helpers import unwrap_or_exit
from roller.cli.context import build_context
from roller.git.branch import current_branch
from roller.platform.process import runner_for


def branch(
    ctx: typer.Context,
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not run git."),
) -> None:
    """Print the current branch."""
    cli = build_context(ctx)
    name = unwrap_or_exit(current_branch(cwd=cli.cwd, runner=runner_for(dry_run)), cli)
    typer.echo(name)
