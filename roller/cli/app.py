from __future__ import annotations

from pathlib import Path

import typer

from roller import __version__
from roller.cli.commands.branch import branch
from roller.cli.commands.describe import describe
from roller.cli.commands.release import release
from roller.cli.context import GlobalOptions
from roller.core.errors import ErrorCode
from roller.core.log import configure_logging


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command()(describe)
app.command()(branch)
app.command()(release)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="-v logs git queries, -vv also logs parsed results.",
    ),
    cwd: Path | None = typer.Option(
        None,
        "--cwd",
        help="Repository directory (defaults to the current directory).",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if cwd is not None:
        cwd = cwd.expanduser().resolve()
        if not cwd.is_dir():
            typer.echo(f"error: --cwd '{cwd}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    configure_logging(verbose)
    ctx.obj = GlobalOptions(cwd=cwd, verbose=verbose)


def main() -> None:
    app()
