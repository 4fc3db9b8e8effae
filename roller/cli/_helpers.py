"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from roller.core.result import Err, Ok, Result
from roller.output.errors import CommandError, error_exit_code, print_error

if TYPE_CHECKING:
    from roller.cli.context import CLIContext


def unwrap_or_exit[T](result: Result[T, CommandError], ctx: CLIContext) -> T:
    """Return the Ok value, or print the error and exit with its code."""
    match result:
        case Ok(value):
            return value
        case Err(error):
            print_error(error, ctx.console)
            raise typer.Exit(code=error_exit_code(error))
