from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from roller.core.config import Config, load_config_or_default
from roller.core.result import Err
from roller.output.console import ConsoleProtocol, RichConsole
from roller.output.errors import error_exit_code, print_error


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    cwd: Path | None = None
    verbose: int = 0


@dataclass(frozen=True, slots=True)
class CLIContext:
    cwd: Path
    config: Config
    console: ConsoleProtocol


def build_context(ctx: typer.Context) -> CLIContext:
    options = ctx.obj if isinstance(ctx.obj, GlobalOptions) else GlobalOptions()
    cwd = options.cwd if options.cwd is not None else Path.cwd()
    console = RichConsole()

    config_result = load_config_or_default(cwd)
    if isinstance(config_result, Err):
        print_error(config_result.error, console)
        raise typer.Exit(code=error_exit_code(config_result.error))

    return CLIContext(cwd=cwd, config=config_result.value, console=console)
