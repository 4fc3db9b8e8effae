"""Error presentation and exit code mapping for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from roller.core.config import ConfigError
from roller.core.errors import ErrorCode
from roller.git.errors import GitError
from roller.output.console import Style
from roller.release.errors import ReleaseError

if TYPE_CHECKING:
    from roller.output.console import ConsoleProtocol

__all__ = ["CommandError", "error_exit_code", "print_error"]

type CommandError = GitError | ReleaseError | ConfigError


def print_error(error: CommandError, console: ConsoleProtocol) -> None:
    match error:
        case GitError(command=command, message=message):
            console.error(f"git {command} failed: {message}")
        case ReleaseError(message=message, hint=hint):
            console.error(message)
            if hint:
                console.print(f"hint: {hint}", Style.DIM)
        case ConfigError(message=message, path=path):
            console.error(message if path is None else f"{path}: {message}")


def error_exit_code(error: CommandError) -> int:
    match error:
        case GitError():
            return int(ErrorCode.GIT_ERROR)
        case ConfigError():
            return int(ErrorCode.CONFIG_ERROR)
        case ReleaseError(kind="invalid_config"):
            return int(ErrorCode.CONFIG_ERROR)
        case ReleaseError(kind="invalid_remote"):
            return int(ErrorCode.GIT_ERROR)
        case ReleaseError(kind="release_failed" | "auth_required"):
            return int(ErrorCode.NETWORK_ERROR)
        case ReleaseError():
            return int(ErrorCode.USER_ERROR)
