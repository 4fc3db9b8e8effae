from __future__ import annotations

from dataclasses import dataclass

from roller.platform.process import ProcessError

__all__ = ["GitError", "from_process_error"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed (e.g. "describe")
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1

    def __str__(self) -> str:
        return f"git {self.command}: {self.message}"


def from_process_error(command: str, error: ProcessError) -> GitError:
    return GitError(
        command=command,
        message=error.stderr.strip() or error.stdout.strip() or f"git {command} failed",
        returncode=error.returncode,
    )
