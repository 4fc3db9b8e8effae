"""Subprocess execution with Result-based error handling.

Two layers live here:

- ``run`` / ``run_async``: thin wrappers around ``subprocess.run`` and
  ``asyncio.create_subprocess_exec`` that capture stdout and turn failures
  into ``ProcessError`` values.
- ``CommandRunner`` policies: ``LiveRunner`` delegates to the functions above,
  ``DryRunRunner`` logs the command and answers ``Ok("")`` without spawning
  anything. Git helpers take a runner so dry-run behaviour is decided once,
  at the execution boundary.

Usage:
    runner = runner_for(dry_run=False)
    match runner.run(["git", "rev-parse", "HEAD"], cwd=repo):
        case Ok(stdout):
            print(stdout.strip())
        case Err(error):
            print(f"failed: {error.stderr}")
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from roller.core.result import Err, Ok, Result

__all__ = [
    "CommandRunner",
    "DryRunRunner",
    "LiveRunner",
    "MockRunner",
    "ProcessError",
    "run",
    "run_async",
    "runner_for",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code, or -1 when the process could not start.
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def run(
    cmd: list[str],
    cwd: Path,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return its stdout or a ProcessError."""
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


async def run_async(
    cmd: list[str],
    cwd: Path,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Suspending counterpart of ``run`` with the same error mapping."""
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=str(cwd),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    try:
        out, err = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except TimeoutError:
        proc.kill()
        await proc.wait()
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=f"Command timed out after {timeout}s",
            )
        )

    stdout = out.decode("utf-8", errors="replace")
    stderr = err.decode("utf-8", errors="replace")
    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode if proc.returncode is not None else -1,
                stdout=stdout,
                stderr=stderr,
            )
        )

    return Ok(stdout)


@runtime_checkable
class CommandRunner(Protocol):
    """Execution policy handed to every git helper."""

    @property
    def dry_run(self) -> bool: ...

    def run(self, cmd: list[str], cwd: Path) -> Result[str, ProcessError]: ...

    async def run_async(self, cmd: list[str], cwd: Path) -> Result[str, ProcessError]: ...


@dataclass(frozen=True, slots=True)
class LiveRunner:
    timeout: float | None = 30.0

    @property
    def dry_run(self) -> bool:
        return False

    def run(self, cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
        return run(cmd, cwd, timeout=self.timeout)

    async def run_async(self, cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
        return await run_async(cmd, cwd, timeout=self.timeout)


@dataclass(frozen=True, slots=True)
class DryRunRunner:
    """Never spawns a process; every command succeeds with empty output."""

    placeholder: str = ""

    @property
    def dry_run(self) -> bool:
        return True

    def run(self, cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
        logger.info("dry-run: %s (cwd=%s)", " ".join(cmd), cwd)
        return Ok(self.placeholder)

    async def run_async(self, cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
        return self.run(cmd, cwd)


def runner_for(dry_run: bool) -> CommandRunner:
    return DryRunRunner() if dry_run else LiveRunner()


class MockRunner:
    """Runner for tests: replays canned outputs and records every command.

    Commands without a canned response fail like git would (exit 128).

    Usage:
        runner = MockRunner({("git", "rev-list", "--count", "abc1234"): "42"})
    """

    def __init__(
        self,
        responses: dict[tuple[str, ...], str | ProcessError] | None = None,
        *,
        dry_run: bool = False,
    ) -> None:
        self._responses = dict(responses or {})
        self._dry_run = dry_run
        self.calls: list[list[str]] = []

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    def set_response(self, cmd: list[str], response: str | ProcessError) -> None:
        self._responses[tuple(cmd)] = response

    def run(self, cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
        del cwd
        self.calls.append(list(cmd))
        response = self._responses.get(tuple(cmd))
        if response is None:
            return Err(
                ProcessError(
                    command=tuple(cmd),
                    returncode=128,
                    stdout="",
                    stderr=f"unexpected command: {' '.join(cmd)}",
                )
            )
        if isinstance(response, ProcessError):
            return Err(response)
        return Ok(response)

    async def run_async(self, cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
        return self.run(cmd, cwd)
