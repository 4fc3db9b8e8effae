"""Platform abstraction layer."""

from .process import (
    CommandRunner,
    DryRunRunner,
    LiveRunner,
    MockRunner,
    ProcessError,
    run,
    run_async,
    runner_for,
)

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
