"""Logging setup.

Modules log through ``logging.getLogger(__name__)``. Two detail levels sit
below INFO: DEBUG for queries and raw command output, TRACE for parsed
results.
"""

from __future__ import annotations

import logging

__all__ = ["TRACE", "configure_logging", "level_for_verbosity"]

TRACE = 5

logging.addLevelName(TRACE, "TRACE")


def level_for_verbosity(verbosity: int) -> int:
    if verbosity >= 2:
        return TRACE
    if verbosity == 1:
        return logging.DEBUG
    return logging.WARNING


def configure_logging(verbosity: int = 0) -> None:
    """Route roller logs to stderr through Rich."""
    from rich.console import Console
    from rich.logging import RichHandler

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    root = logging.getLogger("roller")
    root.handlers[:] = [handler]
    root.setLevel(level_for_verbosity(verbosity))
