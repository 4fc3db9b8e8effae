from __future__ import annotations

import logging
from pathlib import Path

from roller.core.log import TRACE
from roller.core.result import Err, Ok, Result
from roller.git.errors import GitError, from_process_error
from roller.platform.process import CommandRunner, LiveRunner

__all__ = ["DRY_RUN_BRANCH", "current_branch"]

logger = logging.getLogger(__name__)

DRY_RUN_BRANCH = "main"


def current_branch(
    *,
    cwd: Path | None = None,
    runner: CommandRunner = LiveRunner(),
) -> Result[str, GitError]:
    """Return the checked-out branch name.

    Under a dry-run runner nothing is spawned and the answer is always "main".
    """
    logger.log(TRACE, "current-branch")
    if runner.dry_run:
        logger.debug("current-branch %s (dry-run)", DRY_RUN_BRANCH)
        return Ok(DRY_RUN_BRANCH)

    result = runner.run(["git", "rev-parse", "--abbrev-ref", "HEAD"], cwd or Path.cwd())
    if isinstance(result, Err):
        return Err(from_process_error("rev-parse", result.error))

    branch = result.value.strip()
    logger.debug("current-branch %s", branch)
    return Ok(branch)
