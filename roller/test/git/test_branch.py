"""Tests for git/branch.py."""

from __future__ import annotations

from pathlib import Path

from roller.core.result import Err, Ok
from roller.git.branch import current_branch
from roller.platform.process import DryRunRunner, MockRunner

_REV_PARSE = ("git", "rev-parse", "--abbrev-ref", "HEAD")


def test_current_branch_strips_output(tmp_path: Path) -> None:
    runner = MockRunner({_REV_PARSE: "feature/release-notes\n"})

    assert current_branch(cwd=tmp_path, runner=runner) == Ok("feature/release-notes")
    assert runner.calls == [list(_REV_PARSE)]


def test_dry_run_returns_main_without_running_git(tmp_path: Path) -> None:
    runner = MockRunner(dry_run=True)

    assert current_branch(cwd=tmp_path, runner=runner) == Ok("main")
    assert runner.calls == []


def test_dry_run_runner(tmp_path: Path) -> None:
    assert current_branch(cwd=tmp_path, runner=DryRunRunner()) == Ok("main")


def test_failure_is_git_error(tmp_path: Path) -> None:
    result = current_branch(cwd=tmp_path, runner=MockRunner())

    assert isinstance(result, Err)
    assert result.error.command == "rev-parse"
    assert result.error.returncode == 128
