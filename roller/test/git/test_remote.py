"""Tests for git/remote.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from roller.core.result import Err, Ok
from roller.git.remote import RepoSlug, parse_git_repo, parse_remote_url
from roller.platform.process import MockRunner


class TestParseRemoteUrl:
    @pytest.mark.parametrize(
        ("url", "owner", "name"),
        [
            ("git@github.com:acme/widgets.git", "acme", "widgets"),
            ("git@github.com:acme/widgets", "acme", "widgets"),
            ("https://github.com/acme/widgets", "acme", "widgets"),
            ("https://github.com/acme/widgets.git/", "acme", "widgets"),
            ("https://token@github.com/acme/widgets.git", "acme", "widgets"),
            ("ssh://git@gitlab.example.com:2222/group/sub/widgets.git", "group/sub", "widgets"),
            ("git://example.org/acme/widgets", "acme", "widgets"),
            ("gitlab.com:group/sub/widgets.git", "group/sub", "widgets"),
        ],
    )
    def test_supported_forms(self, url: str, owner: str, name: str) -> None:
        assert parse_remote_url(url) == RepoSlug(owner=owner, name=name)

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "https://github.com/widgets",
            "file:///tmp/acme/widgets",
            "git@github.com:widgets.git",
        ],
    )
    def test_unsupported(self, url: str) -> None:
        assert parse_remote_url(url) is None

    def test_full_name(self) -> None:
        assert RepoSlug(owner="group/sub", name="widgets").full_name == "group/sub/widgets"


class TestParseGitRepo:
    def test_url_needs_no_git(self, tmp_path: Path) -> None:
        runner = MockRunner()

        result = parse_git_repo("git@github.com:acme/widgets.git", cwd=tmp_path, runner=runner)

        assert result == Ok(RepoSlug(owner="acme", name="widgets"))
        assert runner.calls == []

    def test_remote_name_is_looked_up(self, tmp_path: Path) -> None:
        runner = MockRunner(
            {("git", "config", "--get", "remote.upstream.url"): "https://github.com/acme/w.git\n"}
        )

        result = parse_git_repo("upstream", cwd=tmp_path, runner=runner)

        assert result == Ok(RepoSlug(owner="acme", name="w"))

    def test_unknown_remote(self, tmp_path: Path) -> None:
        result = parse_git_repo("origin", cwd=tmp_path, runner=MockRunner())

        assert isinstance(result, Err)
        assert result.error.command == "config"

    def test_empty_remote_url(self, tmp_path: Path) -> None:
        runner = MockRunner({("git", "config", "--get", "remote.origin.url"): "\n"})

        result = parse_git_repo("origin", cwd=tmp_path, runner=runner)

        assert isinstance(result, Err)
        assert "origin" in result.error.message

    def test_unparseable_url(self, tmp_path: Path) -> None:
        result = parse_git_repo("https://example.org/", cwd=tmp_path, runner=MockRunner())

        assert isinstance(result, Err)
        assert result.error.command == "remote"
