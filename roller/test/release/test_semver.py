"""Tests for release/semver.py."""

from __future__ import annotations

import pytest

from roller.release.semver import SemVer, is_prerelease, parse_version, prerelease_parts


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1.2.3", SemVer(1, 2, 3)),
        ("v1.2.3", SemVer(1, 2, 3)),
        ("1.0.0-beta.1", SemVer(1, 0, 0, ("beta", "1"))),
        ("2.0.0-rc.1+build.5", SemVer(2, 0, 0, ("rc", "1"))),
        ("1.0.0+sha.abc", SemVer(1, 0, 0)),
    ],
)
def test_parse_version(text: str, expected: SemVer) -> None:
    assert parse_version(text) == expected


@pytest.mark.parametrize(
    "text", ["", "1.2", "01.2.3", "1.2.3-", "1.2.3-01", "pkg@1.0.0", "=1.2.3", "vv1.2.3"]
)
def test_parse_version_rejects(text: str) -> None:
    assert parse_version(text) is None


def test_prerelease_parts() -> None:
    assert prerelease_parts("1.0.0-beta.1") == ("beta", "1")
    assert prerelease_parts("1.0.0") == ()
    assert prerelease_parts("not-a-version") == ()


def test_is_prerelease() -> None:
    assert is_prerelease("v3.0.0-alpha") is True
    assert is_prerelease("3.0.0") is False
    assert is_prerelease("garbage") is False


def test_str_round_trips_prerelease() -> None:
    assert str(SemVer(1, 2, 3, ("beta", "4"))) == "1.2.3-beta.4"
    assert str(SemVer(1, 2, 3)) == "1.2.3"


@pytest.mark.parametrize(
    ("kind", "expected"),
    [("major", SemVer(2, 0, 0)), ("minor", SemVer(1, 3, 0)), ("patch", SemVer(1, 2, 4))],
)
def test_bump(kind: str, expected: SemVer) -> None:
    assert SemVer(1, 2, 3).bump(kind) == expected  # type: ignore[arg-type]


def test_base_drops_prerelease() -> None:
    assert SemVer(1, 0, 0, ("rc", "2")).base == SemVer(1, 0, 0)
