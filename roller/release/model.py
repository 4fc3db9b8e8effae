from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Literal

# Name of the single note group produced in fixed-versioning mode.
FIXED_GROUP = "fixed"

ReleaseBump = Literal["major", "minor", "patch"]


@dataclass(frozen=True, slots=True)
class ReleaseNoteGroup:
    """Release notes for one package, or for the whole repo in fixed mode."""

    name: str
    notes: str

    @property
    def is_fixed(self) -> bool:
        return self.name == FIXED_GROUP


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    owner: str
    repo: str
    tag_name: str
    name: str
    body: str
    prerelease: bool
    draft: bool = False

    def github_payload(self) -> dict[str, object]:
        return {
            "tag_name": self.tag_name,
            "name": self.name,
            "body": self.body,
            "draft": self.draft,
            "prerelease": self.prerelease,
        }


@dataclass(frozen=True, slots=True)
class PublishedRelease:
    tag_name: str
    url: str | None = None


@dataclass(frozen=True, slots=True)
class BumpRecommendation:
    level: ReleaseBump
    reason: str


# Decides how far to bump from a list of commits; None means "nothing to release".
type WhatBump = Callable[[Sequence[str]], BumpRecommendation | None]
