"""Git queries used to derive version state.

- describe_ref / describe_ref_async: nearest tag, distance, sha, dirtiness
- current_branch: checked-out branch (dry-run aware)
- parse_git_repo: remote name or URL to owner/name
"""

from roller.git.branch import current_branch
from roller.git.describe import (
    DescribeQuery,
    Description,
    DetailedDescription,
    FallbackDescription,
    describe_args,
    describe_ref,
    describe_ref_async,
)
from roller.git.errors import GitError
from roller.git.remote import RepoSlug, parse_git_repo, parse_remote_url

__all__ = [
    "DescribeQuery",
    "Description",
    "DetailedDescription",
    "FallbackDescription",
    "GitError",
    "RepoSlug",
    "current_branch",
    "describe_args",
    "describe_ref",
    "describe_ref_async",
    "parse_git_repo",
    "parse_remote_url",
]
