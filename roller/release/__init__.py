"""Release publishing for independently or fixed-versioned monorepos."""

from roller.release.bump import next_version, version_from_description
from roller.release.clients import (
    GitHubReleaseClient,
    GitLabReleaseClient,
    ReleaseClient,
    create_release_client,
)
from roller.release.errors import ReleaseError
from roller.release.model import (
    FIXED_GROUP,
    BumpRecommendation,
    PublishedRelease,
    ReleaseNoteGroup,
    ReleaseRequest,
)
from roller.release.publish import (
    create_release,
    publish_releases,
    resolve_release_requests,
    resolve_tag,
)

__all__ = [
    "FIXED_GROUP",
    "BumpRecommendation",
    "GitHubReleaseClient",
    "GitLabReleaseClient",
    "PublishedRelease",
    "ReleaseClient",
    "ReleaseError",
    "ReleaseNoteGroup",
    "ReleaseRequest",
    "create_release",
    "create_release_client",
    "next_version",
    "publish_releases",
    "resolve_release_requests",
    "resolve_tag",
    "version_from_description",
]
