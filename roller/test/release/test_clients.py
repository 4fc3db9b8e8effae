"""Tests for release/clients.py."""

from __future__ import annotations

from roller.core.result import Err, Ok
from roller.release.clients import (
    GITHUB_API_URL,
    GitHubReleaseClient,
    GitLabReleaseClient,
    ReleaseClient,
    create_release_client,
)
from roller.release.http import HttpError, MockHttpClient
from roller.release.model import PublishedRelease, ReleaseRequest


def _request(**overrides: object) -> ReleaseRequest:
    fields: dict[str, object] = {
        "owner": "acme",
        "repo": "monorepo",
        "tag_name": "pkg-a@1.0.0-beta.1",
        "name": "pkg-a@1.0.0-beta.1",
        "body": "## Features\n",
        "prerelease": True,
    }
    fields.update(overrides)
    return ReleaseRequest(**fields)  # type: ignore[arg-type]


class TestCreateReleaseClient:
    def test_github(self) -> None:
        result = create_release_client("github", env={}, http=MockHttpClient())

        assert isinstance(result, Ok)
        assert isinstance(result.value, GitHubReleaseClient)
        assert isinstance(result.value, ReleaseClient)

    def test_gitlab(self) -> None:
        result = create_release_client("gitlab", env={}, http=MockHttpClient())

        assert isinstance(result, Ok)
        assert isinstance(result.value, GitLabReleaseClient)
        assert isinstance(result.value, ReleaseClient)

    def test_distinct_instances(self) -> None:
        github = create_release_client("github", env={}, http=MockHttpClient())
        gitlab = create_release_client("gitlab", env={}, http=MockHttpClient())

        assert isinstance(github, Ok) and isinstance(gitlab, Ok)
        assert type(github.value) is not type(gitlab.value)

    def test_unknown_type_is_config_error(self) -> None:
        http = MockHttpClient()

        result = create_release_client("bogus", env={}, http=http)

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_config"
        assert http.posts == []

    def test_reads_environment(self) -> None:
        env = {"GH_TOKEN": "gh-secret", "GHE_API_URL": "https://ghe.example.com/api/v3/"}

        result = create_release_client("github", env=env, http=MockHttpClient())

        assert isinstance(result, Ok)
        client = result.value
        assert isinstance(client, GitHubReleaseClient)
        assert client.token == "gh-secret"
        assert client.api_url == "https://ghe.example.com/api/v3"

    def test_github_token_fallback(self) -> None:
        result = create_release_client("github", env={"GITHUB_TOKEN": "t"}, http=MockHttpClient())

        assert isinstance(result, Ok)
        assert isinstance(result.value, GitHubReleaseClient)
        assert result.value.token == "t"
        assert result.value.api_url == GITHUB_API_URL


class TestGitHubReleaseClient:
    def test_posts_release(self) -> None:
        http = MockHttpClient()
        url = "https://api.github.com/repos/acme/monorepo/releases"
        http.set_response(url, {"html_url": "https://github.com/acme/monorepo/releases/1"})
        client = GitHubReleaseClient(http, token="abc")

        result = client.create_release(_request())

        assert result == Ok(
            PublishedRelease(
                tag_name="pkg-a@1.0.0-beta.1",
                url="https://github.com/acme/monorepo/releases/1",
            )
        )
        post = http.posts[0]
        assert post.url == url
        assert post.payload == {
            "tag_name": "pkg-a@1.0.0-beta.1",
            "name": "pkg-a@1.0.0-beta.1",
            "body": "## Features\n",
            "draft": False,
            "prerelease": True,
        }
        assert post.headers["Authorization"] == "token abc"

    def test_no_token_no_auth_header(self) -> None:
        http = MockHttpClient()

        GitHubReleaseClient(http).create_release(_request())

        assert "Authorization" not in http.posts[0].headers

    def test_unauthorized_maps_to_auth_required(self) -> None:
        http = MockHttpClient()
        url = "https://api.github.com/repos/acme/monorepo/releases"
        http.set_response(url, HttpError(url=url, status=401, message="Bad credentials"))

        result = GitHubReleaseClient(http).create_release(_request())

        assert isinstance(result, Err)
        assert result.error.kind == "auth_required"

    def test_other_failure_maps_to_release_failed(self) -> None:
        http = MockHttpClient()
        url = "https://api.github.com/repos/acme/monorepo/releases"
        http.set_response(url, HttpError(url=url, status=422, message="already_exists"))

        result = GitHubReleaseClient(http).create_release(_request())

        assert isinstance(result, Err)
        assert result.error.kind == "release_failed"
        assert "pkg-a@1.0.0-beta.1" in result.error.message


class TestGitLabReleaseClient:
    def test_posts_release_to_encoded_project(self) -> None:
        http = MockHttpClient()
        url = "https://gitlab.example.com/api/v4/projects/group%2Fsub%2Fmonorepo/releases"
        http.set_response(url, {"_links": {"self": "https://gitlab.example.com/r/1"}})
        client = GitLabReleaseClient(
            http, token="gl", api_url="https://gitlab.example.com/api/v4/"
        )

        result = client.create_release(_request(owner="group/sub"))

        assert result == Ok(
            PublishedRelease(tag_name="pkg-a@1.0.0-beta.1", url="https://gitlab.example.com/r/1")
        )
        post = http.posts[0]
        assert post.url == url
        assert post.payload == {
            "tag_name": "pkg-a@1.0.0-beta.1",
            "name": "pkg-a@1.0.0-beta.1",
            "description": "## Features\n",
        }
        assert post.headers == {"PRIVATE-TOKEN": "gl"}

    def test_missing_links(self) -> None:
        result = GitLabReleaseClient(MockHttpClient()).create_release(_request())

        assert result == Ok(PublishedRelease(tag_name="pkg-a@1.0.0-beta.1", url=None))
