"""Provider release clients.

Both clients expose ``create_release(request)`` and return a
``PublishedRelease`` or a ``ReleaseError``. Tokens and API URLs are read from
the environment mapping passed to ``create_release_client``:

    GitHub: GH_TOKEN (or GITHUB_TOKEN), GHE_API_URL
    GitLab: GL_TOKEN, GL_API_URL
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable
from urllib.parse import quote

from roller.core.result import Err, Ok, Result
from roller.release.errors import ReleaseError
from roller.release.http import HttpClient, HttpError, RealHttpClient
from roller.release.model import PublishedRelease, ReleaseRequest

__all__ = [
    "GITHUB_API_URL",
    "GITLAB_API_URL",
    "GitHubReleaseClient",
    "GitLabReleaseClient",
    "ReleaseClient",
    "create_release_client",
]

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
GITLAB_API_URL = "https://gitlab.com/api/v4"


@runtime_checkable
class ReleaseClient(Protocol):
    def create_release(self, request: ReleaseRequest) -> Result[PublishedRelease, ReleaseError]:
        ...


def _release_error(request: ReleaseRequest, error: HttpError) -> ReleaseError:
    if error.status in (401, 403):
        return ReleaseError(
            kind="auth_required",
            message=f"{request.tag_name}: provider rejected credentials ({error})",
            hint="Set GH_TOKEN (GitHub) or GL_TOKEN (GitLab)",
        )
    return ReleaseError(
        kind="release_failed",
        message=f"{request.tag_name}: release creation failed ({error})",
    )


def _published(request: ReleaseRequest, data: dict[str, Any], url_key: str) -> PublishedRelease:
    url = data.get(url_key)
    return PublishedRelease(tag_name=request.tag_name, url=url if isinstance(url, str) else None)


class GitHubReleaseClient:
    def __init__(
        self,
        http: HttpClient,
        *,
        token: str | None = None,
        api_url: str = GITHUB_API_URL,
    ) -> None:
        self.http = http
        self.token = token
        self.api_url = api_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def create_release(self, request: ReleaseRequest) -> Result[PublishedRelease, ReleaseError]:
        url = f"{self.api_url}/repos/{request.owner}/{request.repo}/releases"
        logger.debug(
            "github: create release %s on %s/%s", request.tag_name, request.owner, request.repo
        )
        result = self.http.post_json(url, request.github_payload(), self._headers())
        if isinstance(result, Err):
            return Err(_release_error(request, result.error))
        return Ok(_published(request, result.value, "html_url"))


class GitLabReleaseClient:
    """GitLab releases have no draft or prerelease flag; those fields are dropped."""

    def __init__(
        self,
        http: HttpClient,
        *,
        token: str | None = None,
        api_url: str = GITLAB_API_URL,
    ) -> None:
        self.http = http
        self.token = token
        self.api_url = api_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        if self.token:
            return {"PRIVATE-TOKEN": self.token}
        return {}

    def create_release(self, request: ReleaseRequest) -> Result[PublishedRelease, ReleaseError]:
        project = quote(f"{request.owner}/{request.repo}", safe="")
        url = f"{self.api_url}/projects/{project}/releases"
        payload: dict[str, object] = {
            "tag_name": request.tag_name,
            "name": request.name,
            "description": request.body,
        }
        logger.debug(
            "gitlab: create release %s on %s/%s", request.tag_name, request.owner, request.repo
        )
        result = self.http.post_json(url, payload, self._headers())
        if isinstance(result, Err):
            return Err(_release_error(request, result.error))

        links = result.value.get("_links")
        url_value = links.get("self") if isinstance(links, dict) else None
        return Ok(
            PublishedRelease(
                tag_name=request.tag_name,
                url=url_value if isinstance(url_value, str) else None,
            )
        )


def create_release_client(
    client_type: str,
    *,
    env: Mapping[str, str] | None = None,
    http: HttpClient | None = None,
) -> Result[ReleaseClient, ReleaseError]:
    """Build the release client for ``client_type`` ("github" or "gitlab").

    Any other value is a configuration error; nothing touches the network.
    """
    environ = os.environ if env is None else env
    transport = http if http is not None else RealHttpClient()

    match client_type:
        case "github":
            return Ok(
                GitHubReleaseClient(
                    transport,
                    token=environ.get("GH_TOKEN") or environ.get("GITHUB_TOKEN"),
                    api_url=environ.get("GHE_API_URL") or GITHUB_API_URL,
                )
            )
        case "gitlab":
            return Ok(
                GitLabReleaseClient(
                    transport,
                    token=environ.get("GL_TOKEN"),
                    api_url=environ.get("GL_API_URL") or GITLAB_API_URL,
                )
            )
        case _:
            return Err(
                ReleaseError(
                    kind="invalid_config",
                    message=f"Invalid release client type: {client_type!r}",
                    hint="Use one of: github, gitlab",
                )
            )
