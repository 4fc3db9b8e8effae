"""HTTP transport for provider release APIs.

This module provides:
- HttpClient: Protocol for JSON POSTs (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Records requests and replays canned responses
"""

from __future__ import annotations

import json
import ssl
import threading
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, Protocol, cast, runtime_checkable

from roller import __version__
from roller.core.result import Err, Ok, Result
from roller.core.structured import as_str_dict

__all__ = [
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    def post_json(
        self,
        url: str,
        payload: dict[str, object],
        headers: dict[str, str],
    ) -> Result[dict[str, Any], HttpError]:
        """POST ``payload`` as JSON and parse the JSON object response."""
        ...


class RealHttpClient:
    """HTTP client using urllib with system certificates."""

    def __init__(self, timeout: float = 30.0, user_agent: str = f"roller/{__version__}") -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def post_json(
        self,
        url: str,
        payload: dict[str, object],
        headers: dict[str, str],
    ) -> Result[dict[str, Any], HttpError]:
        req = urllib.request.Request(
            url,
            data=json.dumps(payload).encode("utf-8"),
            method="POST",
            headers={
                "User-Agent": self.user_agent,
                "Content-Type": "application/json",
                "Accept": "application/json",
                **headers,
            },
        )
        try:
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                raw: bytes = response.read()
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except (ValueError, OSError) as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        if not raw:
            return Ok({})
        try:
            data = as_str_dict(json.loads(raw.decode("utf-8")))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))
        if data is None:
            return Err(HttpError(url=url, status=0, message="Expected JSON object"))
        return Ok(cast(dict[str, Any], data))


@dataclass(frozen=True, slots=True)
class RecordedPost:
    url: str
    payload: dict[str, object]
    headers: dict[str, str]


class MockHttpClient:
    """Mock HTTP client for testing.

    Unknown URLs answer ``{}``. Safe to call from worker threads.

    Usage:
        http = MockHttpClient()
        http.set_response(url, HttpError(url=url, status=422, message="exists"))
    """

    def __init__(self) -> None:
        self._responses: dict[str, dict[str, Any] | HttpError] = {}
        self._lock = threading.Lock()
        self.posts: list[RecordedPost] = []

    def set_response(self, url: str, response: dict[str, Any] | HttpError) -> None:
        self._responses[url] = response

    def post_json(
        self,
        url: str,
        payload: dict[str, object],
        headers: dict[str, str],
    ) -> Result[dict[str, Any], HttpError]:
        with self._lock:
            self.posts.append(RecordedPost(url=url, payload=payload, headers=dict(headers)))

        response = self._responses.get(url, {})
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
