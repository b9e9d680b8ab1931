"""HTTP transport shared by the GitHub client and the webhook notifier.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib, with a bounded timeout
- MockHttpClient: Canned responses plus a record of every call made
"""

from __future__ import annotations

import http.client
import json
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from hf import __version__
from hf.core.result import Err, Ok, Result
from hf.core.structured import as_str_dict, get_str

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
    "RecordedCall",
    "decode_json",
]

DEFAULT_USER_AGENT = f"hotfix-cutter/{__version__}"


@dataclass(frozen=True, slots=True)
class HttpResponse:
    url: str
    status: int
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors and timeouts)
        message: Reason phrase or transport error
        detail: Server-provided explanation, when the body carried one
    """

    url: str
    status: int
    message: str
    detail: str = ""

    def __str__(self) -> str:
        text = self.message
        if self.detail and self.detail != self.message:
            text = f"{text}: {self.detail}"
        if self.status:
            return f"HTTP {self.status}: {text} ({self.url})"
        return f"{text} ({self.url})"


def decode_json(response: HttpResponse) -> Result[object, HttpError]:
    """Parse a response body as JSON."""
    try:
        return Ok(json.loads(response.body.decode("utf-8")))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return Err(
            HttpError(url=response.url, status=response.status, message=f"JSON parse error: {e}")
        )


def _error_detail(body: bytes) -> str:
    # GitHub answers errors with {"message": "...", "documentation_url": "..."}.
    text = body.decode("utf-8", errors="replace").strip()
    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError:
        return text[:200]
    data = as_str_dict(obj)
    if data is None:
        return text[:200]
    return get_str(data, "message") or text[:200]


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    Non-2xx answers are returned as ``Err(HttpError)`` with the status set;
    transport failures use status 0.
    """

    def get(
        self, url: str, *, headers: Mapping[str, str] | None = None
    ) -> Result[HttpResponse, HttpError]: ...

    def post_json(
        self,
        url: str,
        payload: object,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Result[HttpResponse, HttpError]: ...


class RealHttpClient:
    """HTTP client using urllib.

    Every request is bounded by ``timeout`` seconds; there is no retry.
    """

    def __init__(self, timeout: float = 10.0, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _request(
        self,
        method: str,
        url: str,
        *,
        data: bytes | None,
        headers: Mapping[str, str] | None,
    ) -> Result[HttpResponse, HttpError]:
        all_headers = {"User-Agent": self.user_agent}
        if data is not None:
            all_headers["Content-Type"] = "application/json"
        all_headers.update(headers or {})

        try:
            req = urllib.request.Request(url, data=data, headers=all_headers, method=method)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(HttpResponse(url=url, status=response.status, body=response.read()))
        except urllib.error.HTTPError as e:
            detail = _error_detail(e.read())
            return Err(HttpError(url=url, status=e.code, message=str(e.reason), detail=detail))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except http.client.HTTPException as e:
            # InvalidURL, IncompleteRead
            return Err(HttpError(url=url, status=0, message=str(e) or type(e).__name__))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

    def get(
        self, url: str, *, headers: Mapping[str, str] | None = None
    ) -> Result[HttpResponse, HttpError]:
        return self._request("GET", url, data=None, headers=headers)

    def post_json(
        self,
        url: str,
        payload: object,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Result[HttpResponse, HttpError]:
        data = json.dumps(payload).encode("utf-8")
        return self._request("POST", url, data=data, headers=headers)


@dataclass(frozen=True, slots=True)
class RecordedCall:
    method: str
    url: str
    payload: object = None
    headers: Mapping[str, str] = field(default_factory=dict)


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        http = MockHttpClient()
        http.set_json("GET", "https://api.github.com/repos/o/r/git/ref/tags/v1", {...})
        http.set_error("POST", "https://hooks.slack.com/x", status=500)
    """

    def __init__(self) -> None:
        self._responses: dict[tuple[str, str], HttpResponse | HttpError] = {}
        self.calls: list[RecordedCall] = []

    def set_json(self, method: str, url: str, obj: object, *, status: int = 200) -> None:
        body = json.dumps(obj).encode("utf-8")
        self._responses[(method, url)] = HttpResponse(url=url, status=status, body=body)

    def set_text(self, method: str, url: str, text: str, *, status: int = 200) -> None:
        self._responses[(method, url)] = HttpResponse(
            url=url, status=status, body=text.encode("utf-8")
        )

    def set_error(
        self, method: str, url: str, *, status: int, message: str = "mock error", detail: str = ""
    ) -> None:
        self._responses[(method, url)] = HttpError(
            url=url, status=status, message=message, detail=detail
        )

    def calls_to(self, method: str) -> list[RecordedCall]:
        return [c for c in self.calls if c.method == method]

    def _answer(self, method: str, url: str) -> Result[HttpResponse, HttpError]:
        response = self._responses.get((method, url))
        if response is None:
            return Err(HttpError(url=url, status=404, message="Not Found (mock)"))
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def get(
        self, url: str, *, headers: Mapping[str, str] | None = None
    ) -> Result[HttpResponse, HttpError]:
        self.calls.append(RecordedCall("GET", url, None, dict(headers or {})))
        return self._answer("GET", url)

    def post_json(
        self,
        url: str,
        payload: object,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Result[HttpResponse, HttpError]:
        self.calls.append(RecordedCall("POST", url, payload, dict(headers or {})))
        return self._answer("POST", url)
