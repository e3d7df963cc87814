"""Fetching monitored file content over HTTP with conditional requests."""

from __future__ import annotations

import http.client
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from email.message import Message

_log = logging.getLogger("monsterinc.monitor.fetcher")

_ERROR_BODY_LIMIT = 1024


@dataclass
class FetchResult:
    """What a fetch returned: body, content type, validators and status."""

    content: bytes = b""
    content_type: str = ""
    etag: str = ""
    last_modified: str = ""
    status_code: int = 0


class FetchError(Exception):
    """Base class for failures while fetching a file."""


class NotModifiedError(FetchError):
    """The server answered 304 Not Modified."""

    def __init__(self, url: str, result: FetchResult) -> None:
        self.url = url
        self.result = result
        super().__init__("content not modified")


class HTTPStatusError(FetchError):
    """The server answered with a status other than 200."""

    def __init__(self, url: str, status_code: int, result: FetchResult) -> None:
        self.url = url
        self.status_code = status_code
        self.result = result
        self.body = result.content.decode("utf-8", errors="replace")
        super().__init__(f"HTTP {status_code} for {url}: {self.body}")


class NetworkError(FetchError):
    """The request could not be carried out."""

    def __init__(self, url: str, message: str, cause: BaseException) -> None:
        self.url = url
        self.message = message
        self.cause = cause
        super().__init__(f"network error for {url}: {message}: {cause}")


class ContentTooLargeError(FetchError):
    """The body is larger than the configured maximum."""

    def __init__(self, size: int, max_size: int) -> None:
        self.size = size
        self.max_size = max_size
        super().__init__(f"content too large: {size} bytes (max: {max_size} bytes)")


def _validators(status: int, headers: Message | None) -> FetchResult:
    get = headers.get if headers is not None else (lambda _name, default="": default)
    return FetchResult(
        etag=get("ETag", "") or "",
        last_modified=get("Last-Modified", "") or "",
        content_type=get("Content-Type", "") or "",
        status_code=status,
    )


class Fetcher:
    """Fetches file content, honouring ETag and Last-Modified validators."""

    def __init__(self, max_content_size: int, timeout: float = 30.0) -> None:
        self.max_content_size = max_content_size
        self.timeout = timeout

    def fetch(
        self,
        url: str,
        previous_etag: str = "",
        previous_last_modified: str = "",
    ) -> FetchResult:
        """GET ``url``; raise NotModifiedError on 304 and HTTPStatusError on other non-200s."""
        try:
            request = urllib.request.Request(url, method="GET")
        except ValueError as exc:
            _log.error("Failed to create HTTP request for %s: %s", url, exc)
            raise FetchError(f"creating request for {url}: {exc}") from exc
        if previous_etag:
            request.add_header("If-None-Match", previous_etag)
        if previous_last_modified:
            request.add_header("If-Modified-Since", previous_last_modified)

        try:
            response = urllib.request.urlopen(request, timeout=self.timeout)
        except urllib.error.HTTPError as exc:
            with exc:
                self._reject_status(url, exc.code, exc.headers, exc)
            raise AssertionError("unreachable")  # pragma: no cover
        except (urllib.error.URLError, OSError, http.client.HTTPException, ValueError) as exc:
            _log.error("HTTP request to %s failed: %s", url, exc)
            raise NetworkError(url, "HTTP request failed", exc) from exc

        with response:
            if response.status != 200:
                self._reject_status(url, response.status, response.headers, response)
            result = _validators(response.status, response.headers)
            declared = self._declared_length(response.headers)
            if declared > 0 and declared > self.max_content_size:
                raise ContentTooLargeError(declared, self.max_content_size)
            try:
                body = response.read()
            except (OSError, http.client.HTTPException) as exc:
                _log.error("Failed to read response body from %s: %s", url, exc)
                raise FetchError(f"failed to read response body: {exc}") from exc

        if len(body) > self.max_content_size:
            raise ContentTooLargeError(len(body), self.max_content_size)
        result.content = body
        _log.debug("Fetched %s (%s, %d bytes)", url, result.content_type, len(body))
        return result

    @staticmethod
    def _declared_length(headers: Message) -> int:
        try:
            return int(headers.get("Content-Length", "-1"))
        except ValueError:
            return -1

    @staticmethod
    def _reject_status(url: str, status: int, headers: Message | None, stream) -> None:
        result = _validators(status, headers)
        if status == 304:
            _log.debug("Content not modified (304): %s", url)
            raise NotModifiedError(url, result)
        _log.warning("Received HTTP status %d from %s", status, url)
        try:
            result.content = stream.read(_ERROR_BODY_LIMIT) or b""
        except (OSError, http.client.HTTPException, AttributeError):
            result.content = b""
        raise HTTPStatusError(url, status, result)