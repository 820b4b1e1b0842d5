"""Remote (HTTP/HTTPS) resolution behind an injectable fetch port.

Architectural role:
    `resolve_remote` is the only code path that may touch the network. It is
    asynchronous and gated by `LoadOptions.allow_remote`, which is checked
    before the fetcher is consulted at all.

Fetch port:
    A fetcher exposes `async fetch(url) -> FetchResponse | None`.
    - `HttpxFetcher` is the production adapter (`httpx.AsyncClient`, redirects
      followed, no timeout unless configured). `httpx` is imported on first
      fetch so installs without the `remote` extra work until a URL is
      actually loaded.
    - `UnavailableFetcher` fails with `MissingDependency` on first use.

Error handling strategy:
    - Exceptions raised by the fetcher become `FetchError` chained to the cause.
    - A missing response or a status outside 2xx becomes `FetchError` carrying
      the status code and reason phrase when available.
    - Nothing is retried; a hanging fetch blocks the calling coroutine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from base64load.core.errors import FetchError, MissingDependency, RemoteDisabled
from base64load.resolve.result import FileResult

if TYPE_CHECKING:
    from base64load.core.options import LoadOptions


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchResponse:
    """Transport-neutral view of an HTTP response."""

    status_code: int
    reason_phrase: str
    content: bytes
    content_type: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Fetcher(Protocol):
    async def fetch(self, url: str) -> FetchResponse | None:
        ...


class UnavailableFetcher:
    """Fetcher used when no HTTP transport is wired in."""

    def __init__(self, package: str = "httpx", extra: str = "remote") -> None:
        self.package = package
        self.extra = extra

    async def fetch(self, url: str) -> FetchResponse | None:
        raise MissingDependency(self.package, self.extra, source=url)


class HttpxFetcher:
    """HTTP GET via `httpx.AsyncClient`.

    Args:
        timeout: Seconds before giving up, or `None` to wait indefinitely.
        user_agent: Optional `User-Agent` header value.
        transport: Optional `httpx` transport, e.g. `httpx.MockTransport`.
    """

    def __init__(self, timeout: float | None = None, user_agent: str | None = None, transport=None) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    async def fetch(self, url: str) -> FetchResponse | None:
        httpx = _import_httpx(url)

        headers = {"User-Agent": self.user_agent} if self.user_agent else None
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers=headers,
            transport=self.transport,
        ) as client:
            response = await client.get(url)

        return FetchResponse(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            content=response.content,
            content_type=response.headers.get("content-type"),
        )


def _import_httpx(url: str):
    try:
        import httpx
    except ImportError as exc:
        raise MissingDependency("httpx", "remote", source=url) from exc
    return httpx


async def resolve_remote(source: str, options: LoadOptions, mime: str | None = None) -> FileResult:
    """Fetch a remote source.

    Args:
        source: Raw `$source` value, already classified as an HTTP(S) URL.
        options: Loader options (`allow_remote`, `fetcher`).
        mime: Raw `$mimetype` value, only used for diagnostics.

    Returns:
        `FileResult` with the response body and its `content-type` header.

    Raises:
        RemoteDisabled: If remote loading is not enabled.
        MissingDependency: If the fetch capability is not installed.
        FetchError: On transport failure or non-success status.
    """
    if not options.allow_remote:
        raise RemoteDisabled(
            "To use remote url loading, set remote = true in your options",
            source,
            mime,
        )

    try:
        response = await options.fetcher.fetch(source)
    except MissingDependency:
        raise
    except Exception as exc:
        raise FetchError(f"Internal error fetching $source: {exc}", source, mime) from exc

    if response is None or not response.ok:
        status_code = response.status_code if response is not None else None
        reason_phrase = response.reason_phrase if response is not None else ""
        status_text = f" {status_code}#{reason_phrase}" if response is not None else ""
        raise FetchError(
            f"Error{status_text} while fetching $source",
            source,
            mime,
            status_code=status_code,
            reason_phrase=reason_phrase,
        )

    logger.debug(
        "Fetched %d bytes from %s (content-type=%s)",
        len(response.content),
        source,
        response.content_type,
    )
    return FileResult(origin=source, content=response.content, mimetype=response.content_type or None)
