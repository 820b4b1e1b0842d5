"""Encoder core: resolve, pick a mimetype, build and cache the data URI.

Architectural role:
    Two strategies share one shape and are selected once by the loader
    factory:
    - `SyncEncoder` resolves local files only and trusts the caller's
      mimetype (already validated non-empty).
    - `AsyncEncoder` routes URLs to the remote resolver and paths to the local
      resolver (in a worker thread), then resolves the mimetype with priority
      caller value > transport header > sniffing.

Processing flow (both strategies):
    1. Cache lookup by the raw source. A hit is returned as is: no I/O, no
       validation, no mimetype check, even when stale.
    2. Resolution and mimetype selection.
    3. Output `"data:<mime>;base64,<payload>"`, quotes included.
    4. Cache write on a miss (skipped without a cache).

Failure behavior:
    Any failure discards partial results; nothing is cached.
"""

from __future__ import annotations

import asyncio
import base64
import logging

from base64load.core.options import LoadOptions
from base64load.mime.detector import detect_mimetype
from base64load.resolve.classifier import is_remote
from base64load.resolve.local import resolve_local
from base64load.resolve.remote import resolve_remote


logger = logging.getLogger(__name__)


def build_data_uri(mimetype: str, content: bytes) -> str:
    """Return the quoted data URI for `content`.

    The surrounding double quotes are part of the value: the host consumes
    the result as a string literal.
    """
    payload = base64.b64encode(content).decode("ascii")
    return f'"data:{mimetype};base64,{payload}"'


class Encoder:
    """Shared cache handling for both encoder strategies."""

    is_async = False

    def __init__(self, options: LoadOptions) -> None:
        self.options = options

    def _from_cache(self, source: str) -> str | None:
        if self.options.cache is None:
            return None
        cached = self.options.cache.get(source)
        if cached:
            logger.debug("Cache hit for %s", source)
        return cached

    def _to_cache(self, source: str, output: str) -> None:
        if self.options.cache is not None:
            self.options.cache.set(source, output)


class SyncEncoder(Encoder):
    """Local-only encoder used when neither detection nor remote is enabled."""

    def encode(self, source: str, mime: str) -> str:
        cached = self._from_cache(source)
        if cached:
            return cached

        result = resolve_local(source, self.options.base_dir, mime)

        output = build_data_uri(mime, result.content)
        self._to_cache(source, output)
        logger.debug("Encoded %s as %s (%d bytes)", result.origin, mime, len(result.content))
        return output


class AsyncEncoder(Encoder):
    """Encoder with remote loading and mimetype detection."""

    is_async = True

    async def encode(self, source: str, mime: str | None) -> str:
        cached = self._from_cache(source)
        if cached:
            return cached

        path = None
        if is_remote(source):
            result = await resolve_remote(source, self.options, mime)
        else:
            result = await asyncio.to_thread(resolve_local, source, self.options.base_dir, mime)
            path = result.origin

        mimetype = await detect_mimetype(
            source,
            mime or result.mimetype,
            self.options.sniffer,
            content=result.content,
            path=path,
        )

        output = build_data_uri(mimetype, result.content)
        self._to_cache(source, output)
        logger.debug("Encoded %s as %s (%d bytes)", result.origin, mimetype, len(result.content))
        return output


def make_encoder(options: LoadOptions) -> Encoder:
    """Select the encoder strategy for `options`."""
    if options.is_async:
        return AsyncEncoder(options)
    return SyncEncoder(options)
