"""Mimetype resolution and sniffing.

Resolution order (`detect_mimetype`):
    1. A non-empty caller-supplied mimetype is returned unchanged and the
       sniffer is never consulted.
    2. Without content or a path there is nothing to sniff: `MimeRequired`.
    3. Byte sniffing over the content.
    4. Path sniffing over the resolved local path (remote sources have none).
    5. Nothing found: `MimeUndetected`.

Sniffer port:
    A sniffer exposes `async sniff_bytes(content)` and `async sniff_path(path)`,
    each returning a mimetype or `None` when inconclusive.
    - `ContentSniffer` identifies bytes by magic number with `filetype`
      (images, fonts, documents, archives, audio, video), then tries Pillow
      for the raster formats `filetype` has no matcher for. Path sniffing
      guesses from the file extension with the `mimetypes` registry. Both
      libraries are imported on first byte sniff, so `MissingDependency`
      surfaces only when detection actually runs.
    - `UnavailableSniffer` fails with `MissingDependency` on first use.

Determinism:
    Deterministic for fixed bytes, path, library versions, and `mimetypes`
    registry state.
"""

from __future__ import annotations

import asyncio
import io
import logging
import mimetypes
from typing import Protocol

from base64load.core.errors import MimeRequired, MimeUndetected, MissingDependency


logger = logging.getLogger(__name__)


class Sniffer(Protocol):
    async def sniff_bytes(self, content: bytes) -> str | None:
        ...

    async def sniff_path(self, path: str) -> str | None:
        ...


class UnavailableSniffer:
    """Sniffer used when no detection capability is wired in."""

    def __init__(self, package: str = "filetype", extra: str = "detect") -> None:
        self.package = package
        self.extra = extra

    async def sniff_bytes(self, content: bytes) -> str | None:
        raise MissingDependency(self.package, self.extra)

    async def sniff_path(self, path: str) -> str | None:
        raise MissingDependency(self.package, self.extra)


class ContentSniffer:
    """Magic-number sniffing with `filetype` and Pillow, extension guessing with `mimetypes`."""

    async def sniff_bytes(self, content: bytes) -> str | None:
        filetype_module = _import_filetype()
        detected = filetype_module.guess_mime(content)
        if detected:
            return detected

        image_module = _import_pillow()
        return await asyncio.to_thread(_identify_image, image_module, content)

    async def sniff_path(self, path: str) -> str | None:
        mime, _ = mimetypes.guess_type(path)
        return mime


def _import_filetype():
    try:
        import filetype
    except ImportError as exc:
        raise MissingDependency("filetype", "detect") from exc
    return filetype


def _import_pillow():
    try:
        from PIL import Image
    except ImportError as exc:
        raise MissingDependency("Pillow", "detect") from exc
    return Image


def _identify_image(image_module, content: bytes) -> str | None:
    """Return the MIME type Pillow reports for `content`, or `None`."""
    try:
        with image_module.open(io.BytesIO(content)) as img:
            image_format = img.format
    except (image_module.UnidentifiedImageError, OSError, ValueError):
        return None
    return image_module.MIME.get(image_format) if image_format else None


async def detect_mimetype(
    source: str,
    mime: str | None,
    sniffer: Sniffer,
    content: bytes | None = None,
    path: str | None = None,
) -> str:
    """Return the mimetype to embed for one call.

    Args:
        source: Raw `$source` value, for diagnostics.
        mime: Caller-supplied or transport-discovered mimetype.
        sniffer: Sniffing capability, consulted only when `mime` is empty.
        content: Resolved bytes, when available.
        path: Resolved local path, when the source is local.

    Raises:
        MimeRequired: If there is neither a mimetype nor anything to sniff.
        MimeUndetected: If sniffing was inconclusive.
        MissingDependency: If the sniffing capability is not installed.
    """
    if mime:
        return mime

    if content is None and not path:
        raise MimeRequired("Requires $mimetype argument", source, mime)

    detected = None
    try:
        if content is not None:
            detected = await sniffer.sniff_bytes(content)

        if not detected and path:
            detected = await sniffer.sniff_path(path)
    except MissingDependency as exc:
        if exc.source is not None:
            raise
        raise MissingDependency(exc.package, exc.extra, source, mime) from exc

    if not detected:
        raise MimeUndetected("Failed to detect $mimetype from $source", source, mime)

    logger.debug("Detected %s for %s", detected, source)
    return detected
