"""Validation of raw `base64load($source, $mimetype)` call values.

Host value convention (libsass-python):
    Sass strings arrive as `str` (quotes stripped) and Sass `null` as `None`.
    Numbers, colors, lists, and maps arrive as other types and are rejected.

Rules:
    - `$source` must be a non-empty string.
    - Sync mode rejects `http(s)` sources; network access needs the async
      handler.
    - `$mimetype` is `None` or a string. Sync mode requires it non-empty;
      async mode allows `None` but still rejects an explicit empty string.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from base64load.core.errors import (
    InvalidMimeType,
    InvalidSource,
    InvalidSourceType,
    MimeRequired,
    MimeRequiredSync,
    RemoteRequiresAsync,
)
from base64load.resolve.classifier import is_remote


@dataclass(frozen=True)
class CallArguments:
    source: str
    mime: str | None = None


def validate_arguments(values: Sequence[Any], sync: bool = True) -> CallArguments:
    """Parse positional call values into `CallArguments`.

    Args:
        values: Positional values as passed by the host (`$source`, and
            optionally `$mimetype`).
        sync: Whether the calling handler is the sync variant.

    Raises:
        InvalidSourceType, InvalidSource, RemoteRequiresAsync, InvalidMimeType,
        MimeRequiredSync, MimeRequired.
    """
    source = values[0] if len(values) > 0 else None
    if not isinstance(source, str):
        raise InvalidSourceType("Invalid $source argument type")

    if not source:
        raise InvalidSource("Invalid $source argument")

    if sync and is_remote(source):
        raise RemoteRequiresAsync(
            "To use the async variant for url loading, set remote = true in your options",
            source,
        )

    mime = values[1] if len(values) > 1 else None
    if mime is not None and not isinstance(mime, str):
        raise InvalidMimeType("Invalid $mimetype argument type", source)

    if sync and not mime:
        raise MimeRequiredSync("Requires $mimetype argument in sync mode", source, mime)
    if mime is not None and not mime:
        raise MimeRequired("Requires $mimetype argument", source, mime)

    return CallArguments(source=source, mime=mime)
