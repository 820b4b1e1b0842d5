"""Resolver output contract shared by local and remote resolution."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FileResult:
    """Bytes produced by one resolution step.

    Attributes:
        origin: Resolved local path or the fetched URL, used in diagnostics.
        content: Full file or response body.
        mimetype: Media type discovered during resolution (for example a
            `content-type` header). Local resolution never sets it.
    """

    origin: str
    content: bytes
    mimetype: str | None = None
