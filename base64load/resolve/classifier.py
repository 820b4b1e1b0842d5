"""Source classification: remote URL vs. local filesystem path."""

from __future__ import annotations

from urllib.parse import urlparse


REMOTE_SCHEMES = frozenset({"http", "https"})


def is_remote(source: str) -> bool:
    """Return whether `source` is a syntactically valid HTTP(S) URL.

    Anything that fails to parse, lacks a host, has whitespace in its host, or
    uses another scheme (`file:`, `data:`, Windows drive letters, ...) is a
    local path. No network access is performed.

    Only the `scheme://host` form counts: slash-less spellings such as
    `http:foo` or `http:/foo`, which browsers repair into a host, stay local
    paths because they would not be fetchable as written.
    """
    try:
        parsed = urlparse(source)
        host = parsed.netloc
        return parsed.scheme in REMOTE_SCHEMES and bool(host) and not any(ch.isspace() for ch in host)
    except (TypeError, ValueError):
        return False
