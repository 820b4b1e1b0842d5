"""Exception taxonomy for the base64load pipeline.

Architectural role:
    Every failure raised by argument validation, resolution, detection,
    encoding, or registration is an instance of `Base64LoadError`. The host
    compiler is expected to abort compilation on any of them.

Message format:
    Messages start with a `base64load(<source>,<mime>)` prefix echoing the call
    values, so a failing stylesheet call can be located from the error alone.
    Unknown values are rendered as the literal parameter names `$source` and
    `$mimetype`.

Error handling strategy:
    - No error is retried or recovered internally.
    - Wrapped transport causes are chained with `raise ... from exc`.
    - Where a builtin category fits, errors also subclass it (`TypeError`,
      `ValueError`, `FileNotFoundError`, `ImportError`, ...).
"""

from __future__ import annotations


class Base64LoadError(Exception):
    """Base class for all base64load failures.

    Attributes:
        source: Raw `$source` call value when known.
        mime: Raw `$mimetype` call value when known.
        reason: Message without the call prefix.
    """

    def __init__(self, reason: str, source: str | None = None, mime: str | None = None) -> None:
        self.reason = reason
        self.source = source
        self.mime = mime
        super().__init__(f"{call_prefix(source, mime)} {reason}")


def call_prefix(source: str | None, mime: str | None) -> str:
    """Render the `base64load(source,mime)` diagnostic prefix."""
    source_text = source if source else "$source"
    mime_text = mime if mime else "$mimetype"
    return f"base64load({source_text},{mime_text})"


# ============================================================
# ARGUMENTS
# ============================================================

class InvalidSourceType(Base64LoadError, TypeError):
    pass


class InvalidSource(Base64LoadError, ValueError):
    pass


class InvalidMimeType(Base64LoadError, TypeError):
    pass


class MimeRequired(Base64LoadError, ValueError):
    pass


class MimeRequiredSync(MimeRequired):
    pass


class RemoteRequiresAsync(Base64LoadError, ValueError):
    pass


# ============================================================
# RESOLUTION
# ============================================================

class RemoteDisabled(Base64LoadError, PermissionError):
    pass


class NotFound(Base64LoadError, FileNotFoundError):
    """Local source is missing or not a regular file.

    Attributes:
        path: Resolved absolute path that was checked.
    """

    def __init__(self, reason: str, path: str, source: str | None = None, mime: str | None = None) -> None:
        self.path = path
        super().__init__(reason, source, mime)


class FetchError(Base64LoadError, ConnectionError):
    """Remote fetch failed in transport or returned a non-success status.

    Attributes:
        status_code: HTTP status when a response was obtained, else `None`.
        reason_phrase: HTTP reason phrase when available, else empty.
    """

    def __init__(
        self,
        reason: str,
        source: str | None = None,
        mime: str | None = None,
        status_code: int | None = None,
        reason_phrase: str = "",
    ) -> None:
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        super().__init__(reason, source, mime)


class MissingDependency(Base64LoadError, ImportError):
    """An optional capability package is required but not installed."""

    def __init__(self, package: str, extra: str, source: str | None = None, mime: str | None = None) -> None:
        self.package = package
        self.extra = extra
        super().__init__(
            f"Requires {package}, install with: pip install 'sass-base64load[{extra}]'",
            source,
            mime,
        )


class MimeUndetected(Base64LoadError, ValueError):
    pass


# ============================================================
# REGISTRATION / CONFIGURATION
# ============================================================

class DuplicateSignature(Base64LoadError, KeyError):
    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return Exception.__str__(self)


class InvalidHostConfig(Base64LoadError, TypeError):
    pass


class InvalidCache(Base64LoadError, TypeError):
    pass


class InvalidOption(Base64LoadError, ValueError):
    pass


class InternalInvariantViolation(Base64LoadError, AssertionError):
    pass
