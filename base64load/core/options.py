"""Loader configuration.

Architectural role:
    `LoadOptions` is the immutable configuration captured by the handlers of
    one `create_loader` call. There is no process-wide default-options object;
    every merge starts from the dataclass defaults and gets its own fresh
    cache mapping.

Configuration surface (mapping keys accepted by `from_mapping`):
    - `detect`: auto-detect missing mimetypes (default `False`).
    - `remote`: allow loading `http(s)` URLs (default `False`).
    - `cwd`: base directory for relative paths (default `None` -> process cwd).
    - `cache`: mapping, get/set accessor object, or `None` (default `{}`).
    - `fetcher` / `sniffer`: capability injection, mostly for tests.
    Unknown keys are ignored.

Environment variables (`from_env`):
    - `BASE64LOAD_DETECT`
    - `BASE64LOAD_REMOTE`
    - `BASE64LOAD_CWD`
    - `BASE64LOAD_HTTP_TIMEOUT` (seconds, unset = no timeout)
    Entry points call `load_dotenv()` first so `.env` files apply.

Capability wiring:
    When no fetcher/sniffer is injected, the HTTP fetcher is wired only with
    `remote` enabled and the content sniffer only on the async path
    (`detect or remote`). Neither imports its library until first use.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from base64load.cache.adapter import CacheHandle, make_cache
from base64load.core.errors import InvalidOption
from base64load.mime.detector import ContentSniffer, Sniffer, UnavailableSniffer
from base64load.resolve.remote import Fetcher, HttpxFetcher, UnavailableFetcher


TRUTHY_VALUES = {"1", "true", "yes", "on"}

# Sentinel distinguishing "cache key absent" from an explicit `cache: None`.
_DEFAULT = object()


@dataclass(frozen=True)
class LoadOptions:
    """Immutable loader configuration.

    Attributes:
        detect_mime: Sniff mimetypes when the call does not supply one.
        allow_remote: Permit network fetches for `http(s)` sources.
        base_dir: Base for relative paths, `None` for the process cwd.
        cache: Wrapped cache, or `None` to disable caching.
        fetcher: Remote fetch capability.
        sniffer: Mimetype sniffing capability.
    """

    detect_mime: bool = False
    allow_remote: bool = False
    base_dir: str | None = None
    cache: CacheHandle | None = field(default_factory=lambda: make_cache({}))
    fetcher: Fetcher = field(default_factory=UnavailableFetcher)
    sniffer: Sniffer = field(default_factory=UnavailableSniffer)

    @property
    def is_async(self) -> bool:
        """Whether handlers built from these options run asynchronously."""
        return self.detect_mime or self.allow_remote

    @classmethod
    def build(
        cls,
        detect: bool = False,
        remote: bool = False,
        cwd: str | os.PathLike | None = None,
        cache: Any = _DEFAULT,
        fetcher: Fetcher | None = None,
        sniffer: Sniffer | None = None,
        http_timeout: float | None = None,
    ) -> "LoadOptions":
        """Build options from configuration-surface values with production wiring."""
        detect = bool(detect)
        remote = bool(remote)

        if fetcher is None:
            fetcher = HttpxFetcher(timeout=http_timeout) if remote else UnavailableFetcher()
        if sniffer is None:
            sniffer = ContentSniffer() if (detect or remote) else UnavailableSniffer()

        return cls(
            detect_mime=detect,
            allow_remote=remote,
            base_dir=os.fspath(cwd) if cwd else None,
            cache=make_cache({} if cache is _DEFAULT else cache),
            fetcher=fetcher,
            sniffer=sniffer,
        )

    @classmethod
    def from_mapping(cls, options: Any = None) -> "LoadOptions":
        """Merge a user options mapping over the defaults.

        Args:
            options: `LoadOptions` (returned as is), a mapping of
                configuration-surface keys, or anything else (ignored).

        Returns:
            New `LoadOptions`.

        Raises:
            InvalidCache: If `cache` has an unsupported shape.
        """
        if isinstance(options, LoadOptions):
            return options
        if not isinstance(options, Mapping):
            return cls.build()

        return cls.build(
            detect=options.get("detect", False),
            remote=options.get("remote", False),
            cwd=options.get("cwd"),
            cache=options.get("cache", _DEFAULT),
            fetcher=options.get("fetcher"),
            sniffer=options.get("sniffer"),
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> "LoadOptions":
        """Build options from `BASE64LOAD_*` environment variables.

        Args:
            environ: Environment mapping, `os.environ` by default.
            **overrides: Configuration-surface values that take precedence
                over the environment (`None` values are skipped).

        Raises:
            InvalidOption: If `BASE64LOAD_HTTP_TIMEOUT` is not a non-negative number.
        """
        env = os.environ if environ is None else environ

        values: dict[str, Any] = {
            "detect": _env_flag(env.get("BASE64LOAD_DETECT")),
            "remote": _env_flag(env.get("BASE64LOAD_REMOTE")),
            "cwd": env.get("BASE64LOAD_CWD") or None,
        }
        values["http_timeout"] = _env_seconds("BASE64LOAD_HTTP_TIMEOUT", env.get("BASE64LOAD_HTTP_TIMEOUT"))

        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls.build(**values)


def _env_flag(value: str | None) -> bool:
    """Interpret an environment string as a boolean flag."""
    return (value or "").strip().lower() in TRUTHY_VALUES


def _env_seconds(name: str, value: str | None) -> float | None:
    """Parse a non-negative number of seconds, `None` when unset or blank."""
    text = (value or "").strip()
    if not text:
        return None
    try:
        seconds = float(text)
    except ValueError as exc:
        raise InvalidOption(f"{name} must be a number of seconds, got {text!r}") from exc
    if seconds < 0 or seconds != seconds:
        raise InvalidOption(f"{name} must be a number of seconds, got {text!r}")
    return seconds
