"""Uniform get/set facade over user-supplied caches.

Architectural role:
    The loader accepts either a plain mutable mapping (a `dict`, or any
    `MutableMapping` such as a `cachetools` cache) or an accessor object that
    exposes `get(key)` and `set(key, value)`. `make_cache` inspects the object
    once, at option-merge time, and wraps it in the matching handle so the
    encoder never branches on cache shape per call.

Key/value contract:
    - Keys are the raw `$source` call value, never a resolved path.
    - Values are the final quoted data-URI strings.
    - Falsy stored values are treated as a miss.

Concurrency:
    No locking. Two in-flight misses for the same key may both write; the
    values are identical so the last write wins.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

from base64load.core.errors import InvalidCache


class CacheHandle:
    """Common interface over the supported cache shapes."""

    def __init__(self, backend: Any) -> None:
        self.backend = backend

    def get(self, key: str) -> str | None:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({type(self.backend).__name__})"


class MapCache(CacheHandle):
    """Cache backed by item access on a mutable mapping."""

    def get(self, key: str) -> str | None:
        value = self.backend.get(key)
        return value or None

    def set(self, key: str, value: str) -> None:
        self.backend[key] = value


class AccessorCache(CacheHandle):
    """Cache backed by an object's own `get`/`set` methods."""

    def get(self, key: str) -> str | None:
        value = self.backend.get(key)
        return value or None

    def set(self, key: str, value: str) -> None:
        self.backend.set(key, value)


def make_cache(backend: Any) -> CacheHandle | None:
    """Wrap `backend` in the matching cache handle.

    Args:
        backend: `None`, an existing `CacheHandle`, an accessor object with
            callable `get` and `set`, or a mutable mapping.

    Returns:
        Cache handle, or `None` when caching is disabled.

    Raises:
        InvalidCache: When `backend` matches none of the supported shapes.

    Edge cases:
        A mapping that also defines `set` (for example a custom dict subclass)
        is treated as an accessor object, because its own setter is the more
        specific contract.
    """
    if backend is None:
        return None

    if isinstance(backend, CacheHandle):
        return backend

    if callable(getattr(backend, "get", None)) and callable(getattr(backend, "set", None)):
        return AccessorCache(backend)

    if isinstance(backend, MutableMapping):
        return MapCache(backend)

    raise InvalidCache(
        f"Unsupported cache object {type(backend).__name__}, "
        "expected a mutable mapping or an object with get/set methods"
    )
