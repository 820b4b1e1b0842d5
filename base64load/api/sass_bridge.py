"""libsass host integration.

Architectural role:
    Adapts `RegisteredFunction` callbacks and host function tables to
    libsass-python's `custom_functions` contract.

Sync/async bridging:
    libsass calls custom functions synchronously. Coroutine callbacks are
    driven to completion with `asyncio.run`, so compiling from inside an
    already running event loop propagates `asyncio.run` limitations.

Error handling strategy:
    Exceptions raised by a callback are reported by libsass as a compile
    failure; `sass.compile` raises `sass.CompileError` whose message contains
    the original error text.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Callable, Mapping
from typing import Any

import sass

from base64load.api.loader import create_loader
from base64load.core.errors import InvalidHostConfig


def split_signature(signature: str) -> tuple[str, tuple[str, ...]]:
    """Split `name($a, $b: null)` into `("name", ("$a", "$b: null"))`."""
    name, _, rest = signature.partition("(")
    if not name.strip() or not rest.endswith(")"):
        raise ValueError(f"Malformed function signature: {signature!r}")
    arguments = tuple(arg.strip() for arg in rest[:-1].split(",") if arg.strip())
    return name.strip(), arguments


def _run_sync(callback: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(callback)
    def wrapper(*args: Any) -> Any:
        return asyncio.run(callback(*args))

    return wrapper


def to_sass_function(signature: str, callback: Callable[..., Any]) -> sass.SassFunction:
    """Wrap one callback as a `sass.SassFunction` under `signature`."""
    name, arguments = split_signature(signature)
    if inspect.iscoroutinefunction(callback):
        callback = _run_sync(callback)
    return sass.SassFunction(name, arguments, callback)


def custom_functions(host_config: Mapping[str, Any]) -> set[sass.SassFunction]:
    """Build libsass custom functions from a host config's `functions` table."""
    if not isinstance(host_config, Mapping):
        raise InvalidHostConfig("The host_config argument must be a mapping")
    functions = host_config.get("functions") or {}
    return {to_sass_function(signature, callback) for signature, callback in functions.items()}


def compile_string(scss: str, options: Any = None, **compile_kwargs: Any) -> str:
    """Compile Sass source with a freshly created `base64load` function.

    Args:
        scss: Sass/SCSS source text.
        options: Loader options, as accepted by `create_loader`.
        **compile_kwargs: Extra `sass.compile` keyword arguments
            (`output_style`, `include_paths`, ...).

    Returns:
        Compiled CSS.

    Raises:
        sass.CompileError: On Sass errors, including loader failures.
    """
    host_config: dict[str, Any] = {}
    create_loader(options, host_config)
    return sass.compile(string=scss, custom_functions=custom_functions(host_config), **compile_kwargs)
