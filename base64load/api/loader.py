"""Loader factory and host registration.

Architectural role:
    `create_loader` turns user options into a `RegisteredFunction`: the fixed
    Sass signature plus one callback. The callback is the async handler when
    detection or remote loading is enabled, otherwise the sync handler. The
    choice is made once, here.

Handler lifecycle (per call):
    1. Validate the raw call values (`api.arguments`).
    2. Delegate to the encoder strategy (`core.encoder`).
    3. Check the produced value is a `str` before returning it.

Registration side effect:
    With a `host_config` mapping, the callback is stored at
    `host_config["functions"][SIGNATURE]`. An existing entry is never
    overwritten.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, MutableMapping
from dataclasses import dataclass
from typing import Any

from base64load.api.arguments import validate_arguments
from base64load.core.encoder import AsyncEncoder, SyncEncoder, make_encoder
from base64load.core.errors import (
    DuplicateSignature,
    InternalInvariantViolation,
    InvalidHostConfig,
)
from base64load.core.options import LoadOptions


logger = logging.getLogger(__name__)

SIGNATURE = "base64load($source, $mimetype: null)"


@dataclass(frozen=True)
class RegisteredFunction:
    """Sass custom function descriptor.

    Attributes:
        signature: Call pattern the host registers under.
        callback: Plain function (sync mode) or coroutine function (async mode)
            taking `(source, mimetype=None)`.
        options: Options the callback was built from.
    """

    signature: str
    callback: Callable[..., Any]
    options: LoadOptions

    @property
    def is_async(self) -> bool:
        return self.options.is_async


def _check_result(result: Any, source: str, mime: str | None) -> str:
    if not isinstance(result, str):
        raise InternalInvariantViolation(
            f"Invalid result type {type(result).__name__}",
            source,
            mime or "null",
        )
    return result


def make_sync_handler(encoder: SyncEncoder) -> Callable[..., str]:
    def base64load(source: Any, mimetype: Any = None) -> str:
        arguments = validate_arguments((source, mimetype), sync=True)
        result = encoder.encode(arguments.source, arguments.mime)
        return _check_result(result, arguments.source, arguments.mime)

    return base64load


def make_async_handler(encoder: AsyncEncoder) -> Callable[..., Any]:
    async def base64load(source: Any, mimetype: Any = None) -> str:
        arguments = validate_arguments((source, mimetype), sync=False)
        result = await encoder.encode(arguments.source, arguments.mime)
        return _check_result(result, arguments.source, arguments.mime)

    return base64load


def register(host_config: Any, signature: str, callback: Callable[..., Any]) -> None:
    """Insert `callback` into a host configuration's function table.

    Args:
        host_config: Mutable mapping; gets a `functions` table if it has none.
        signature: Function signature key.
        callback: Handler to store.

    Raises:
        InvalidHostConfig: If `host_config` is not a mutable mapping.
        DuplicateSignature: If `signature` is already registered.
    """
    if not isinstance(host_config, MutableMapping):
        raise InvalidHostConfig(
            f"The host_config argument must be a mutable mapping, got {type(host_config).__name__}"
        )

    functions = host_config.get("functions")
    if not isinstance(functions, MutableMapping):
        functions = {}
        host_config["functions"] = functions

    if functions.get(signature):
        raise DuplicateSignature(f"Sass function signature already defined: {signature}")

    functions[signature] = callback


def create_loader(options: Any = None, host_config: Any = None) -> RegisteredFunction:
    """Create the `base64load` Sass function.

    Args:
        options: Mapping of configuration-surface keys (`detect`, `remote`,
            `cwd`, `cache`), a `LoadOptions`, or `None` for defaults.
        host_config: Optional host configuration mapping to register into.

    Returns:
        `RegisteredFunction` with the fixed signature and selected callback.

    Raises:
        InvalidCache: If the `cache` option has an unsupported shape.
        InvalidHostConfig, DuplicateSignature: On registration failure.
    """
    load_options = LoadOptions.from_mapping(options)
    encoder = make_encoder(load_options)

    if encoder.is_async:
        callback = make_async_handler(encoder)
    else:
        callback = make_sync_handler(encoder)

    handler = RegisteredFunction(signature=SIGNATURE, callback=callback, options=load_options)

    if host_config is not None:
        register(host_config, SIGNATURE, callback)

    logger.debug(
        "Created %s loader (detect=%s, remote=%s, cwd=%s, cache=%r)",
        "async" if handler.is_async else "sync",
        load_options.detect_mime,
        load_options.allow_remote,
        load_options.base_dir,
        load_options.cache,
    )
    return handler
