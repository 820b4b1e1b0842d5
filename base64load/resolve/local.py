"""Local filesystem resolution.

Resolution flow:
    1. Keep absolute paths verbatim; join relative paths onto `base_dir`
       (or the current working directory when unset) and normalize.
    2. `lstat` the result and require a regular file. Directories, missing
       paths and symbolic links fail with `NotFound`.
    3. Read the full contents.

Mimetype:
    Never inferred here. Detection is the caller's concern.
"""

from __future__ import annotations

import logging
import os
import stat

from base64load.core.errors import NotFound
from base64load.resolve.result import FileResult


logger = logging.getLogger(__name__)


def resolve_path(source: str, base_dir: str | os.PathLike | None = None) -> str:
    """Return the absolute, normalized path `source` refers to."""
    if os.path.isabs(source):
        return source
    base = os.fspath(base_dir) if base_dir else os.getcwd()
    return os.path.abspath(os.path.join(base, source))


def is_regular_file(path: str) -> bool:
    """Return whether `path` itself (not a link target) is a regular file."""
    try:
        return stat.S_ISREG(os.lstat(path).st_mode)
    except (OSError, ValueError):
        return False


def resolve_local(
    source: str,
    base_dir: str | os.PathLike | None = None,
    mime: str | None = None,
) -> FileResult:
    """Resolve and read a local source.

    Args:
        source: Raw `$source` value.
        base_dir: Base directory for relative paths.
        mime: Raw `$mimetype` value, only used for diagnostics.

    Returns:
        `FileResult` whose origin is the resolved path.

    Raises:
        NotFound: If the resolved path is not an existing regular file.
    """
    path = resolve_path(source, base_dir)

    if not is_regular_file(path):
        raise NotFound(f"File not found: {path}", path, source, mime)

    with open(path, "rb") as f:
        content = f.read()

    logger.debug("Read %d bytes from %s", len(content), path)
    return FileResult(origin=path, content=content)
