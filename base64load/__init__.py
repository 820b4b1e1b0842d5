"""Inline files and URLs into Sass stylesheets as base64 data URIs.

Usage:
    from base64load import create_loader

    options = {}
    create_loader({"detect": True}, options)
    # options["functions"]["base64load($source, $mimetype: null)"] is the callback

Package layout:
    - `api`: factory, registration, argument validation, libsass bridge, CLI.
    - `core`: options, encoder strategies, errors.
    - `cache`: cache adapters.
    - `resolve`: source classification and local/remote resolution.
    - `mime`: mimetype detection.
"""

from base64load.api.loader import SIGNATURE, RegisteredFunction, create_loader
from base64load.core.errors import Base64LoadError
from base64load.core.options import LoadOptions

__all__ = [
    "SIGNATURE",
    "Base64LoadError",
    "LoadOptions",
    "RegisteredFunction",
    "create_loader",
]
