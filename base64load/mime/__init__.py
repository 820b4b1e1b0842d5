"""Mimetype detection package.

Scope:
    Chooses the media type embedded in a data URI: the caller's value when
    given, otherwise one sniffed from file bytes or the file path.

Non-goals:
    - Not a general file-type detector; only what `data:` URIs need.
"""
