"""Core encoding package.

Composition:
    - `options`: immutable `LoadOptions` and its merge/env loading.
    - `encoder`: sync and async data-URI encoder strategies.
    - `errors`: exception taxonomy shared by every layer.

Determinism and side effects:
    Package import is side-effect free. Encoders read files, fetch URLs, and
    write to the configured cache.
"""
