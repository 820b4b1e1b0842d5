"""Cache adapter package.

Scope:
    Normalizes user-supplied caches (plain mappings or get/set accessor
    objects) behind one `CacheHandle` interface consumed by the encoder.
"""
