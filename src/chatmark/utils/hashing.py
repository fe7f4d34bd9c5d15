"""Hashing utilities for chatmark.

Used for content-addressed token caching.

Example:
    >>> from chatmark.utils.hashing import hash_str
    >>> hash_str("hello")
    '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
"""

import hashlib


def hash_str(content: str) -> str:
    """Hex SHA-256 digest of ``content``.

    Lone surrogates from JavaScript clients are encoded as-is, so any
    ``str`` hashes without raising.
    """
    return hashlib.sha256(content.encode("utf-8", "surrogatepass")).hexdigest()
