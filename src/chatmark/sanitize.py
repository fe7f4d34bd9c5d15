"""Link scheme allow-list for chatmark.

Only ``http`` and ``https`` targets may become live links. Everything else
(``javascript:``, ``data:``, ``vbscript:``, ``mailto:``, relative paths) is
rejected, and the rule that asked falls back to plain text.

The renderer re-checks every href with the same predicate before emitting it.

Example:
    >>> from chatmark.sanitize import is_safe_url
    >>> is_safe_url("https://example.com")
    True
    >>> is_safe_url("javascript:alert(1)")
    False
"""

import re

SAFE_URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)

DANGEROUS_SCHEMES = frozenset(("javascript:", "data:", "vbscript:"))


def is_safe_url(url: str) -> bool:
    """Check whether ``url`` may be rendered as a clickable link.

    Evaluated against the exact candidate string. The scheme is matched
    case-insensitively; leading whitespace is not stripped.
    """
    return SAFE_URL_PATTERN.match(url) is not None


def is_dangerous_url(url: str) -> bool:
    """Check if URL uses a scheme known to execute script."""
    lower = url.strip().lower()
    return any(lower.startswith(s) for s in DANGEROUS_SCHEMES)


__all__ = [
    "DANGEROUS_SCHEMES",
    "SAFE_URL_PATTERN",
    "is_dangerous_url",
    "is_safe_url",
]
