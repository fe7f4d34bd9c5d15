"""Content-addressed token cache for chatmark.

Tokenizing is pure and deterministic, so a chat view that re-renders the
same messages can reuse earlier results. The cache key is the hash of the
message text; cached values are tuples of immutable tokens.

Caching never changes what ``tokenize`` returns: callers always receive a
fresh list equal to an uncached parse.

Thread Safety:
    DictTokenCache is not thread-safe. For concurrent rendering, use a cache
    implementation with internal locking (e.g. threading.Lock around get/put).

Example:
    >>> from chatmark import tokenize, DictTokenCache
    >>> cache = DictTokenCache(max_entries=1000)
    >>> tokens = tokenize("hi **there**", cache=cache)
    >>> tokens = tokenize("hi **there**", cache=cache)  # Cache hit
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from chatmark.utils.hashing import hash_str

if TYPE_CHECKING:
    from chatmark.tokens import Token


class TokenCache(Protocol):
    """Protocol for content-addressed token caches."""

    def get(self, content_hash: str) -> tuple[Token, ...] | None:
        """Return cached tokens if present, else None."""
        ...

    def put(self, content_hash: str, tokens: tuple[Token, ...]) -> None:
        """Store tokens in cache."""
        ...


class DictTokenCache:
    """In-memory token cache using a dict.

    With ``max_entries`` set, the oldest entry is evicted first once the
    cache is full. Not thread-safe.
    """

    __slots__ = ("_data", "_max_entries")

    def __init__(self, max_entries: int | None = None) -> None:
        self._data: dict[str, tuple[Token, ...]] = {}
        self._max_entries = max_entries

    def get(self, content_hash: str) -> tuple[Token, ...] | None:
        """Return cached tokens if present, else None."""
        return self._data.get(content_hash)

    def put(self, content_hash: str, tokens: tuple[Token, ...]) -> None:
        """Store tokens in cache."""
        limit = self._max_entries
        if limit is not None and content_hash not in self._data:
            if limit <= 0:
                return
            if len(self._data) >= limit:
                # Dicts keep insertion order: the first key is the oldest
                del self._data[next(iter(self._data))]
        self._data[content_hash] = tokens

    def __len__(self) -> int:
        return len(self._data)


def hash_content(source: str) -> str:
    """Compute SHA256 hash of message text for cache key."""
    return hash_str(source)


__all__ = [
    "DictTokenCache",
    "TokenCache",
    "hash_content",
]
