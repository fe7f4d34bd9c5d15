"""Mention resolution boundary.

Mention tokens carry only raw identifiers. Turning them into display names
is the job of an external resolver (usually a user-directory service),
called once per rendered message with every distinct mention in a batch.

A resolver answers ``None`` for identities it does not know; the renderer
then shows the raw mention text. That is not an error.

Example:
    >>> resolver = DictMentionResolver({"discord:42": ResolvedMention("u1", "ada")})
    >>> refs = collect_mentions(tokenize("hi <@42> and <@n:x>"))
    >>> resolver.resolve(refs)
    [ResolvedMention(display_id='u1', display_name='ada', tier=None), None]

"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol

from chatmark.tokens import MentionType, TokenBase, UserMention


@dataclass(frozen=True, slots=True)
class MentionRef:
    """An identity referenced by a mention token."""

    mention_type: MentionType
    user_id: str

    @property
    def key(self) -> str:
        """Lookup key, e.g. ``discord:123`` or ``clerk:abc``."""
        return f"{self.mention_type}:{self.user_id}"

    @classmethod
    def from_token(cls, token: UserMention) -> "MentionRef":
        return cls(token.mention_type, token.user_id)


@dataclass(frozen=True, slots=True)
class ResolvedMention:
    """Display identity for a resolved mention.

    Attributes:
        display_id: Identifier of the profile to open on click
        display_name: Name shown after the @
        tier: Optional supporter tier used for styling

    """

    display_id: str
    display_name: str
    tier: str | None = None


class MentionResolver(Protocol):
    """Protocol for batched mention lookups.

    ``resolve`` returns one entry per input ref, in the same order.
    """

    def resolve(self, refs: Sequence[MentionRef]) -> Sequence[ResolvedMention | None]:
        ...


def collect_mentions(tokens: Iterable[TokenBase]) -> list[MentionRef]:
    """Collect distinct mention refs in first-seen order."""
    seen: dict[MentionRef, None] = {}
    for token in tokens:
        if isinstance(token, UserMention):
            seen.setdefault(MentionRef.from_token(token))
    return list(seen)


class DictMentionResolver:
    """In-memory resolver keyed by ``MentionRef.key``.

    Useful for tests and for callers that prefetch the user directory.
    """

    __slots__ = ("_users",)

    def __init__(self, users: Mapping[str, ResolvedMention] | None = None) -> None:
        self._users: dict[str, ResolvedMention] = dict(users or {})

    def add(self, ref: MentionRef, resolved: ResolvedMention) -> None:
        self._users[ref.key] = resolved

    def resolve(self, refs: Sequence[MentionRef]) -> list[ResolvedMention | None]:
        return [self._users.get(ref.key) for ref in refs]


__all__ = [
    "DictMentionResolver",
    "MentionRef",
    "MentionResolver",
    "ResolvedMention",
    "collect_mentions",
]
