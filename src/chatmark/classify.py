"""Emoji-only ("mega") classification.

A message made of nothing but a few emoji renders at a larger scale:
a lone custom emoji or a short reaction burst. Walls of emoji do not,
so a message cannot blow up the layout.

The classifier works on the raw message text and is independent of
tokenization.

Unicode emoji are matched by property (Emoji_Presentation and
Extended_Pictographic) with the ``regex`` module; the standard ``re``
module has no ``\\p{...}`` support.

Example:
    >>> is_emoji_only("🎉")
    True
    >>> is_emoji_only("gg 🎉")
    False

"""

import regex

from chatmark.config import get_format_config

DISCORD_EMOJI_TAG = regex.compile(r"<a?:\w+:\d+>", regex.ASCII)
UNICODE_EMOJI = regex.compile(r"\p{Emoji_Presentation}|\p{Extended_Pictographic}")


def count_emoji(source: str) -> int:
    """Count custom emoji tags plus Unicode emoji code points in ``source``."""
    tags = len(DISCORD_EMOJI_TAG.findall(source))
    unicode_emoji = len(UNICODE_EMOJI.findall(DISCORD_EMOJI_TAG.sub("", source)))
    return tags + unicode_emoji


def is_emoji_only(source: str, *, max_emoji: int | None = None) -> bool:
    """Check whether a message should render in mega mode.

    Args:
        source: Raw message text
        max_emoji: Largest emoji count still treated as emoji-only
            (defaults to the configured max_mega_emoji)

    Returns:
        True when the message holds between 1 and max_emoji emoji and
        nothing but whitespace otherwise. Never raises.
    """
    trimmed = source.strip()
    if not trimmed:
        return False

    remainder = DISCORD_EMOJI_TAG.sub("", trimmed)
    remainder = UNICODE_EMOJI.sub("", remainder)
    if remainder.strip():
        return False

    if max_emoji is None:
        max_emoji = get_format_config().max_mega_emoji
    return 1 <= count_emoji(trimmed) <= max_emoji


__all__ = ["count_emoji", "is_emoji_only"]
