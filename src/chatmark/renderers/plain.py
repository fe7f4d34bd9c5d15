"""Plain-text renderer for message previews and notifications.

Flattens formatting to its text, keeps link targets visible, and shows
custom emoji by name. No HTML.

Example:
    >>> PlainTextRenderer().render(tokenize("**gg** <:pog:1> [docs](https://x.dev)"))
    'gg :pog: docs (https://x.dev)'
"""

from collections.abc import Iterable

from chatmark.errors import RenderError
from chatmark.stringbuilder import StringBuilder
from chatmark.tokens import (
    Audio,
    Blockquote,
    Bold,
    CodeBlock,
    DiscordEmoji,
    InlineCode,
    Italic,
    Link,
    Newline,
    Strikethrough,
    Text,
    TokenBase,
    UserMention,
    Video,
)


class PlainTextRenderer:
    """Render tokens to plain text.

    ``mega`` is accepted for protocol compatibility and has no effect.
    """

    __slots__ = ()

    def render(self, tokens: Iterable[TokenBase], *, mega: bool = False) -> str:
        sb = StringBuilder()
        for index, token in enumerate(tokens):
            match token:
                case Text() | Bold() | Italic() | Strikethrough() | InlineCode():
                    sb.append(token.content)
                case CodeBlock():
                    sb.append(token.content.strip())
                case Link():
                    sb.append(token.content)
                    if token.content != token.url:
                        sb.append(f" ({token.url})")
                case Audio() | Video():
                    sb.append(token.url)
                case Blockquote():
                    sb.append("> ").append(token.content)
                case DiscordEmoji():
                    sb.append(f":{token.emoji_name}:")
                case UserMention():
                    sb.append(token.content)
                case Newline():
                    sb.append("\n")
                case _:
                    raise RenderError(f"cannot render {type(token).__name__}", index=index)
        return sb.build()
