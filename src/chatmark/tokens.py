"""Token taxonomy for chatmark.

The lexer turns a chat message into a flat list of tokens. The set of token
classes is closed: ``Token`` is the union of every class below, so a renderer
can dispatch with a ``match`` statement and cover every kind.

Token Hierarchy:
TokenBase
├── Text             plain text (also rejected link literals)
├── Bold             **x** / __x__
├── Italic           *x* / _x_
├── Strikethrough    ~~x~~
├── InlineCode       `x`
├── CodeBlock        ```lang\\ncode```
├── Blockquote       > quoted line
├── Link             [label](https://...) or bare https://...
├── Audio            bare URL ending in an audio extension
├── Video            bare URL ending in a video extension
├── DiscordEmoji     <:name:id> / <a:name:id>
├── UserMention      <@id> / <@n:id>
└── Newline          \\n

Every token carries ``content`` (the text it was derived from) and a
keyword-only ``span`` with the raw source offsets it consumed. ``span`` is
excluded from comparison and repr: two parses of the same message compare
equal token by token.

Thread Safety:
Tokens are frozen (immutable) and safe to share across threads.

"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar, TypeAlias


class TokenKind(StrEnum):
    """Token kinds, valued by their wire names."""

    TEXT = "text"
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    CODE = "code"
    CODEBLOCK = "codeblock"
    BLOCKQUOTE = "blockquote"
    LINK = "link"
    AUDIO = "audio"
    VIDEO = "video"
    DISCORD_EMOJI = "discordEmoji"
    USER_MENTION = "userMention"
    NEWLINE = "newline"


class MentionType(StrEnum):
    """Identity namespace of a user mention.

    ``<@123>`` references a Discord user id, ``<@n:abc>`` a native
    (Clerk) account id.
    """

    DISCORD = "discord"
    CLERK = "clerk"


# Language assigned to fenced code blocks without a tag
DEFAULT_CODE_LANGUAGE = "text"


@dataclass(frozen=True, slots=True)
class TokenBase:
    """Base class for all tokens.

    Attributes:
        content: Text the token was derived from
        span: (start, end) offsets of the raw source consumed

    """

    kind: ClassVar[TokenKind]

    content: str
    span: tuple[int, int] = field(default=(0, 0), compare=False, repr=False, kw_only=True)


@dataclass(frozen=True, slots=True)
class Text(TokenBase):
    """Plain text, rendered literally."""

    kind: ClassVar[TokenKind] = TokenKind.TEXT


@dataclass(frozen=True, slots=True)
class Bold(TokenBase):
    """Strong text.

    Markdown: **text** or __text__
    """

    kind: ClassVar[TokenKind] = TokenKind.BOLD


@dataclass(frozen=True, slots=True)
class Italic(TokenBase):
    """Emphasized text.

    Markdown: *text* or _text_
    """

    kind: ClassVar[TokenKind] = TokenKind.ITALIC


@dataclass(frozen=True, slots=True)
class Strikethrough(TokenBase):
    """Struck-out text.

    Markdown: ~~text~~
    """

    kind: ClassVar[TokenKind] = TokenKind.STRIKETHROUGH


@dataclass(frozen=True, slots=True)
class InlineCode(TokenBase):
    """Single-line code span.

    Markdown: `code`
    """

    kind: ClassVar[TokenKind] = TokenKind.CODE


@dataclass(frozen=True, slots=True)
class CodeBlock(TokenBase):
    """Fenced code block; ``content`` is the raw body between the fences.

    Markdown: ```lang\\ncode```
    """

    kind: ClassVar[TokenKind] = TokenKind.CODEBLOCK

    language: str = DEFAULT_CODE_LANGUAGE


@dataclass(frozen=True, slots=True)
class Blockquote(TokenBase):
    """A quoted line, marker removed and whitespace trimmed."""

    kind: ClassVar[TokenKind] = TokenKind.BLOCKQUOTE


@dataclass(frozen=True, slots=True)
class Link(TokenBase):
    """Clickable link. ``url`` always has an http or https scheme.

    ``content`` is the label for markdown links and the URL for autolinks.
    """

    kind: ClassVar[TokenKind] = TokenKind.LINK

    url: str


@dataclass(frozen=True, slots=True)
class Audio(TokenBase):
    """Autolinked audio file."""

    kind: ClassVar[TokenKind] = TokenKind.AUDIO

    url: str


@dataclass(frozen=True, slots=True)
class Video(TokenBase):
    """Autolinked video file."""

    kind: ClassVar[TokenKind] = TokenKind.VIDEO

    url: str


@dataclass(frozen=True, slots=True)
class DiscordEmoji(TokenBase):
    """Custom emoji reference; ``content`` is the raw ``<a:name:id>`` tag."""

    kind: ClassVar[TokenKind] = TokenKind.DISCORD_EMOJI

    animated: bool
    emoji_id: str
    emoji_name: str


@dataclass(frozen=True, slots=True)
class UserMention(TokenBase):
    """User mention; ``content`` is the raw ``<@...>`` tag."""

    kind: ClassVar[TokenKind] = TokenKind.USER_MENTION

    mention_type: MentionType
    user_id: str


@dataclass(frozen=True, slots=True)
class Newline(TokenBase):
    """A bare line break."""

    kind: ClassVar[TokenKind] = TokenKind.NEWLINE


Token: TypeAlias = (
    Text
    | Bold
    | Italic
    | Strikethrough
    | InlineCode
    | CodeBlock
    | Blockquote
    | Link
    | Audio
    | Video
    | DiscordEmoji
    | UserMention
    | Newline
)

TOKEN_CLASSES: dict[TokenKind, type[TokenBase]] = {
    cls.kind: cls
    for cls in (
        Text,
        Bold,
        Italic,
        Strikethrough,
        InlineCode,
        CodeBlock,
        Blockquote,
        Link,
        Audio,
        Video,
        DiscordEmoji,
        UserMention,
        Newline,
    )
}


__all__ = [
    "DEFAULT_CODE_LANGUAGE",
    "TOKEN_CLASSES",
    "Audio",
    "Blockquote",
    "Bold",
    "CodeBlock",
    "DiscordEmoji",
    "InlineCode",
    "Italic",
    "Link",
    "MentionType",
    "Newline",
    "Strikethrough",
    "Text",
    "Token",
    "TokenBase",
    "TokenKind",
    "UserMention",
    "Video",
]
