"""chatmark: chat-message markdown tokenizer.

Turns raw, untrusted chat text into a flat list of typed tokens: bold,
italic, strikethrough, inline and fenced code, quotes, links, media
autolinks, custom emoji and user mentions. Never raises on any input;
malformed constructs degrade to plain text, and only http(s) targets
become links.

Quick Start:
    >>> from chatmark import tokenize, is_emoji_only, render
    >>> tokenize("**hi** <:wave:123>")
    [Bold(content='hi'), Text(content=' '), DiscordEmoji(content='<:wave:123>', animated=False, emoji_id='123', emoji_name='wave')]
    >>> is_emoji_only("<:wave:123>")
    True
    >>> render("[docs](javascript:alert(1))")
    '<span class="message">[docs](javascript:alert(1))</span>'

    >>> # Or use the high-level MessageFormatter
    >>> from chatmark import MessageFormatter, DictMentionResolver
    >>> fmt = MessageFormatter(resolver=DictMentionResolver())
    >>> html = fmt("hello <@42>")

"""

from collections.abc import Iterable

from chatmark.cache import DictTokenCache, TokenCache, hash_content
from chatmark.classify import count_emoji, is_emoji_only
from chatmark.config import (
    FormatConfig,
    format_config_context,
    get_format_config,
    reset_format_config,
    set_format_config,
)
from chatmark.errors import ChatmarkError, RenderError
from chatmark.lexer import Lexer
from chatmark.mentions import (
    DictMentionResolver,
    MentionRef,
    MentionResolver,
    ResolvedMention,
    collect_mentions,
)
from chatmark.renderers.html import HtmlRenderer
from chatmark.renderers.plain import PlainTextRenderer
from chatmark.renderers.protocol import TokenRenderer
from chatmark.sanitize import is_safe_url
from chatmark.serialization import from_dict, from_json, to_dict, to_json
from chatmark.tokens import (
    Audio,
    Blockquote,
    Bold,
    CodeBlock,
    DiscordEmoji,
    InlineCode,
    Italic,
    Link,
    MentionType,
    Newline,
    Strikethrough,
    Text,
    Token,
    TokenBase,
    TokenKind,
    UserMention,
    Video,
)

__version__ = "0.1.0"


def tokenize(source: str, *, cache: TokenCache | None = None) -> list[Token]:
    """Tokenize a chat message.

    Args:
        source: Raw message text
        cache: Optional content-addressed token cache

    Returns:
        Tokens in source order. A fresh list on every call.

    Example:
        >>> tokenize("> hello\\nworld")
        [Blockquote(content='hello'), Newline(content='\\n'), Text(content='world')]
    """
    if cache is None:
        return list(Lexer(source).tokenize())

    content_hash = hash_content(source)
    cached = cache.get(content_hash)
    if cached is None:
        cached = tuple(Lexer(source).tokenize())
        cache.put(content_hash, cached)
    return list(cached)


def render(
    source: str,
    *,
    resolver: MentionResolver | None = None,
    highlight: bool | None = None,
) -> str:
    """Tokenize and render a chat message to HTML.

    Emoji-only messages render in mega mode.

    Args:
        source: Raw message text
        resolver: Optional mention resolver
        highlight: Highlight code blocks (None = use FormatConfig)
    """
    renderer = HtmlRenderer(resolver=resolver, highlight=highlight)
    return renderer.render(tokenize(source), mega=is_emoji_only(source))


class MessageFormatter:
    """High-level formatter combining lexer, classifier and renderer.

    Usage:
        >>> fmt = MessageFormatter(config=FormatConfig(highlight=True))
        >>> html = fmt("```py\\nprint('hi')```")

        >>> # Access the tokens
        >>> fmt.tokenize("**hi**")
        [Bold(content='hi')]

    Thread Safety:
        Config is applied via ContextVar for the duration of each call.
        Safe to use one instance from multiple threads when the cache
        (if any) is thread-safe.

    """

    __slots__ = ("_cache", "_config", "_resolver")

    def __init__(
        self,
        *,
        config: FormatConfig | None = None,
        resolver: MentionResolver | None = None,
        cache: TokenCache | None = None,
    ) -> None:
        """Initialize formatter.

        Args:
            config: Format configuration (defaults to the current context's)
            resolver: Mention resolver used when rendering
            cache: Token cache shared by every call
        """
        self._config = config or get_format_config()
        self._resolver = resolver
        self._cache = cache

    @property
    def config(self) -> FormatConfig:
        return self._config

    def __call__(self, source: str) -> str:
        """Tokenize and render in one call."""
        with format_config_context(self._config):
            tokens = tokenize(source, cache=self._cache)
            mega = is_emoji_only(source)
            return HtmlRenderer(resolver=self._resolver).render(tokens, mega=mega)

    def tokenize(self, source: str) -> list[Token]:
        return tokenize(source, cache=self._cache)

    def tokenize_many(self, sources: Iterable[str]) -> list[list[Token]]:
        """Tokenize a batch of messages, e.g. a chat history page."""
        return [tokenize(source, cache=self._cache) for source in sources]

    def is_mega(self, source: str) -> bool:
        """Check whether a message renders at emoji-only scale."""
        with format_config_context(self._config):
            return is_emoji_only(source)

    def render(self, tokens: Iterable[TokenBase], *, mega: bool = False) -> str:
        """Render already tokenized text to HTML."""
        with format_config_context(self._config):
            return HtmlRenderer(resolver=self._resolver).render(tokens, mega=mega)


__all__ = [  # noqa: RUF022 - grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "tokenize",
    "is_emoji_only",
    "count_emoji",
    "is_safe_url",
    "render",
    # Tokens
    "Token",
    "TokenBase",
    "TokenKind",
    "MentionType",
    "Text",
    "Bold",
    "Italic",
    "Strikethrough",
    "InlineCode",
    "CodeBlock",
    "Blockquote",
    "Link",
    "Audio",
    "Video",
    "DiscordEmoji",
    "UserMention",
    "Newline",
    # Lexer
    "Lexer",
    # Mentions
    "DictMentionResolver",
    "MentionRef",
    "MentionResolver",
    "ResolvedMention",
    "collect_mentions",
    # Renderers
    "HtmlRenderer",
    "PlainTextRenderer",
    "TokenRenderer",
    # Token cache
    "DictTokenCache",
    "TokenCache",
    "hash_content",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Configuration (ContextVar-based)
    "FormatConfig",
    "get_format_config",
    "set_format_config",
    "reset_format_config",
    "format_config_context",
    # Errors
    "ChatmarkError",
    "RenderError",
    # High-level
    "MessageFormatter",
]
