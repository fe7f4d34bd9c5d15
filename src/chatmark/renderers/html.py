"""HTML renderer for chat-message tokens.

Maps each token to one HTML element. Text is always escaped; token content
is never pattern-matched again. Link, audio and video targets are emitted
only when they pass the http(s) allow-list, so a hand-built token with a
``javascript:`` URL still renders as inert text.

Mentions are resolved once per render: every distinct mention in the
message goes to the resolver in a single batch.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single HtmlRenderer instance
and call render() concurrently without synchronization.
"""

import html
from collections.abc import Iterable
from dataclasses import dataclass, field
from urllib.parse import quote as url_quote

from chatmark.config import get_format_config
from chatmark.errors import RenderError
from chatmark.highlighting import highlight as highlight_code
from chatmark.highlighting import plain_code_block
from chatmark.media import emoji_image_url, media_filename
from chatmark.mentions import MentionRef, MentionResolver, ResolvedMention, collect_mentions
from chatmark.sanitize import is_safe_url
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
from chatmark.utils.logger import get_logger

logger = get_logger(__name__)


def html_escape(s: str) -> str:
    """Escape HTML special characters (<, >, &, and double quotes)."""
    return html.escape(s, quote=False).replace('"', "&quot;")


def _encode_url(url: str) -> str:
    """Percent-encode characters that are not legal in an href.

    Returns URL safe for href attribute (still needs html_escape for quotes).
    """
    return url_quote(url, safe="/:?#[]@!$&'()*+,;=-_.~%")


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Created fresh for each render, ensuring thread safety when sharing
    HtmlRenderer instances across threads.
    """

    mega: bool = False
    mentions: dict[MentionRef, ResolvedMention | None] = field(default_factory=dict)


class HtmlRenderer:
    """Render a token list to HTML.

    Usage:
        >>> renderer = HtmlRenderer()
        >>> renderer.render(tokenize("**hi** <@1>"))
        '<span class="message"><strong>hi</strong> <span class="mention mention-unknown">&lt;@1&gt;</span></span>'

    Thread Safety:
        Multiple threads can safely share a single HtmlRenderer instance.
    """

    __slots__ = ("_resolver", "_highlight", "_new_tab")

    def __init__(
        self,
        *,
        resolver: MentionResolver | None = None,
        highlight: bool | None = None,
        open_links_in_new_tab: bool | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            resolver: Mention resolver; without one, mentions render raw
            highlight: Highlight code blocks (None = use FormatConfig)
            open_links_in_new_tab: Add target="_blank" (None = use FormatConfig)
        """
        config = get_format_config()
        self._resolver = resolver
        self._highlight = config.highlight if highlight is None else highlight
        self._new_tab = (
            config.open_links_in_new_tab if open_links_in_new_tab is None else open_links_in_new_tab
        )

    def render(self, tokens: Iterable[TokenBase], *, mega: bool = False) -> str:
        """Render tokens to an HTML string.

        Args:
            tokens: Tokens produced by the lexer
            mega: Render at emoji-only scale

        Raises:
            RenderError: If an item is not a token
        """
        items = list(tokens)
        ctx = RenderContext(mega=mega, mentions=self._resolve_mentions(items))

        sb = StringBuilder()
        sb.append('<span class="message message-mega">' if mega else '<span class="message">')
        for index, token in enumerate(items):
            self._render_token(token, index, sb, ctx)
        sb.append("</span>")
        return sb.build()

    def _resolve_mentions(
        self, tokens: list[TokenBase]
    ) -> dict[MentionRef, ResolvedMention | None]:
        """Resolve every distinct mention in one resolver call."""
        if self._resolver is None:
            return {}
        refs = collect_mentions(tokens)
        if not refs:
            return {}
        try:
            resolved = self._resolver.resolve(refs)
        except Exception:
            logger.debug("Mention resolver failed for %d refs", len(refs), exc_info=True)
            return {}
        return dict(zip(refs, resolved))

    def _render_token(
        self, token: TokenBase, index: int, sb: StringBuilder, ctx: RenderContext
    ) -> None:
        match token:
            case Text():
                sb.append(html_escape(token.content))
            case Bold():
                sb.append("<strong>").append(html_escape(token.content)).append("</strong>")
            case Italic():
                sb.append("<em>").append(html_escape(token.content)).append("</em>")
            case Strikethrough():
                sb.append("<del>").append(html_escape(token.content)).append("</del>")
            case InlineCode():
                sb.append("<code>").append(html_escape(token.content)).append("</code>")
            case CodeBlock():
                self._render_codeblock(token, sb)
            case Link():
                self._render_link(token, sb)
            case Audio():
                self._render_audio(token, sb)
            case Video():
                self._render_video(token, sb)
            case Blockquote():
                sb.append("<blockquote>").append(html_escape(token.content)).append("</blockquote>")
            case DiscordEmoji():
                self._render_emoji(token, sb, ctx)
            case UserMention():
                self._render_mention(token, sb, ctx)
            case Newline():
                sb.append("<br />")
            case _:
                raise RenderError(f"cannot render {type(token).__name__}", index=index)

    def _render_codeblock(self, token: CodeBlock, sb: StringBuilder) -> None:
        code = token.content.strip()
        sb.append('<div class="codeblock">')
        if self._highlight:
            try:
                sb.append(highlight_code(code, token.language))
                sb.append("</div>")
                return
            except Exception:
                # Fall through to plain rendering
                logger.debug(
                    "Syntax highlighting failed for language %r", token.language, exc_info=True
                )
        sb.append(plain_code_block(code, token.language))
        sb.append("</div>")

    def _render_link(self, token: Link, sb: StringBuilder) -> None:
        label = html_escape(token.content)
        if not is_safe_url(token.url):
            sb.append(label)
            return
        href = html_escape(_encode_url(token.url))
        target = ' target="_blank"' if self._new_tab else ""
        sb.append(f'<a href="{href}"{target} rel="noopener noreferrer">{label}</a>')

    def _render_audio(self, token: Audio, sb: StringBuilder) -> None:
        if not is_safe_url(token.url):
            sb.append(html_escape(token.content))
            return
        src = html_escape(_encode_url(token.url))
        name = html_escape(media_filename(token.url, "Audio"))
        sb.append('<figure class="media media-audio">')
        sb.append(f'<audio controls preload="metadata" src="{src}"></audio>')
        sb.append(f'<figcaption><a href="{src}" download>{name}</a></figcaption>')
        sb.append("</figure>")

    def _render_video(self, token: Video, sb: StringBuilder) -> None:
        if not is_safe_url(token.url):
            sb.append(html_escape(token.content))
            return
        src = html_escape(_encode_url(token.url))
        name = html_escape(media_filename(token.url, "Video"))
        sb.append('<figure class="media media-video">')
        sb.append(f'<video controls preload="metadata"><source src="{src}" /></video>')
        sb.append(f'<figcaption><a href="{src}" download>{name}</a></figcaption>')
        sb.append("</figure>")

    def _render_emoji(self, token: DiscordEmoji, sb: StringBuilder, ctx: RenderContext) -> None:
        src = html_escape(emoji_image_url(token))
        name = html_escape(f":{token.emoji_name}:")
        css = "emoji emoji-mega" if ctx.mega else "emoji"
        sb.append(f'<img class="{css}" src="{src}" alt="{name}" title="{name}" />')

    def _render_mention(self, token: UserMention, sb: StringBuilder, ctx: RenderContext) -> None:
        resolved = ctx.mentions.get(MentionRef.from_token(token))
        if resolved is None:
            sb.append('<span class="mention mention-unknown">')
            sb.append(html_escape(token.content))
            sb.append("</span>")
            return
        tier = f' data-tier="{html_escape(resolved.tier)}"' if resolved.tier else ""
        sb.append(f'<span class="mention" data-user-id="{html_escape(resolved.display_id)}"{tier}>')
        sb.append("@").append(html_escape(resolved.display_name))
        sb.append("</span>")
