"""Pattern rules for the chat-message lexer.

Each rule inspects the source at a cursor position and either returns the
token it recognized together with the offset just past the consumed span,
or None. Rules never raise.

Rules that need a closing delimiter look it up through ``SourceIndex``,
which remembers the next occurrence of each delimiter until the cursor
moves past it. A run of unmatched openers ("[[[[...", "****...") thus
costs one scan of the message, not one scan per opener.

``RULES`` is the priority table: the lexer tries rules in this order and
takes the first match. Reordering two entries changes observable output
(bold must precede italic, mentions must precede emoji, and so on).

``DISPATCH`` maps each character that can open a construct to the rules
that may start with it, preserving table order, so positions holding
ordinary text skip the table entirely.

"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

from chatmark.media import classify_media_url
from chatmark.sanitize import is_dangerous_url, is_safe_url
from chatmark.tokens import (
    DEFAULT_CODE_LANGUAGE,
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
    TokenKind,
    UserMention,
    Video,
)
from chatmark.utils.logger import get_logger

logger = get_logger(__name__)

# Patterns are applied with pattern.match(source, pos), which anchors at pos.
# A fence tag only counts when a newline follows it: ```python``` is a block
# holding "python" in the default language, not an empty python block.
CODE_LANGUAGE_PATTERN = re.compile(r"(\w*)\n", re.ASCII)
USER_MENTION_PATTERN = re.compile(r"<@(n:)?([A-Za-z0-9_]+)>")
DISCORD_EMOJI_PATTERN = re.compile(r"<(a?):(\w+):(\d+)>", re.ASCII)
# "(url)" after a link label; one level of balanced parentheses: (https://w.org/A_(b))
LINK_TARGET_PATTERN = re.compile(r"\(((?:[^()]|\([^()]*\))+)\)")
AUTOLINK_PATTERN = re.compile(r"""https?://[^\s<]+[^<.,:;"')\]\s]""")

# Anything that might open a construct; plain text runs stop here
SPECIAL_PATTERN = re.compile(r"[*_~`<\[\n]|https?://")


class SourceIndex:
    """Message text with memoized forward searches.

    ``find(needle, pos)`` answers "where does ``needle`` next occur at or
    after ``pos``". An answer stays valid for every later query until the
    cursor passes the occurrence, so while the lexer moves forward each
    needle is scanned for at most once per stretch of text.

    Thread Safety:
        Single-use, like the Lexer that owns it.
    """

    __slots__ = ("source", "_next", "_target_pos", "_target")

    def __init__(self, source: str) -> None:
        self.source = source
        # needle -> (searched_from, found); found is -1 when absent
        self._next: dict[str, tuple[int, int]] = {}
        self._target_pos = -1
        self._target: re.Match[str] | None = None

    def find(self, needle: str, pos: int) -> int:
        cached = self._next.get(needle)
        if cached is not None:
            searched_from, found = cached
            if found == -1 or found >= pos:
                if pos < searched_from:
                    # Rules look a few characters ahead of the cursor; only
                    # the gap before the earlier search is unknown
                    hit = self.source.find(needle, pos, searched_from + len(needle) - 1)
                    if hit != -1:
                        found = hit
                    self._next[needle] = (pos, found)
                return found
        found = self.source.find(needle, pos)
        self._next[needle] = (pos, found)
        return found

    def crosses_line(self, start: int, end: int) -> bool:
        """Check whether a line break lies in source[start:end]."""
        newline = self.find("\n", start)
        return newline != -1 and newline < end

    def link_target(self, pos: int) -> re.Match[str] | None:
        """Match "(url)" at ``pos``; nested openers share one closing bracket."""
        if pos != self._target_pos:
            self._target_pos = pos
            self._target = LINK_TARGET_PATTERN.match(self.source, pos)
        return self._target


RuleResult: TypeAlias = tuple[Token, int]
RuleScan: TypeAlias = Callable[[SourceIndex, int], RuleResult | None]


@dataclass(frozen=True, slots=True)
class Rule:
    """A named entry of the priority table.

    Attributes:
        name: Rule name (for debugging and tests)
        openers: Characters the construct can start with
        scan: Recognizer, (index, pos) -> (token, end) or None

    """

    name: str
    openers: frozenset[str]
    scan: RuleScan


def scan_codeblock(index: SourceIndex, pos: int) -> RuleResult | None:
    """```lang\\nbody``` with an optional language line."""
    source = index.source
    if not source.startswith("```", pos):
        return None
    body_start = pos + 3
    language = DEFAULT_CODE_LANGUAGE
    m = CODE_LANGUAGE_PATTERN.match(source, body_start)
    if m is not None:
        language = m.group(1) or DEFAULT_CODE_LANGUAGE
        body_start = m.end()
    close = index.find("```", body_start)
    if close == -1:
        return None
    end = close + 3
    return CodeBlock(source[body_start:close], language, span=(pos, end)), end


def scan_inline_code(index: SourceIndex, pos: int) -> RuleResult | None:
    close = index.find("`", pos + 1)
    if close <= pos + 1 or index.crosses_line(pos, close):
        return None
    return InlineCode(index.source[pos + 1 : close], span=(pos, close + 1)), close + 1


def scan_user_mention(index: SourceIndex, pos: int) -> RuleResult | None:
    """<@discordId> or <@n:clerkId>."""
    m = USER_MENTION_PATTERN.match(index.source, pos)
    if m is None:
        return None
    mention_type = MentionType.CLERK if m.group(1) else MentionType.DISCORD
    return UserMention(m.group(0), mention_type, m.group(2), span=m.span()), m.end()


def scan_discord_emoji(index: SourceIndex, pos: int) -> RuleResult | None:
    """<:name:id> or <a:name:id> (animated)."""
    m = DISCORD_EMOJI_PATTERN.match(index.source, pos)
    if m is None:
        return None
    token = DiscordEmoji(
        m.group(0),
        animated=m.group(1) == "a",
        emoji_id=m.group(3),
        emoji_name=m.group(2),
        span=m.span(),
    )
    return token, m.end()


def scan_markdown_link(index: SourceIndex, pos: int) -> RuleResult | None:
    """[label](url), degraded to literal text unless url is http(s)."""
    source = index.source
    close = index.find("]", pos + 1)
    if close <= pos + 1:
        return None
    m = index.link_target(close + 1)
    if m is None:
        return None
    label, url, end = source[pos + 1 : close], m.group(1), m.end()
    if is_safe_url(url):
        return Link(label, url, span=(pos, end)), end
    if is_dangerous_url(url):
        logger.debug("Rejected script link target at offset %d: %r", pos, url[:64])
    return Text(source[pos:end], span=(pos, end)), end


def scan_autolink(index: SourceIndex, pos: int) -> RuleResult | None:
    """Bare http(s) URL, classified as audio, video or link by extension."""
    m = AUTOLINK_PATTERN.match(index.source, pos)
    if m is None:
        return None
    url = m.group(0)
    match classify_media_url(url):
        case TokenKind.AUDIO:
            token: Token = Audio(url, url, span=m.span())
        case TokenKind.VIDEO:
            token = Video(url, url, span=m.span())
        case _:
            token = Link(url, url, span=m.span())
    return token, m.end()


def _delimited(index: SourceIndex, pos: int, delim: str) -> tuple[str, int] | None:
    """Shortest non-empty single-line body between two ``delim``s at pos."""
    if not index.source.startswith(delim, pos):
        return None
    body_start = pos + len(delim)
    close = index.find(delim, body_start + 1)
    if close == -1 or index.crosses_line(body_start, close):
        return None
    return index.source[body_start:close], close + len(delim)


def scan_bold(index: SourceIndex, pos: int) -> RuleResult | None:
    """**x** or __x__."""
    found = _delimited(index, pos, "**") or _delimited(index, pos, "__")
    if found is None:
        return None
    body, end = found
    return Bold(body, span=(pos, end)), end


def scan_italic(index: SourceIndex, pos: int) -> RuleResult | None:
    found = _delimited(index, pos, index.source[pos])
    if found is None:
        return None
    body, end = found
    return Italic(body, span=(pos, end)), end


def scan_strikethrough(index: SourceIndex, pos: int) -> RuleResult | None:
    found = _delimited(index, pos, "~~")
    if found is None:
        return None
    body, end = found
    return Strikethrough(body, span=(pos, end)), end


def scan_blockquote(index: SourceIndex, pos: int) -> RuleResult | None:
    """Quote running to end of line; the line break is left for the next rule.

    Needs "> " at the start of a line. The first line of a message also
    accepts a bare ">" with no space after it.
    """
    source = index.source
    if pos > 0 and source[pos - 1] != "\n":
        return None
    if not (source.startswith("> ", pos) or (pos == 0 and source.startswith(">"))):
        return None
    end = index.find("\n", pos)
    if end == -1:
        end = len(source)
    return Blockquote(source[pos + 1 : end].strip(), span=(pos, end)), end


def scan_newline(index: SourceIndex, pos: int) -> RuleResult | None:
    if index.source.startswith("\n", pos):
        return Newline("\n", span=(pos, pos + 1)), pos + 1
    return None


RULES: tuple[Rule, ...] = (
    Rule("codeblock", frozenset("`"), scan_codeblock),
    Rule("inline_code", frozenset("`"), scan_inline_code),
    Rule("user_mention", frozenset("<"), scan_user_mention),
    Rule("discord_emoji", frozenset("<"), scan_discord_emoji),
    Rule("markdown_link", frozenset("["), scan_markdown_link),
    Rule("autolink", frozenset("h"), scan_autolink),
    Rule("bold", frozenset("*_"), scan_bold),
    Rule("italic", frozenset("*_"), scan_italic),
    Rule("strikethrough", frozenset("~"), scan_strikethrough),
    Rule("blockquote", frozenset(">"), scan_blockquote),
    Rule("newline", frozenset("\n"), scan_newline),
)


def _build_dispatch(rules: tuple[Rule, ...]) -> dict[str, tuple[Rule, ...]]:
    openers = sorted({ch for rule in rules for ch in rule.openers})
    return {ch: tuple(rule for rule in rules if ch in rule.openers) for ch in openers}


DISPATCH: dict[str, tuple[Rule, ...]] = _build_dispatch(RULES)


def next_special(source: str, pos: int) -> int:
    """Offset of the next character that could open a construct, or len(source)."""
    m = SPECIAL_PATTERN.search(source, pos)
    return len(source) if m is None else m.start()


__all__ = [
    "DISPATCH",
    "RULES",
    "Rule",
    "RuleResult",
    "SourceIndex",
    "next_special",
]
