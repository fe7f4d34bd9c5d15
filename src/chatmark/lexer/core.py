"""Cursor-based lexer for chat messages.

A single scanning state with one transition per rule:
1. Look up the rules that can open at the cursor character
2. Try them in priority order; the first match emits a token and
   advances the cursor past its span
3. Otherwise consume plain text up to the next character that could
   open a construct (at least one character)

Plain text runs between matches are coalesced into one Text token.
Every step advances the cursor, so scanning always terminates and the
emitted spans partition the source exactly. Closing delimiters are
looked up through a per-message SourceIndex, so scanning stays linear
in the message length.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from chatmark.lexer.rules import DISPATCH, SourceIndex, next_special
from chatmark.tokens import Text, Token


class Lexer:
    """Tokenize one chat message.

    Usage:
        >>> lexer = Lexer("hi **there**")
        >>> list(lexer.tokenize())
        [Text(content='hi '), Bold(content='there')]

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_source",
        "_index",
        "_source_len",
        "_pos",
        "_text_start",  # Start of the pending plain-text run, or -1
    )

    def __init__(self, source: str) -> None:
        """Initialize lexer with message text.

        Args:
            source: Raw message text
        """
        self._source = source
        self._index = SourceIndex(source)
        self._source_len = len(source)
        self._pos = 0
        self._text_start = -1

    def tokenize(self) -> Iterator[Token]:
        """Tokenize the message into a stream of tokens.

        Yields:
            Tokens in source order. Never raises.
        """
        source = self._source
        index = self._index
        source_len = self._source_len

        while self._pos < source_len:
            pos = self._pos
            result = None
            for rule in DISPATCH.get(source[pos], ()):
                result = rule.scan(index, pos)
                if result is not None:
                    break

            if result is None:
                self._consume_text()
                continue

            pending = self._flush_text()
            if pending is not None:
                yield pending
            token, self._pos = result
            yield token

        pending = self._flush_text()
        if pending is not None:
            yield pending

    def _consume_text(self) -> None:
        """Extend the pending text run to the next potential construct."""
        pos = self._pos
        end = next_special(self._source, pos)
        if end == pos:
            # Opener that matched no rule: take it literally
            end = pos + 1
        if self._text_start < 0:
            self._text_start = pos
        self._pos = end

    def _flush_text(self) -> Text | None:
        """Close the pending text run, if any."""
        start = self._text_start
        if start < 0:
            return None
        self._text_start = -1
        return Text(self._source[start : self._pos], span=(start, self._pos))
