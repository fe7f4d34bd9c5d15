"""Property-based tests for lexer invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from chatmark import tokenize
from chatmark.lexer import Lexer
from chatmark.sanitize import is_safe_url
from chatmark.tokens import Audio, DiscordEmoji, Link, Newline, Text, UserMention, Video

# Characters that open or close some construct, plus a little plain text
MARKUP_ALPHABET = "*_~`<>[]()@:an1 \nhtps/.mp3"


class TestBasicInvariants:
    """Test basic invariants that should always hold."""

    @given(st.text(max_size=1000))
    @settings(max_examples=200)
    def test_never_raises(self, source: str) -> None:
        """Any string tokenizes to a list."""
        assert isinstance(tokenize(source), list)

    @given(st.text(max_size=500))
    @settings(max_examples=200)
    def test_spans_partition_source(self, source: str) -> None:
        """Token spans are non-empty, contiguous, and cover the whole input."""
        pos = 0
        for token in Lexer(source).tokenize():
            start, end = token.span
            assert start == pos, f"gap or overlap before {token!r}"
            assert end > start, f"empty span for {token!r}"
            pos = end
        assert pos == len(source)

    @given(st.text(max_size=500))
    @settings(max_examples=100)
    def test_deterministic(self, source: str) -> None:
        assert tokenize(source) == tokenize(source)

    @given(st.text(max_size=300))
    @settings(max_examples=100)
    def test_empty_only_for_empty_input(self, source: str) -> None:
        assert (tokenize(source) == []) == (source == "")


class TestSpecialCharacterHandling:
    """Test handling of markup-heavy input."""

    @given(st.text(alphabet=MARKUP_ALPHABET, max_size=200))
    @settings(max_examples=300)
    def test_spans_partition_markup(self, source: str) -> None:
        tokens = tokenize(source)
        assert "".join(source[t.span[0] : t.span[1]] for t in tokens) == source

    @given(st.text(alphabet=MARKUP_ALPHABET, max_size=200))
    @settings(max_examples=300)
    def test_raw_tokens_match_source(self, source: str) -> None:
        """Tokens that carry raw text carry exactly their span."""
        for token in tokenize(source):
            if isinstance(token, Text | Newline | UserMention | DiscordEmoji):
                assert token.content == source[token.span[0] : token.span[1]]

    @given(st.text(alphabet="`\n x", max_size=100))
    @settings(max_examples=100)
    def test_backtick_combinations(self, source: str) -> None:
        tokens = tokenize(source)
        assert sum(t.span[1] - t.span[0] for t in tokens) == len(source)

    @given(st.text(alphabet="*_~ x\n", max_size=100))
    @settings(max_examples=100)
    def test_emphasis_combinations(self, source: str) -> None:
        tokens = tokenize(source)
        assert sum(t.span[1] - t.span[0] for t in tokens) == len(source)


class TestLinkSafety:
    """Every emitted link target uses an http(s) scheme."""

    @given(
        label=st.text(alphabet=st.characters(exclude_characters="[]\n"), min_size=1, max_size=20),
        url=st.text(alphabet=st.characters(exclude_characters="()\n "), min_size=1, max_size=40),
    )
    @settings(max_examples=200)
    def test_markdown_link_targets_are_safe(self, label: str, url: str) -> None:
        for token in tokenize(f"[{label}]({url})"):
            if isinstance(token, Link | Audio | Video):
                assert is_safe_url(token.url), token

    @given(st.text(alphabet=MARKUP_ALPHABET + "jvscri", max_size=200))
    @settings(max_examples=200)
    def test_all_link_targets_are_safe(self, source: str) -> None:
        for token in tokenize(source):
            if isinstance(token, Link | Audio | Video):
                assert is_safe_url(token.url), token

    @given(st.sampled_from(["javascript", "JavaScript", "data", "vbscript", "mailto", "ftp"]))
    def test_non_http_schemes_never_link(self, scheme: str) -> None:
        source = f"[click]({scheme}:payload)"
        assert tokenize(source) == [Text(source)]
