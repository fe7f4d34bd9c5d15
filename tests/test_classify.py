"""Tests for the emoji-only ("mega") classifier."""

from hypothesis import given, settings
from hypothesis import strategies as st

from chatmark import count_emoji, is_emoji_only


class TestIsEmojiOnly:
    def test_single_unicode_emoji(self) -> None:
        assert is_emoji_only("🎉") is True

    def test_single_custom_emoji(self) -> None:
        assert is_emoji_only("<a:party:123>") is True
        assert is_emoji_only("<:party:123>") is True

    def test_up_to_five_emoji(self) -> None:
        assert is_emoji_only("🎉" * 5) is True

    def test_more_than_five_emoji(self) -> None:
        assert is_emoji_only("🎉" * 6) is False
        assert is_emoji_only("<:a:1>" * 6) is False

    def test_mixed_custom_and_unicode(self) -> None:
        assert is_emoji_only("<:a:1> 🎉") is True

    def test_whitespace_is_ignored(self) -> None:
        assert is_emoji_only("  🎉 \n 🎉  ") is True

    def test_text_disqualifies(self) -> None:
        assert is_emoji_only("gg 🎉") is False
        assert is_emoji_only("🎉 text") is False
        assert is_emoji_only("<:a:1>!") is False

    def test_empty_and_blank(self) -> None:
        assert is_emoji_only("") is False
        assert is_emoji_only("   \n ") is False

    def test_digits_are_not_emoji(self) -> None:
        assert is_emoji_only("1") is False

    def test_bare_heart(self) -> None:
        assert is_emoji_only("\u2764") is True

    def test_variation_selector_is_not_emoji(self) -> None:
        """VS16 is left over after emoji are removed, so the message has text."""
        assert is_emoji_only("\u2764\ufe0f") is False

    def test_zwj_sequence_is_not_emoji(self) -> None:
        family = "\U0001f468\u200d\U0001f469\u200d\U0001f467"
        assert is_emoji_only(family) is False

    def test_malformed_custom_tag(self) -> None:
        assert is_emoji_only("<:a:b>") is False

    def test_explicit_limit(self) -> None:
        assert is_emoji_only("🎉🎉🎉", max_emoji=2) is False
        assert is_emoji_only("🎉🎉", max_emoji=2) is True

    @given(st.text(max_size=200))
    @settings(max_examples=200)
    def test_never_raises(self, source: str) -> None:
        assert is_emoji_only(source) in (True, False)


class TestCountEmoji:
    def test_counts_tags_and_unicode(self) -> None:
        assert count_emoji("<:a:1>🎉🎉") == 3

    def test_plain_text(self) -> None:
        assert count_emoji("hello") == 0

    def test_emoji_inside_tag_name_not_double_counted(self) -> None:
        assert count_emoji("<a:wave:99>") == 1
