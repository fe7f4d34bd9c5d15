"""Tests for media helpers."""

import pytest

from chatmark.media import classify_media_url, emoji_image_url, media_filename, url_path
from chatmark.tokens import DiscordEmoji, TokenKind


class TestClassifyMediaUrl:
    @pytest.mark.parametrize(
        ("url", "kind"),
        [
            ("https://x.com/a.mp3", TokenKind.AUDIO),
            ("https://x.com/a.FLAC", TokenKind.AUDIO),
            ("https://x.com/a.m4a?token=abc", TokenKind.AUDIO),
            ("https://x.com/a.mkv", TokenKind.VIDEO),
            ("https://x.com/a.MoV#t=3", TokenKind.VIDEO),
            ("https://x.com/a.pdf", TokenKind.LINK),
            ("https://x.com/mp3", TokenKind.LINK),
            ("https://x.com/?file=a.mp3", TokenKind.LINK),
        ],
    )
    def test_classification(self, url: str, kind: TokenKind) -> None:
        assert classify_media_url(url) is kind

    def test_url_path_never_raises(self) -> None:
        assert url_path("https://[::1/a.mp3?x") == "https://[::1/a.mp3"


class TestEmojiImageUrl:
    def test_static_is_png(self) -> None:
        token = DiscordEmoji("<:a:123>", animated=False, emoji_id="123", emoji_name="a")
        assert emoji_image_url(token) == "https://cdn.discordapp.com/emojis/123.png"

    def test_animated_is_gif(self) -> None:
        token = DiscordEmoji("<a:a:123>", animated=True, emoji_id="123", emoji_name="a")
        assert emoji_image_url(token) == "https://cdn.discordapp.com/emojis/123.gif"

    def test_explicit_host(self) -> None:
        token = DiscordEmoji("<:a:9>", animated=False, emoji_id="9", emoji_name="a")
        assert emoji_image_url(token, host="cdn.local") == "https://cdn.local/emojis/9.png"


class TestMediaFilename:
    def test_last_segment_decoded(self) -> None:
        assert media_filename("https://x.com/dir/my%20song.mp3?dl=1", "Audio") == "my song.mp3"

    def test_fallback_for_empty_segment(self) -> None:
        assert media_filename("https://x.com/", "Video") == "Video"

    def test_fragment_is_dropped(self) -> None:
        assert media_filename("https://x.com/clip.mp4#t=10", "Video") == "clip.mp4"

    def test_slash_in_query_is_ignored(self) -> None:
        assert media_filename("https://x.com/a.mp3?next=/b", "Audio") == "a.mp3"
