"""Tests for the link scheme allow-list."""

import pytest

from chatmark.sanitize import is_dangerous_url, is_safe_url


class TestIsSafeUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "http://example.com",
            "https://example.com/path?q=1#frag",
            "HTTPS://EXAMPLE.COM",
            "HtTp://mixed.case",
        ],
    )
    def test_http_schemes_are_safe(self, url: str) -> None:
        assert is_safe_url(url) is True

    @pytest.mark.parametrize(
        "url",
        [
            "javascript:alert(1)",
            "JAVASCRIPT:alert(1)",
            "data:text/html,<script>",
            "vbscript:msgbox",
            "mailto:a@b.c",
            "ftp://example.com",
            "/relative/path",
            "//example.com",
            "https:/example.com",
            " https://example.com",
            "",
        ],
    )
    def test_everything_else_is_unsafe(self, url: str) -> None:
        assert is_safe_url(url) is False


class TestIsDangerousUrl:
    @pytest.mark.parametrize(
        "url",
        ["javascript:alert(1)", "  JavaScript:x", "data:,x", "VBSCRIPT:x"],
    )
    def test_script_schemes(self, url: str) -> None:
        assert is_dangerous_url(url) is True

    @pytest.mark.parametrize("url", ["https://x.com", "mailto:a@b.c", "/path"])
    def test_non_script_schemes(self, url: str) -> None:
        assert is_dangerous_url(url) is False
