"""Tests for the exception hierarchy."""

import pytest

from chatmark import ChatmarkError, RenderError


class TestRenderError:
    def test_is_chatmark_error(self) -> None:
        with pytest.raises(ChatmarkError):
            raise RenderError("bad")

    def test_message_with_index(self) -> None:
        err = RenderError("cannot render int", index=3)
        assert str(err) == "token 3: cannot render int"
        assert err.message == "cannot render int"
        assert err.index == 3

    def test_message_without_index(self) -> None:
        err = RenderError("cannot render int")
        assert str(err) == "cannot render int"
        assert err.index is None
