"""Syntax highlighting for rendered code blocks.

Code blocks carry their fence language (``"text"`` when untagged). When
highlighting is enabled the renderer hands them to the configured
highlighter. Rosettes is used automatically when it is installed
(``pip install chatmark[highlight]``); without it, and without a custom
highlighter, code renders as a plain ``<pre><code>`` block.

Usage:
    from chatmark.highlighting import set_highlighter

    def my_highlighter(code: str, language: str) -> str:
        return f'<pre class="language-{language}"><code>{code}</code></pre>'

    set_highlighter(my_highlighter)
"""

from __future__ import annotations

from collections.abc import Callable
from html import escape
from typing import Protocol


class Highlighter(Protocol):
    """Protocol for syntax highlighters.

    Thread Safety:
        Implementations must be thread-safe. The highlight() method
        may be called concurrently from multiple render threads.
    """

    def highlight(self, code: str, language: str) -> str:
        """Return HTML markup for ``code``.

        Contract:
            - MUST escape HTML entities in code
            - SHOULD fall back to plain text for unknown languages
        """
        ...

    def supports_language(self, language: str) -> bool:
        """Check if highlighter supports the given language. MUST NOT raise."""
        ...


# Support for simple callable-based highlighters
SimpleHighlighter = Callable[[str, str], str]

# Global highlighter
_highlighter: Highlighter | SimpleHighlighter | None = None
_tried_rosettes: bool = False


def set_highlighter(highlighter: Highlighter | SimpleHighlighter | None) -> None:
    """Set the global syntax highlighter.

    Args:
        highlighter: A Highlighter implementation, or a function taking
            (code, language) and returning HTML. None clears it; Rosettes
            is then tried again on next use.
    """
    global _highlighter, _tried_rosettes
    _highlighter = highlighter
    _tried_rosettes = False


def _try_import_rosettes() -> bool:
    """Try to import and configure Rosettes highlighter."""
    global _highlighter, _tried_rosettes

    if _tried_rosettes:
        return _highlighter is not None

    _tried_rosettes = True

    try:
        import rosettes  # type: ignore[import-not-found]

        class RosettesHighlighter:
            """Rosettes-based syntax highlighter implementing Highlighter protocol."""

            def highlight(self, code: str, language: str) -> str:
                result: str = rosettes.highlight(code, language=language)
                return result

            def supports_language(self, language: str) -> bool:
                try:
                    result: bool = rosettes.supports_language(language)
                except Exception:
                    return False
                return result

        _highlighter = RosettesHighlighter()
        return True
    except ImportError:
        return False


def has_highlighter() -> bool:
    """Check if a syntax highlighter is available."""
    if _highlighter is not None:
        return True
    return _try_import_rosettes()


def get_highlighter() -> Highlighter | SimpleHighlighter | None:
    """Get the active highlighter.

    Returns:
        The configured highlighter, Rosettes when it is installed and
        nothing was set, or None.
    """
    if _highlighter is None:
        _try_import_rosettes()
    return _highlighter


def plain_code_block(code: str, language: str) -> str:
    """Unhighlighted ``<pre><code>`` markup with a language class."""
    lang_class = f' class="language-{escape(language)}"' if language else ""
    return f"<pre><code{lang_class}>{escape(code, quote=False)}</code></pre>"


def highlight(code: str, language: str) -> str:
    """Highlight code using the active highlighter.

    Languages the highlighter does not support, and every language when
    no highlighter is available, render as a plain block.
    """
    highlighter = get_highlighter()
    if highlighter is None:
        return plain_code_block(code, language)
    if hasattr(highlighter, "highlight") and callable(highlighter.highlight):
        if not highlighter.supports_language(language):
            return plain_code_block(code, language)
        return highlighter.highlight(code, language)
    return highlighter(code, language)


__all__ = [
    "Highlighter",
    "SimpleHighlighter",
    "get_highlighter",
    "has_highlighter",
    "highlight",
    "plain_code_block",
    "set_highlighter",
]
