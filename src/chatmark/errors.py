"""Exception classes for chatmark.

The tokenizer and the emoji-only classifier never raise: malformed input
degrades to plain text. Exceptions are reserved for misuse of the consuming
layers (rendering, serialization).
"""

from __future__ import annotations


class ChatmarkError(Exception):
    """Base exception for all chatmark errors.

    Subclass this for specific error categories.
    """

    pass


class RenderError(ChatmarkError):
    """Error during HTML rendering.

    Raised when the renderer is handed something that is not a token.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        """Initialize render error.

        Args:
            message: Error description
            index: Position of the offending item in the token list (optional)
        """
        self.message = message
        self.index = index
        location = f"token {index}: " if index is not None else ""
        super().__init__(f"{location}{message}")
