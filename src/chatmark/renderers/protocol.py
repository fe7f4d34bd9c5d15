"""TokenRenderer protocol: stable interface for token renderers.

Any renderer that implements ``render(tokens, *, mega=False) -> str``
conforms to this protocol. The built-in ``HtmlRenderer`` is the reference
implementation.

Example:
    from chatmark.renderers.protocol import TokenRenderer

    def render_message(renderer: TokenRenderer, text: str) -> str:
        return renderer.render(tokenize(text), mega=is_emoji_only(text))

"""

from collections.abc import Iterable
from typing import Protocol

from chatmark.tokens import TokenBase


class TokenRenderer(Protocol):
    """Protocol for token renderers.

    Implementations must escape Text content, must only link to targets
    that pass ``chatmark.sanitize.is_safe_url``, and must not re-run
    pattern matching on token content.

    """

    def render(self, tokens: Iterable[TokenBase], *, mega: bool = False) -> str:
        """Render tokens to a string.

        Args:
            tokens: Tokens produced by the lexer.
            mega: Render at emoji-only scale.

        """
        ...
