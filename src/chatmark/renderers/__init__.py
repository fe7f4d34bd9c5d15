"""chatmark renderers.

Renderers turn token lists into output formats.

Available Renderers:
- HtmlRenderer: HTML for the chat surface
- PlainTextRenderer: Plain text for previews and notifications

Thread Safety:
All renderers use StringBuilder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from chatmark.renderers.html import HtmlRenderer
from chatmark.renderers.plain import PlainTextRenderer
from chatmark.renderers.protocol import TokenRenderer

__all__ = ["HtmlRenderer", "PlainTextRenderer", "TokenRenderer"]
