"""Chat-message lexer.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, RULES
├── core.py              # Lexer class (cursor loop, text coalescing)
└── rules.py             # Pattern rules and the priority table

Usage:
    >>> from chatmark.lexer import Lexer
    >>> list(Lexer("> quoted\\nplain").tokenize())
    [Blockquote(content='quoted'), Newline(content='\\n'), Text(content='plain')]

"""

from chatmark.lexer.core import Lexer
from chatmark.lexer.rules import DISPATCH, RULES, Rule, SourceIndex

__all__ = ["DISPATCH", "Lexer", "RULES", "Rule", "SourceIndex"]
