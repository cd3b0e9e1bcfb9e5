"""Syntax highlighting of code blocks into token spans"""

from pygments.lexers import get_lexer_by_name
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

from lessonmark.core.render.nodes import HighlightSpan


def _lexer(language: str):
    try:
        return get_lexer_by_name(language, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False, ensurenl=False)


def highlight(code: str, language: str) -> list[HighlightSpan]:
    """Split code into (token type, text) spans; unknown languages yield plain text."""
    return [
        HighlightSpan(token=str(ttype), text=value)
        for ttype, value in _lexer(language or "text").get_tokens(code)
        if value
    ]
