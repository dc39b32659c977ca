"""prompt_toolkit lexer for live tinyimp syntax highlighting in the REPL."""

from __future__ import annotations

from typing import Callable

from lark import UnexpectedInput
from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .parser import make_parser

# Map highlight groups → prompt_toolkit style strings.
GROUP_STYLE = {
    "keyword": "bold ansicyan",
    "boolean": "ansicyan",
    "number": "ansimagenta",
    "identifier": "",
    "operator": "",
    "punctuation": "",
    "comment": "italic ansigray",
    "error": "bold ansired",
}

# lark terminal name → highlight group.
_TERMINAL_GROUP = {
    "LET": "keyword",
    "IF": "keyword",
    "ELSE": "keyword",
    "WHILE": "keyword",
    "PRINT": "keyword",
    "TRUE": "boolean",
    "FALSE": "boolean",
    "NUMBER": "number",
    "NAME": "identifier",
    "OR_OP": "operator",
    "AND_OP": "operator",
    "EQ_OP": "operator",
    "REL_OP": "operator",
    "ADD_OP": "operator",
    "MUL_OP": "operator",
    "COMMENT": "comment",
}


def highlight_line(text: str) -> StyleAndTextTuples:
    """Tokenize a single line and return styled fragments."""
    if not text:
        return [("", "")]

    result: StyleAndTextTuples = []
    pos = 0

    try:
        for tok in make_parser().lex(text, dont_ignore=True):
            start = tok.start_pos
            if start > pos:
                result.append(("", text[pos:start]))

            group = _TERMINAL_GROUP.get(tok.type, "punctuation")
            result.append((GROUP_STYLE[group], str(tok)))
            pos = start + len(tok)
    except UnexpectedInput:
        result.append((GROUP_STYLE["error"], text[pos:]))
        pos = len(text)

    # Trailing unstyled text.
    if pos < len(text):
        result.append(("", text[pos:]))

    return result if result else [("", text)]


class TinyImpLexer(Lexer):
    """prompt_toolkit Lexer that highlights tinyimp source using the lark lexer."""

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        cache: dict[int, StyleAndTextTuples] = {}

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno not in cache:
                if lineno < len(lines):
                    cache[lineno] = highlight_line(lines[lineno])
                else:
                    cache[lineno] = [("", "")]

            return cache[lineno]

        return get_line
