"""
  Lexer for lish source.

- Streaming: ``lex`` is a generator of Token tuples carrying type, literal,
  line, column and source name.
- Comments are emitted as COMMENT tokens; the parser skips them.
- Strings run verbatim to the next double quote. There are no escape
  sequences, so a string cannot contain a double quote.
- A token starting with a digit is a NUMBER and keeps consuming hex digits
  and ``x`` so that ``0x1F`` reaches the number parser intact.
- A NUL character ends the input.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Union

from lish.reader.token import Token, TokenType

SYMBOL_CHARS = r"A-Za-z0-9\-+_$*/\\=<>!&%."

TOKEN_RE = re.compile(
    r"(?P<ws>[ \t\r\n]+)"
    r"|(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r"|(?P<comma>,)"
    r"|(?P<quote>')"
    r'|(?P<string>"[^"]*")'  # no escapes
    r'|(?P<unterminated>"[^"]*)'  # string running to end of input
    r"|(?P<number>[0-9][0-9a-fA-Fx]*)"
    r"|(?P<symbol>[" + SYMBOL_CHARS + r"]+)"
    r"|(?P<illegal>.)",
    re.DOTALL,
)

_SIMPLE = {
    "lparen": TokenType.LPAREN,
    "rparen": TokenType.RPAREN,
    "comma": TokenType.COMMA,
    "quote": TokenType.QUOTE,
    "number": TokenType.NUMBER,
    "symbol": TokenType.SYMBOL,
    "illegal": TokenType.ILLEGAL,
}

Source = Union[str, bytes, bytearray, Iterable[int]]


def _decode(source: Source) -> str:
    if isinstance(source, str):
        text = source
    else:
        text = bytes(source).decode("utf-8", errors="replace")
    nul = text.find("\x00")
    return text if nul < 0 else text[:nul]


def lex(source: Source, filename: str = "<string>") -> Iterator[Token]:
    """Token generator. The end of input is signalled by exhaustion."""
    text = _decode(source)
    pos = 0
    line = 1
    line_start = 0
    n = len(text)

    while pos < n:
        m = TOKEN_RE.match(text, pos)
        kind = m.lastgroup
        lit = m.group(kind)
        col = pos - line_start + 1

        if kind == "comment":
            yield Token(TokenType.COMMENT, lit[1:].strip(), line, col, filename)
        elif kind == "string":
            yield Token(TokenType.STRING, lit[1:-1], line, col, filename)
        elif kind == "unterminated":
            yield Token(TokenType.ILLEGAL, lit, line, col, filename)
        elif kind != "ws":
            yield Token(_SIMPLE[kind], lit, line, col, filename)

        newlines = lit.count("\n")
        if newlines:
            line += newlines
            line_start = pos + lit.rindex("\n") + 1
        pos = m.end()
