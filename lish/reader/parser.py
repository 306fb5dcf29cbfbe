"""
  Recursive-descent parser for lish.

Turns the token stream into a Program: a ConsList of top-level forms. Forms
are built from runtime values directly (Symbol cells, int, str, ConsList),
since code and data share one representation.

Every top-level form must be a parenthesized list. ``'x`` is read as
``(QUOTE x)``. Parsing stops at the first error; nothing is resumable.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, Union

from lish import SExpression
from lish.errors import ExpectedToken, FileNotFound, InvalidCode
from lish.reader.lexer import Source, lex
from lish.reader.token import Token, TokenType
from lish.types.cons_list import ConsList
from lish.types.symbol import Symbol

logger = logging.getLogger(__name__)

U64_MAX = 2 ** 64 - 1

_FORM_START = (
    TokenType.LPAREN,
    TokenType.NUMBER,
    TokenType.STRING,
    TokenType.SYMBOL,
    TokenType.QUOTE,
)


def parse_u64(literal: str) -> int | None:
    """Parse a decimal or 0x-prefixed hexadecimal unsigned 64-bit integer."""
    try:
        if literal.startswith("0x"):
            n = int(literal[2:], 16) if literal[2:].isalnum() else None
        else:
            n = int(literal, 10) if literal.isdigit() else None
    except ValueError:
        return None
    if n is None or n > U64_MAX:
        return None
    return n


class Parser:
    def __init__(self, tokens: Iterable[Token]):
        self.tokens: Iterator[Token] = iter(tokens)
        self._last: Token | None = None
        self.cur_tok: Token = self._next_significant()
        self.peek_tok: Token = self._next_significant()

    def _next_significant(self) -> Token:
        for tok in self.tokens:
            self._last = tok
            if tok.type is not TokenType.COMMENT:
                return tok
        if self._last is None:
            return Token.eof()
        # EOF reports where the input ran out
        return Token.eof(self._last.line, self._last.col, self._last.file)

    def read_token(self) -> None:
        self.cur_tok = self.peek_tok
        self.peek_tok = self._next_significant()

    def cur_token_is(self, t: TokenType) -> bool:
        return self.cur_tok.type is t

    # --- errors ---
    def _invalid(self, msg: str) -> InvalidCode:
        tok = self.cur_tok
        return InvalidCode(
            f"{tok.file}: line {tok.line}, col {tok.col} {msg}",
            tok.file, tok.line, tok.col,
        )

    def _expected(self, expected: tuple[TokenType, ...]) -> ExpectedToken:
        tok = self.cur_tok
        names = ", ".join(str(t) for t in expected)
        return ExpectedToken(
            f"expected [{names}] on line {tok.line} in {tok.file}, got {tok.type}",
            expected, tok.type, tok.file, tok.line, tok.col,
        )

    # --- grammar ---
    def parse(self) -> ConsList:
        forms: list[SExpression] = []
        while not self.cur_token_is(TokenType.EOF):
            if self.cur_token_is(TokenType.LPAREN):
                forms.append(self.parse_list())
            elif self.cur_token_is(TokenType.ILLEGAL):
                raise self._invalid(f"Illegal token {self.cur_tok.literal!r}")
            else:
                raise self._invalid(f"Unknown token {self.cur_tok.type}")
            self.read_token()
        return ConsList.from_iterable(forms)

    def parse_form(self) -> SExpression:
        tok = self.cur_tok
        if tok.type is TokenType.SYMBOL:
            sym = Symbol(tok.literal)
            self.read_token()
            return sym
        if tok.type is TokenType.NUMBER:
            n = parse_u64(tok.literal)
            if n is None:
                raise self._invalid("Failed parsing number")
            self.read_token()
            return n
        if tok.type is TokenType.STRING:
            self.read_token()
            return tok.literal
        if tok.type is TokenType.LPAREN:
            lst = self.parse_list()
            self.read_token()
            return lst
        if tok.type is TokenType.QUOTE:
            self.read_token()
            if self.cur_tok.type not in _FORM_START:
                raise self._expected(_FORM_START)
            quoted = self.parse_form()
            return ConsList.from_iterable([Symbol("quote"), quoted])
        if tok.type is TokenType.ILLEGAL:
            raise self._invalid(f"Illegal token {tok.literal!r}")
        raise self._expected(_FORM_START)

    def parse_list(self) -> ConsList:
        """Parse from the current LPAREN up to its RPAREN, which stays current."""
        elems: list[SExpression] = []
        self.read_token()
        while not self.cur_token_is(TokenType.RPAREN):
            elems.append(self.parse_form())
        return ConsList.from_iterable(elems)


def compile_string(code: Source, filename: str = "<string>") -> ConsList:
    return Parser(lex(code, filename)).parse()


def compile_file(path: Union[str, Path]) -> ConsList:
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as err:
        raise FileNotFound(str(err), str(p)) from err
    logger.debug("compiling %s (%d bytes)", p, len(data))
    return compile_string(data, str(p))
