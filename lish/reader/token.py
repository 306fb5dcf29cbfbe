from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class TokenType(Enum):
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"
    COMMENT = "COMMENT"
    COMMA = "COMMA"
    SYMBOL = "SYMBOL"
    NUMBER = "NUMBER"
    STRING = "STRING"
    RPAREN = "RPAREN"
    LPAREN = "LPAREN"
    QUOTE = "QUOTE"

    def __str__(self) -> str:
        return self.value


class Token(NamedTuple):
    type: TokenType
    literal: str
    line: int
    col: int
    file: str

    @classmethod
    def eof(cls, line: int = 0, col: int = 0, file: str = "") -> Token:
        return cls(TokenType.EOF, "", line, col, file)
