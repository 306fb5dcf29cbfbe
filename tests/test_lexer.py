import pytest
from hypothesis import given, strategies as st

from lish.reader.lexer import lex
from lish.reader.token import TokenType


def _kinds(source):
    return [(tok.type, tok.literal) for tok in lex(source)]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", [(TokenType.SYMBOL, "a")]),
        ("'a", [(TokenType.QUOTE, "'"), (TokenType.SYMBOL, "a")]),
        ("(ls -la)", [(TokenType.LPAREN, "("), (TokenType.SYMBOL, "ls"),
                      (TokenType.SYMBOL, "-la"), (TokenType.RPAREN, ")")]),
        ('"hello world"', [(TokenType.STRING, "hello world")]),
        ('"a;b(c)"', [(TokenType.STRING, "a;b(c)")]),
        ("42 0x1F", [(TokenType.NUMBER, "42"), (TokenType.NUMBER, "0x1F")]),
        ("a,b", [(TokenType.SYMBOL, "a"), (TokenType.COMMA, ","), (TokenType.SYMBOL, "b")]),
        ("; note\n", [(TokenType.COMMENT, "note")]),
        ("/usr/bin/env", [(TokenType.SYMBOL, "/usr/bin/env")]),
        ("a#b", [(TokenType.SYMBOL, "a"), (TokenType.ILLEGAL, "#"), (TokenType.SYMBOL, "b")]),
        ('"open', [(TokenType.ILLEGAL, '"open')]),
        ("", []),
    ]
)
def test_token_kinds(source, expected):
    assert _kinds(source) == expected


def test_comment_then_list_positions():
    tokens = list(lex("; comment\n(PWD)", "x.lisp"))
    assert [(t.type, t.literal, t.line, t.col) for t in tokens] == [
        (TokenType.COMMENT, "comment", 1, 1),
        (TokenType.LPAREN, "(", 2, 1),
        (TokenType.SYMBOL, "PWD", 2, 2),
        (TokenType.RPAREN, ")", 2, 5),
    ]
    assert all(t.file == "x.lisp" for t in tokens)


def test_multiline_string_advances_line():
    tokens = list(lex('"a\nb" c'))
    assert tokens[0].type is TokenType.STRING
    assert (tokens[1].line, tokens[1].col) == (2, 4)


def test_nul_ends_input():
    assert _kinds("(a)\x00(b)") == _kinds("(a)")


def test_bytes_and_int_iterables():
    assert _kinds(b"(a 1)") == _kinds("(a 1)")
    assert _kinds([40, 97, 41]) == _kinds("(a)")


@given(st.text())
def test_lexing_never_fails(text):
    tokens = list(lex(text))
    assert all(t.type is not TokenType.EOF for t in tokens)
    assert all(t.line >= 1 and t.col >= 1 for t in tokens)
