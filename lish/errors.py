"""Error taxonomies for lish.

Parse-time errors abort parsing of the current form or file. Evaluation-time
errors abort the current top-level form; the driver decides whether to carry
on (interactive) or stop (script).
"""

from __future__ import annotations


class LishError(Exception):
    """ Base class for all lish errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.filename: str | None = None

    def __str__(self) -> str:
        return self.message


# -------------------------------
# Parse time
# -------------------------------
class LishParseError(LishError):
    """ Raised when source cannot be turned into a program"""

    def __init__(self, message: str, filename: str = "", line: int = 0, col: int = 0):
        super().__init__(message)
        self.filename = filename
        self.line = line
        self.col = col


class InvalidCode(LishParseError):
    """ Structural or lexical problem in the source"""


class ExpectedToken(LishParseError):
    """ A specific token type was required and a different one was seen"""

    def __init__(self, message: str, expected: tuple = (), got=None,
                 filename: str = "", line: int = 0, col: int = 0):
        super().__init__(message, filename, line, col)
        self.expected = expected
        self.got = got


class ValidationError(LishParseError):
    """ Semantic check layered on top of a successful parse"""


class FileNotFound(LishParseError):
    """ Source file could not be opened"""


# -------------------------------
# Evaluation time
# -------------------------------
class LishEvalError(LishError):
    """ Raised when evaluating a form fails"""


class UndefinedFunction(LishEvalError):
    def __init__(self, name: str):
        super().__init__(f"Undefined function {name}")
        self.name = name


class NonSymbolHead(LishEvalError):
    def __init__(self, head=None):
        super().__init__("Cannot evaluate non-symbol object")
        self.head = head


class ArityError(LishEvalError):
    """ Wrong number of arguments passed to a callable"""

    def __init__(self, name: str, expected: int, got: int, relation: str = "=="):
        if relation == ">=":
            msg = f"{name} expected at least {expected} args, got {got}"
        elif relation == "<=":
            msg = f"{name} expected at most {expected} args, got {got}"
        else:
            msg = f"{name} expected {expected} args, got {got}"
        super().__init__(msg)
        self.name = name
        self.expected = expected
        self.got = got
        self.relation = relation


class ArgumentTypeError(LishEvalError):
    """ An argument had the wrong type"""

    def __init__(self, name: str, expected: str, message: str | None = None):
        super().__init__(message or f"{name} expected {expected}")
        self.name = name
        self.expected = expected


class CommandNotFound(LishEvalError):
    def __init__(self, command: str):
        super().__init__(f"Command not found {command}")
        self.command = command


class SpawnError(LishEvalError):
    """ Any OS error other than a missing binary while starting a child"""

    def __init__(self, command: str, message: str):
        super().__init__(message)
        self.command = command


class GlobError(LishEvalError):
    def __init__(self, pattern: str, message: str):
        super().__init__(f"glob {pattern!r}: {message}")
        self.pattern = pattern


class EvalArithmeticError(LishEvalError):
    """ Raised on division by zero and friends"""
