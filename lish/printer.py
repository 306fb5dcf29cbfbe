"""Rendering of runtime values.

``to_source`` gives the canonical parenthesized form (strings quoted), which
round-trips through the reader for code. ``to_str`` is the stringification
used when a value becomes a process argument, an environment variable or
printed output: strings appear raw and symbols show their value.
"""

from __future__ import annotations

from lish import LispValue
from lish.types.cons_list import ConsList
from lish.types.function import Builtin, Function
from lish.types.nil import NilType
from lish.types.symbol import Symbol


def to_source(value: LispValue) -> str:
    if isinstance(value, Symbol):
        return value.name
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, ConsList):
        return "(" + " ".join(to_source(v) for v in value) + ")"
    if isinstance(value, NilType) or value is None:
        return "nil"
    if isinstance(value, dict):
        items = ", ".join(f"{k} {to_source(v)}" for k, v in value.items())
        return "{" + items + "}"
    if isinstance(value, (Function, Builtin)):
        return str(value) if isinstance(value, Function) else repr(value)
    return str(value)


def to_str(value: LispValue) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, Symbol):
        return to_str(value.value_or_name())
    return to_source(value)


def type_name(value: LispValue) -> str:
    """Short type label used in error messages."""
    if isinstance(value, Symbol):
        return "Symbol"
    if isinstance(value, bool):
        return "Bool"
    if isinstance(value, int):
        return "Number"
    if isinstance(value, str):
        return "String"
    if isinstance(value, ConsList):
        return "List"
    if isinstance(value, dict):
        return "Map"
    if isinstance(value, (Function, Builtin)):
        return "Function"
    return "Empty"
