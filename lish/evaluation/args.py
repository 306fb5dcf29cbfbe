"""Argument-count validation shared by special forms and builtins."""

from __future__ import annotations

from lish import SExpression
from lish.errors import ArityError
from lish.types.cons_list import ConsList


def check_args(name: str, args: ConsList, relation: str = "==", n: int = 0) -> list[SExpression]:
    """Return ``args`` as a Python list after checking its length.

    ``relation`` is one of ``==``, ``>=`` or ``<=``; a violation raises
    ArityError before any argument has been evaluated.
    """
    items = list(args)
    got = len(items)
    if relation == "==":
        ok = got == n
    elif relation == ">=":
        ok = got >= n
    elif relation == "<=":
        ok = got <= n
    else:
        raise ValueError(f"unknown arity relation {relation!r}")
    if not ok:
        raise ArityError(name, n, got, relation)
    return items
