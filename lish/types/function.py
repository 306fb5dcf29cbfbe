"""Callables that can sit in a Symbol's function slot."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING, Optional

from lish import BuiltinFn
from lish.types.cons_list import ConsList

if TYPE_CHECKING:
    from lish.types.environment import Environment


class Builtin:
    """A native callable. ``fn(vm, args)`` receives the unevaluated arguments."""

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: BuiltinFn):
        self.name = name
        self.fn = fn

    def __call__(self, vm, args: ConsList):
        return self.fn(vm, args)

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"


class Function:
    """A user callable compiled from ``define``, ``defmacro`` or ``lambda``.

    ``env`` is the frame the callable closes over. When ``is_macro`` is set the
    call arguments are bound unevaluated.
    """

    __slots__ = ("params", "body", "env", "is_macro", "name")

    def __init__(
        self,
        params: list[str],
        body: ConsList,
        env: Optional[Environment] = None,
        is_macro: bool = False,
        name: str = "LAMBDA",
    ):
        self.params: list[str] = params
        self.body: ConsList = body
        self.env = env
        self.is_macro = is_macro
        self.name = name

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(macro " if self.is_macro else "(lambda ")
            buffer.write("(")
            buffer.write(" ".join(self.params))
            buffer.write(")")
            from lish.printer import to_source
            for form in self.body:
                buffer.write(" ")
                buffer.write(to_source(form))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)
