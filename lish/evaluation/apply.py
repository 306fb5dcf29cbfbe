"""Application of user-defined callables.

A call creates a fresh frame, binds each parameter name to a new Symbol cell
holding the argument, and evaluates the body inside that frame. Plain
functions chain the frame to the environment they were defined in; macros
(fexprs) chain it to the caller's frame, so ``(eval param)`` in a macro body
resolves names the way the caller would.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lish import LispValue
from lish.errors import ArityError
from lish.types.cons_list import ConsList
from lish.types.environment import Environment
from lish.types.function import Function
from lish.types.symbol import Symbol

if TYPE_CHECKING:
    from lish.evaluation.vm import VM


def bind_arguments(fn: Function, values: list[LispValue], parent: Environment) -> Environment:
    if len(values) != len(fn.params):
        raise ArityError(fn.name, len(fn.params), len(values))
    frame = Environment(outer=parent)
    for name, value in zip(fn.params, values):
        frame.set_symbol(Symbol.with_value(name, value))
    return frame


def apply_function(vm: VM, fn: Function, args: ConsList) -> LispValue:
    if fn.is_macro:
        values = list(args)
        parent = vm.scope
    else:
        values = [vm.eval(arg) for arg in args]
        parent = fn.env if fn.env is not None else vm.env
    frame = bind_arguments(fn, values, parent)
    return vm.eval_body(fn.body, frame)
