"""Special form: defvar.

``(defvar name expr)`` evaluates ``expr`` and stores the result in the symbol
cell for ``name`` in the current frame. When the frame already binds ``name``
that cell is mutated in place, so every handle to it sees the new value;
otherwise a new cell, spelled like the source symbol, becomes the binding. The value
is copied at bind time: ``(defvar y x)`` stores x's current value, not x.
"""

from __future__ import annotations

from lish import LispValue
from lish.errors import ArgumentTypeError
from lish.evaluation.args import check_args
from lish.types.cons_list import ConsList
from lish.types.symbol import Symbol


def bind_value(vm, name: str, sym: Symbol, value: LispValue) -> Symbol:
    """Store ``value`` in the current frame's cell for ``name``; return the cell."""
    if vm.scope.contains(name):
        cell = vm.scope.get_symbol(name)
    else:
        cell = Symbol(sym.spelling)
    cell.value = value
    vm.scope.set_symbol(cell)
    return cell


def defvar_form(vm, args: ConsList) -> LispValue:
    target, val_expr = check_args("defvar", args, "==", 2)
    if not isinstance(target, Symbol):
        raise ArgumentTypeError("defvar", "a symbol as arg 1",
                                "defvar expected a symbol as arg 1")
    value = vm.eval(val_expr)
    return bind_value(vm, target.name, target, value)
