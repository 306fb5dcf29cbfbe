"""Special forms: define and defmacro.

``(define name expr)`` binds a value like defvar. ``(define (name params...)
body...)`` installs a Function in the symbol's function slot; ``defmacro``
does the same with an unevaluated-arguments Function. Both run with the VM's
``defining`` flag raised, so any process launched while evaluating the
definition has its output captured instead of written to the terminal.
"""

from __future__ import annotations

from lish import LispValue
from lish.errors import ArgumentTypeError
from lish.evaluation.args import check_args
from lish.evaluation.special_forms.defvar_form import bind_value
from lish.types.cons_list import ConsList
from lish.types.function import Function
from lish.types.symbol import Symbol


def param_names(name: str, params: object) -> list[str]:
    if not isinstance(params, ConsList):
        raise ArgumentTypeError(name, "a parameter list",
                                f"{name} expected a parameter list")
    names = []
    for p in params:
        if not isinstance(p, Symbol):
            raise ArgumentTypeError(name, "symbols as parameters",
                                    f"{name} expected symbols as parameters")
        names.append(p.name)
    return names


def install_function(vm, form_name: str, signature: ConsList, body: ConsList,
                     is_macro: bool) -> Symbol:
    target = signature.head()
    if not isinstance(target, Symbol):
        raise ArgumentTypeError(form_name, "a symbol as the function name",
                                f"{form_name} expected a symbol as the function name")
    fn = Function(param_names(form_name, signature.tail()), body, vm.scope,
                  is_macro=is_macro, name=target.name)
    if vm.scope.contains(target.name):
        cell = vm.scope.get_symbol(target.name)
    else:
        cell = Symbol(target.spelling)
    cell.function = fn
    vm.scope.set_symbol(cell)
    return cell


def define_form(vm, args: ConsList) -> LispValue:
    items = check_args("define", args, ">=", 2)
    was_defining = vm.defining
    vm.defining = True
    try:
        target = items[0]
        if isinstance(target, ConsList) and not target.is_empty():
            return install_function(vm, "define", target, args.tail(), is_macro=False)
        if len(items) != 2:
            check_args("define", args, "==", 2)
        if not isinstance(target, Symbol):
            raise ArgumentTypeError("define", "a symbol or (name params...) as arg 1",
                                    "define expected a symbol or (name params...) as arg 1")
        return bind_value(vm, target.name, target, vm.eval(items[1]))
    finally:
        vm.defining = was_defining


def defmacro_form(vm, args: ConsList) -> LispValue:
    items = check_args("defmacro", args, ">=", 1)
    signature = items[0]
    if not isinstance(signature, ConsList) or signature.is_empty():
        raise ArgumentTypeError("defmacro", "(name params...) as arg 1",
                                "defmacro expected (name params...) as arg 1")
    return install_function(vm, "defmacro", signature, args.tail(), is_macro=True)
