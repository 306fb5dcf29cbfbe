from lish import LispValue
from lish.errors import ArgumentTypeError
from lish.evaluation.args import check_args
from lish.types.cons_list import ConsList
from lish.types.symbol import Symbol


def set_form(vm, args: ConsList) -> LispValue:
    """(set name expr): update the nearest binding of name, or bind it globally."""
    target, val_expr = check_args("set", args, "==", 2)
    if not isinstance(target, Symbol):
        raise ArgumentTypeError("set", "a symbol as arg 1", "set expected a symbol as arg 1")
    value = vm.eval(val_expr)
    frame = vm.scope.find(target.name)
    if frame is not None:
        frame.get_symbol(target.name).value = value
    else:
        vm.env.set_symbol(Symbol.with_value(target.spelling, value))
    return value
