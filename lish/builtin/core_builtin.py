"""Built-in functions for the lish runtime environment.

Arithmetic, comparison, list processing, output and symbol property helpers.
Every function here evaluates all of its arguments before doing any work.
"""
from __future__ import annotations

from lish import LispValue
from lish.errors import ArgumentTypeError, EvalArithmeticError
from lish.evaluation.args import check_args
from lish.evaluation.special_forms.if_form import is_truthy
from lish.printer import to_str, type_name
from lish.types.cons_list import EMPTY, ConsList
from lish.types.nil import Nil, NilType
from lish.types.symbol import Symbol


def eval_args(vm, args: ConsList) -> list[LispValue]:
    return [vm.eval(arg) for arg in args]


def _numbers(name: str, values: list[LispValue]) -> list[int]:
    for v in values:
        if not isinstance(v, int) or isinstance(v, bool):
            raise ArgumentTypeError(name, "numbers",
                                    f"{name} expected numbers, got {type_name(v)}")
    return values


def _as_list(name: str, value: LispValue) -> ConsList:
    if isinstance(value, NilType):
        return EMPTY
    if not isinstance(value, ConsList):
        raise ArgumentTypeError(name, "a list", f"{name} expected a list, got {type_name(value)}")
    return value


# -------------------------------
# Arithmetic
# -------------------------------
def add(vm, args: ConsList) -> LispValue:
    return sum(_numbers("+", eval_args(vm, args)))


def sub(vm, args: ConsList) -> LispValue:
    check_args("-", args, ">=", 1)
    values = _numbers("-", eval_args(vm, args))
    if len(values) == 1:
        return -values[0]
    result = values[0]
    for x in values[1:]:
        result -= x
    return result


def mul(vm, args: ConsList) -> LispValue:
    result = 1
    for x in _numbers("*", eval_args(vm, args)):
        result *= x
    return result


def div(vm, args: ConsList) -> LispValue:
    """Floor division, left to right."""
    check_args("/", args, ">=", 2)
    values = _numbers("/", eval_args(vm, args))
    result = values[0]
    for x in values[1:]:
        if x == 0:
            raise EvalArithmeticError("Division by zero")
        result //= x
    return result


# -------------------------------
# Comparison
# -------------------------------
def _same(a: LispValue, b: LispValue) -> bool:
    # symbols are equal by name; cells themselves stay identity-compared
    if isinstance(a, Symbol) and isinstance(b, Symbol):
        return a.name == b.name
    return a == b


def equals(vm, args: ConsList) -> bool:
    values = eval_args(vm, args)
    return all(_same(a, b) for a, b in zip(values, values[1:]))


def lt(vm, args: ConsList) -> bool:
    values = _numbers("<", eval_args(vm, args))
    return all(a < b for a, b in zip(values, values[1:]))


def gt(vm, args: ConsList) -> bool:
    values = _numbers(">", eval_args(vm, args))
    return all(a > b for a, b in zip(values, values[1:]))


def logical_not(vm, args: ConsList) -> bool:
    (expr,) = check_args("not", args, "==", 1)
    return not is_truthy(vm.eval(expr))


# -------------------------------
# List operations
# -------------------------------
def list_builtin(vm, args: ConsList) -> ConsList:
    return ConsList.from_iterable(eval_args(vm, args))


def cons(vm, args: ConsList) -> ConsList:
    head_expr, tail_expr = check_args("cons", args, "==", 2)
    head = vm.eval(head_expr)
    return _as_list("cons", vm.eval(tail_expr)).cons(head)


def car(vm, args: ConsList) -> LispValue:
    (expr,) = check_args("car", args, "==", 1)
    lst = _as_list("car", vm.eval(expr))
    return Nil if lst.is_empty() else lst.head()


def cdr(vm, args: ConsList) -> LispValue:
    (expr,) = check_args("cdr", args, "==", 1)
    return _as_list("cdr", vm.eval(expr)).tail()


def length(vm, args: ConsList) -> int:
    (expr,) = check_args("length", args, "==", 1)
    value = vm.eval(expr)
    if isinstance(value, (str, dict)):
        return len(value)
    return len(_as_list("length", value))


def concat(vm, args: ConsList) -> str:
    return "".join(to_str(v) for v in eval_args(vm, args))


# -------------------------------
# Output
# -------------------------------
def print_builtin(vm, args: ConsList) -> LispValue:
    print(" ".join(to_str(v) for v in eval_args(vm, args)))
    return Nil


# -------------------------------
# Maps and symbols
# -------------------------------
def get_builtin(vm, args: ConsList) -> LispValue:
    """(get map key): look a key up in a captured process result."""
    map_expr, key_expr = check_args("get", args, "==", 2)
    mapping = vm.eval(map_expr)
    if not isinstance(mapping, dict):
        raise ArgumentTypeError("get", "a map", f"get expected a map, got {type_name(mapping)}")
    return mapping.get(to_str(vm.eval(key_expr)), Nil)


def _symbol_arg(name: str, vm, expr) -> Symbol:
    value = vm.eval(expr)
    if not isinstance(value, Symbol):
        raise ArgumentTypeError(name, "a symbol", f"{name} expected a symbol, got {type_name(value)}")
    return value


def _property_key(value: LispValue) -> str:
    return value.name if isinstance(value, Symbol) else to_str(value)


def setp(vm, args: ConsList) -> LispValue:
    """(setp 'sym key value): store value in sym's property table."""
    sym_expr, key_expr, val_expr = check_args("setp", args, "==", 3)
    sym = _symbol_arg("setp", vm, sym_expr)
    key = _property_key(vm.eval(key_expr))
    value = vm.eval(val_expr)
    if vm.scope.find(sym.name) is None:
        cell = Symbol(sym.spelling)
        vm.env.set_symbol(cell)
    else:
        cell = vm.scope.get_symbol(sym.name)
    cell.put_property(key, value)
    return value


def getp(vm, args: ConsList) -> LispValue:
    sym_expr, key_expr = check_args("getp", args, "==", 2)
    sym = _symbol_arg("getp", vm, sym_expr)
    value = vm.scope.get_symbol(sym.name).get_property(_property_key(vm.eval(key_expr)))
    return Nil if value is None else value


def symbol_value(vm, args: ConsList) -> LispValue:
    (expr,) = check_args("symbol-value", args, "==", 1)
    sym = _symbol_arg("symbol-value", vm, expr)
    value = vm.scope.get_symbol(sym.name).value
    return Nil if value is None else value


def interactive(vm, args: ConsList) -> bool:
    check_args("interactive", args, "==", 0)
    return vm.is_interactive()


# -------------------------------
# Registration
# -------------------------------
CORE_BUILTINS = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "=": equals,
    "<": lt,
    ">": gt,
    "not": logical_not,
    "list": list_builtin,
    "cons": cons,
    "car": car,
    "head": car,
    "cdr": cdr,
    "tail": cdr,
    "length": length,
    "concat": concat,
    "print": print_builtin,
    "get": get_builtin,
    "setp": setp,
    "getp": getp,
    "symbol-value": symbol_value,
    "interactive": interactive,
}


def register(vm) -> None:
    for name, fn in CORE_BUILTINS.items():
        vm.add_builtin(name, fn)
