from lish import LispValue
from lish.evaluation.args import check_args
from lish.types.cons_list import ConsList
from lish.types.nil import Nil, NilType


def is_truthy(value: LispValue) -> bool:
    """Nil, the empty list, false and the empty string are false."""
    if isinstance(value, NilType) or value is False:
        return False
    if isinstance(value, (ConsList, str)):
        return len(value) > 0
    return True


def if_form(vm, args: ConsList) -> LispValue:
    items = check_args("if", args, ">=", 2)
    check_args("if", args, "<=", 3)
    if is_truthy(vm.eval(items[0])):
        return vm.eval(items[1])
    if len(items) > 2:
        return vm.eval(items[2])
    return Nil
