from lish import LispValue
from lish.evaluation.args import check_args
from lish.types.cons_list import ConsList


def eval_form(vm, args: ConsList) -> LispValue:
    """(eval expr): evaluate expr, then evaluate the resulting form."""
    (expr,) = check_args("eval", args, "==", 1)
    return vm.eval(vm.eval(expr))
