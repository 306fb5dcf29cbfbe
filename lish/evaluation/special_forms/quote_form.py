from lish import LispValue
from lish.evaluation.args import check_args
from lish.types.cons_list import ConsList


def quote_form(vm, args: ConsList) -> LispValue:
    """(quote x) => x, unevaluated."""
    (expr,) = check_args("quote", args, "==", 1)
    return expr
