from lish import LispValue
from lish.evaluation.args import check_args
from lish.evaluation.special_forms.define_form import param_names
from lish.types.cons_list import ConsList
from lish.types.function import Function


def lambda_form(vm, args: ConsList) -> LispValue:
    """(lambda (params...) body...) => a Function closing over the current frame."""
    items = check_args("lambda", args, ">=", 1)
    return Function(param_names("lambda", items[0]), args.tail(), vm.scope)
