from lish import LispValue
from lish.types.cons_list import ConsList
from lish.types.nil import Nil


def progn_form(vm, args: ConsList) -> LispValue:
    result: LispValue = Nil
    for form in args:
        result = vm.eval(form)
    return result
