"""Registry of special forms for the lish evaluator.

Special forms are ordinary builtins that choose what to evaluate themselves;
they are installed in the global frame like any other builtin.
"""

from lish.evaluation.special_forms.quote_form import quote_form
from lish.evaluation.special_forms.defvar_form import defvar_form
from lish.evaluation.special_forms.define_form import define_form, defmacro_form
from lish.evaluation.special_forms.lambda_form import lambda_form
from lish.evaluation.special_forms.set_form import set_form
from lish.evaluation.special_forms.if_form import if_form
from lish.evaluation.special_forms.progn_form import progn_form
from lish.evaluation.special_forms.eval_form import eval_form

SPECIAL_FORMS = {
    "quote": quote_form,
    "defvar": defvar_form,
    "define": define_form,
    "defmacro": defmacro_form,
    "lambda": lambda_form,
    "set": set_form,
    "if": if_form,
    "progn": progn_form,
    "begin": progn_form,
    "eval": eval_form,
}


def register(vm) -> None:
    for name, fn in SPECIAL_FORMS.items():
        vm.add_builtin(name, fn)
