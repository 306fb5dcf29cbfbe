import os

import pytest

from lish.errors import (
    ArgumentTypeError,
    ArityError,
    EvalArithmeticError,
    LishEvalError,
    NonSymbolHead,
    UndefinedFunction,
)
from lish.printer import to_source
from lish.types.cons_list import ConsList
from lish.types.function import Function
from lish.types.nil import Nil
from lish.types.symbol import Symbol


# -----------------------------------------------------
# Atoms and symbols
# -----------------------------------------------------

@pytest.mark.parametrize(
    "code, expected",
    [
        ("(progn 42)", 42),
        ('(progn "text")', "text"),
        ("(progn nil)", Nil),
        ("(progn true)", True),
        ("(progn false)", False),
        ("()", Nil),
    ]
)
def test_self_evaluation(interp, code, expected):
    assert interp.eval(code) == expected


def test_unbound_symbol_evaluates_to_its_spelling(interp):
    result = interp.eval("(list hello -la /tmp)")
    assert list(result) == ["hello", "-la", "/tmp"]


def test_environment_variables_are_prebound():
    from lish.interpreter import Interpreter
    interp = Interpreter(environ={"GREETING": "hi", "PWD": "/somewhere"})
    assert interp.eval("(progn greeting)") == "hi"
    assert interp.eval("(progn PWD)") == "/somewhere"
    # the builtin stays callable under the same name
    assert interp.eval("(pwd)") == os.getcwd()


# -----------------------------------------------------
# defvar / set
# -----------------------------------------------------

def test_defvar_returns_the_symbol(interp):
    sym = interp.eval("(defvar x 5)")
    assert isinstance(sym, Symbol)
    assert sym.name == "X"
    assert sym.value == 5


def test_defvar_copies_the_value(interp):
    assert interp.eval("(defvar x 5) (defvar y x) (defvar x 6) (progn y)") == 5


def test_redefinition_mutates_the_same_cell(interp):
    first = interp.eval("(defvar x 1)")
    second = interp.eval("(defvar x 2)")
    assert first is second
    assert first.value == 2


def test_functions_see_later_redefinitions(interp):
    assert interp.eval("(defvar x 1) (define (getx) x) (defvar x 2) (getx)") == 2


def test_defvar_requires_symbol(interp):
    with pytest.raises(ArgumentTypeError, match="defvar expected a symbol as arg 1"):
        interp.eval('(defvar "x" 1)')


def test_defvar_arity(interp):
    with pytest.raises(ArityError) as exc:
        interp.eval("(defvar x)")
    assert str(exc.value) == "defvar expected 2 args, got 1"


def test_set_updates_nearest_binding(interp):
    code = """
    (defvar counter 1)
    (define (bump) (set counter (+ counter 1)))
    (bump)
    (bump)
    (symbol-value 'counter)
    """
    assert interp.eval(code) == 3


def test_set_binds_globally_when_unbound(interp):
    interp.eval("(define (f) (set fresh 7))")
    interp.eval("(f)")
    assert interp.vm.env.get_symbol("fresh").value == 7


def test_define_value_form(interp):
    assert interp.eval("(define answer (* 6 7)) (progn answer)") == 42


# -----------------------------------------------------
# Functions, lambdas, macros
# -----------------------------------------------------

def test_define_function(interp):
    assert interp.eval("(define (add a b) (+ a b)) (add 2 3)") == 5


def test_function_body_is_implicit_progn(interp):
    assert interp.eval("(define (f) 1 2 3) (f)") == 3


def test_define_returns_function_cell(interp):
    sym = interp.eval("(define (f x) x)")
    assert isinstance(sym.function, Function)
    assert sym.function.params == ["X"]


def test_lambda_application(interp):
    assert interp.eval("((lambda (a b) (+ a b)) 2 3)") == 5


def test_lambda_stored_in_variable(interp):
    assert interp.eval("(define inc (lambda (x) (+ x 1))) (inc 4)") == 5


def test_closures_capture_their_frame(interp):
    code = """
    (define (adder n) (lambda (x) (+ x n)))
    (define add2 (adder 2))
    (add2 5)
    """
    assert interp.eval(code) == 7


def test_parameters_shadow_globals(interp):
    assert interp.eval("(defvar x 100) (define (f x) x) (f 1)") == 1
    assert interp.eval("(progn x)") == 100


def test_function_arity(interp):
    interp.eval("(define (f a) a)")
    with pytest.raises(ArityError) as exc:
        interp.eval("(f 1 2)")
    assert str(exc.value) == "F expected 1 args, got 2"


def test_macro_receives_unevaluated_arguments(interp):
    result = interp.eval("(defmacro (my-quote x) x) (my-quote (a b))")
    assert to_source(result) == "(A B)"


def test_macro_evaluates_in_caller_scope(interp):
    code = """
    (defmacro (unless c body) (if (eval c) nil (eval body)))
    (define (check n) (unless (= n 0) (+ n 1)))
    (check 4)
    """
    assert interp.eval(code) == 5
    assert interp.eval("(check 0)") == Nil


def test_recursion(interp):
    code = """
    (define (fact n) (if (< n 2) 1 (* n (fact (- n 1)))))
    (fact 10)
    """
    assert interp.eval(code) == 3628800


# -----------------------------------------------------
# Special forms and core builtins
# -----------------------------------------------------

def test_quote(interp):
    assert isinstance(interp.eval("(quote x)"), Symbol)
    result = interp.eval("(progn '(1 2))")
    assert isinstance(result, ConsList)
    assert list(result) == [1, 2]


def test_eval_form(interp):
    assert interp.eval("(eval '(+ 1 2))") == 3


@pytest.mark.parametrize(
    "code, expected",
    [
        ("(if true 1 2)", 1),
        ("(if false 1 2)", 2),
        ("(if nil 1 2)", 2),
        ("(if () 1 2)", 2),
        ('(if "" 1 2)', 2),
        ("(if 0 1 2)", 1),
        ("(if false 1)", Nil),
    ]
)
def test_if_truthiness(interp, code, expected):
    assert interp.eval(code) == expected


@pytest.mark.parametrize(
    "code, expected",
    [
        ("(+ 1 2 3)", 6),
        ("(+)", 0),
        ("(- 10 3 2)", 5),
        ("(- 4)", -4),
        ("(* 2 3 4)", 24),
        ("(/ 20 3)", 6),
        ("(= 1 1 1)", True),
        ('(= "a" "b")', False),
        ("(< 1 2 3)", True),
        ("(> 3 2 2)", False),
        ("(not nil)", True),
        ("(length '(1 2 3))", 3),
        ('(length "four")', 4),
        ("(car '(1 2))", 1),
        ("(head ())", Nil),
        ("(car (cdr '(1 2)))", 2),
        ('(concat "a" 1 "b")', "a1b"),
    ]
)
def test_core_builtins(interp, code, expected):
    assert interp.eval(code) == expected


def test_cons_and_list(interp):
    assert to_source(interp.eval("(cons 1 (list 2 3))")) == "(1 2 3)"
    assert to_source(interp.eval("(cons 1 nil)")) == "(1)"


@pytest.mark.parametrize(
    "code, expected",
    [
        ("(= 'a 'a)", True),
        ("(= 'a 'A)", True),
        ("(= 'a 'b)", False),
        ("(= 'a \"a\")", False),
        ("(defvar x 'foo) (= x 'foo)", True),
    ]
)
def test_symbols_compare_by_name(interp, code, expected):
    assert interp.eval(code) is expected


def test_division_by_zero(interp):
    with pytest.raises(EvalArithmeticError):
        interp.eval("(/ 1 0)")


def test_arithmetic_type_error(interp):
    with pytest.raises(ArgumentTypeError, match=r"\+ expected numbers, got String"):
        interp.eval('(+ 1 "2")')


def test_print(interp, capsys):
    interp.eval('(print "hello" 42)')
    assert capsys.readouterr().out == "hello 42\n"


def test_symbol_properties(interp):
    interp.eval("(setp 'tool 'color \"red\")")
    assert interp.eval("(getp 'tool 'color)") == "red"
    assert interp.eval("(getp 'tool 'size)") == Nil


def test_interactive_flag(interp, shell):
    assert interp.eval("(interactive)") is False
    assert shell.eval("(interactive)") is True


# -----------------------------------------------------
# Evaluation errors
# -----------------------------------------------------

def test_undefined_function_without_command_fallback(interp):
    interp.vm.cmd_not_found = None
    with pytest.raises(UndefinedFunction) as exc:
        interp.eval("(nothing-here 1)")
    assert str(exc.value) == "Undefined function NOTHING-HERE"


def test_non_symbol_head(interp):
    with pytest.raises(NonSymbolHead, match="Cannot evaluate non-symbol object"):
        interp.eval("(1 2)")


def test_error_in_function_restores_scope(interp):
    interp.eval("(define (bad x) (/ x 0))")
    with pytest.raises(EvalArithmeticError):
        interp.eval("(bad 1)")
    assert interp.vm.scope is interp.vm.env
    assert interp.eval("(progn x)") == "x"


def test_runaway_recursion_is_an_evaluation_error(interp):
    with pytest.raises(LishEvalError, match="maximum recursion depth exceeded"):
        interp.eval("(define (f) (f)) (f)")
    assert interp.vm.scope is interp.vm.env
    assert interp.eval("(+ 1 1)") == 2
