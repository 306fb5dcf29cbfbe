"""Shell builtins: the bridge between interpreter values and the OS.

Every builtin validates its argument count (and, where it can, argument
types) before doing anything with side effects.
"""
from __future__ import annotations

import logging
import os
import sys

from lish import LispValue
from lish.config import DEFAULT_PROMPT
from lish.errors import ArgumentTypeError, LishEvalError
from lish.evaluation.args import check_args
from lish.builtin import glob_walk, process
from lish.printer import to_str, type_name
from lish.types.cons_list import ConsList
from lish.types.nil import Nil
from lish.types.symbol import Symbol

logger = logging.getLogger(__name__)

LAST_STATUS = "LAST-STATUS"


def set_last_status(vm, status: int) -> None:
    if vm.env.contains(LAST_STATUS):
        vm.get_global(LAST_STATUS).value = status
    else:
        vm.add_symbol(Symbol.with_value(LAST_STATUS.lower(), status))


def _resolve(vm, value: LispValue) -> LispValue:
    """A symbol stands for the value of its binding in the current scope."""
    if isinstance(value, Symbol):
        return vm.scope.get_symbol(value.name).value
    return value


def _string_arg(vm, name: str, value: LispValue) -> str:
    """Accept a string, or a symbol whose value is a string."""
    value = _resolve(vm, value)
    if not isinstance(value, str):
        raise ArgumentTypeError(name, "a string", f"{name} expected a string")
    return value


def _symbol_arg(name: str, value: LispValue) -> Symbol:
    if not isinstance(value, Symbol):
        raise ArgumentTypeError(name, "a symbol",
                                f"{name} requires a Symbol as the first argument")
    return value


# -------------------------------
# Working directory and process exit
# -------------------------------
def shell_pwd(vm, args: ConsList) -> str:
    check_args("pwd", args, "==", 0)
    return os.getcwd()


def shell_cd(vm, args: ConsList) -> LispValue:
    (expr,) = check_args("cd", args, "==", 1)
    target = os.path.expanduser(_string_arg(vm, "cd", vm.eval(expr)))
    if not os.path.isabs(target):
        target = os.path.join(os.getcwd(), target)
    target = os.path.normpath(target)
    try:
        os.chdir(target)
    except OSError as err:
        raise LishEvalError(f"cd: {err.strerror}: {target}") from err
    logger.debug("changed directory to %s", target)
    return Nil


def shell_exit(vm, args: ConsList) -> LispValue:
    """(exit [status]): terminate the process. Statuses outside 0..255 become 255."""
    items = check_args("exit", args, "<=", 1)
    status = 0
    if items:
        value = vm.eval(items[0])
        if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 255:
            status = value
        else:
            status = process.STATUS_FAILED
    logger.debug("exiting with %d", status)
    sys.exit(status)


# -------------------------------
# Running programs
# -------------------------------
def shell_call(vm, args: ConsList) -> LispValue:
    """(call program args...): run a program.

    Interactive: inherit the terminal, record LAST-STATUS, return nil.
    Otherwise: return the captured {:stdout :stderr :status} map.
    """
    items = check_args("call", args, ">=", 1)
    command = to_str(vm.eval(items[0]))
    argv = [command] + [to_str(vm.eval(arg)) for arg in items[1:]]

    if not vm.is_interactive():
        result = process.run_captured(argv)
        set_last_status(vm, result[":status"])
        return result

    try:
        status = process.run_inherited(argv)
    except LishEvalError:
        set_last_status(vm, process.STATUS_FAILED)
        raise
    set_last_status(vm, status)
    return Nil


def shell_captured_call(vm, args: ConsList) -> LispValue:
    """(capc program args...): call with output captured, whatever the mode."""
    was_interactive = vm.interactive
    vm.interactive = False
    try:
        return shell_call(vm, args)
    finally:
        vm.interactive = was_interactive


def shell_pipe(vm, args: ConsList) -> LispValue:
    """(pipe (cmd args...) (cmd args...) ...): connect stages stdout to stdin."""
    items = check_args("pipe", args, ">=", 1)
    for stage in items:
        if isinstance(stage, ConsList) and stage.is_empty():
            raise ArgumentTypeError("pipe", "non-empty lists", "pipe stages must be non-empty lists")
        if not isinstance(stage, ConsList):
            raise ArgumentTypeError("pipe", "lists",
                                    f"pipe args must be lists, got {type_name(stage)}")
    stages = [[to_str(vm.eval(part)) for part in stage] for stage in items]

    if not vm.is_interactive():
        result = process.run_pipeline(stages, capture=True)
        set_last_status(vm, result[":status"])
        return result

    try:
        status = process.run_pipeline(stages, capture=False)
    except LishEvalError:
        set_last_status(vm, process.STATUS_FAILED)
        raise
    set_last_status(vm, status)
    return Nil


# -------------------------------
# Process environment
# -------------------------------
def shell_export(vm, args: ConsList) -> LispValue:
    """(export 'NAME): copy NAME's bound value into the process environment."""
    (expr,) = check_args("export", args, "==", 1)
    sym = _symbol_arg("export", vm.eval(expr))
    real = vm.scope.get_symbol(sym.name)
    value = to_str(real.value_or_name())
    os.environ[sym.name] = value
    logger.debug("export %s=%r", sym.name, value)
    return Nil


def shell_unexport(vm, args: ConsList) -> LispValue:
    (expr,) = check_args("unexport", args, "==", 1)
    sym = _symbol_arg("unexport", vm.eval(expr))
    os.environ.pop(sym.name, None)
    logger.debug("unexport %s", sym.name)
    return Nil


# -------------------------------
# Paths and prompt
# -------------------------------
def shell_glob(vm, args: ConsList) -> ConsList:
    """(glob pattern [max-depth]): list of matching paths (depth defaults to 1)."""
    items = check_args("glob", args, ">=", 1)
    check_args("glob", args, "<=", 2)
    pattern = os.path.expanduser(_string_arg(vm, "glob", vm.eval(items[0])))
    max_depth = 1
    if len(items) > 1:
        depth = _resolve(vm, vm.eval(items[1]))
        if isinstance(depth, int) and not isinstance(depth, bool):
            max_depth = depth
    return ConsList.from_iterable(glob_walk.walk(pattern, max_depth))


def shell_default_prompt(vm, args: ConsList) -> str:
    check_args("prompt", args, "<=", 1)
    return DEFAULT_PROMPT


# -------------------------------
# Registration
# -------------------------------
SHELL_BUILTINS = {
    "exit": shell_exit,
    "pwd": shell_pwd,
    "cd": shell_cd,
    "capc": shell_captured_call,
    "call": shell_call,
    "pipe": shell_pipe,
    "|": shell_pipe,
    "export": shell_export,
    "unexport": shell_unexport,
    "prompt": shell_default_prompt,
    "glob": shell_glob,
}


def register(vm) -> None:
    for name, fn in SHELL_BUILTINS.items():
        vm.add_builtin(name, fn)
    vm.set_cmd_not_found(shell_call)
