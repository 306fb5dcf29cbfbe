from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Union

from lish import LispValue
from lish.config import SHELL_FILENAME
from lish.errors import LishError, LishParseError
from lish.evaluation.vm import VM
from lish.evaluation.special_forms import register as register_special_forms
from lish.builtin.core_builtin import register as register_core
from lish.builtin.shell_builtin import LAST_STATUS, register as register_shell
from lish.reader.parser import compile_file, compile_string
from lish.types.nil import Nil
from lish.types.symbol import Symbol

logger = logging.getLogger(__name__)

SCRIPT_PATH = "curr-script-path"


def describe_error(err: LishError) -> str:
    """User-facing report for an error that reached the top level."""
    if isinstance(err, LishParseError):
        return str(err)
    if err.filename and err.filename != SHELL_FILENAME:
        return f"Error: {err.filename}: {err}"
    return f"Error: {err}"


class Interpreter:
    """
    Sets up a VM with the special forms, core and shell builtins, and the
    predefined variables, then evaluates source text, single shell lines or
    whole files against it. Bindings persist across calls.
    """

    def __init__(self, interactive: bool = False, environ: Optional[Mapping[str, str]] = None):
        self.vm = VM(interactive=interactive)
        register_special_forms(self.vm)
        register_core(self.vm)
        register_shell(self.vm)

        self.vm.add_symbol(Symbol.with_value("nil", Nil))
        self.vm.add_symbol(Symbol.with_value("true", True))
        self.vm.add_symbol(Symbol.with_value("false", False))
        self.vm.add_symbol(Symbol.with_value(LAST_STATUS.lower(), 0))

        environ = os.environ if environ is None else environ
        for key, value in environ.items():
            if self.vm.env.contains(key):
                # keep the builtin in the function slot (e.g. PWD and pwd)
                self.vm.get_global(key).value = value
            else:
                self.vm.add_symbol(Symbol.with_value(key, value))

    def eval(self, code: str, filename: str = "<string>") -> LispValue:
        return self.vm.run(compile_string(code, filename))

    def eval_line(self, line: str) -> LispValue:
        """Evaluate one interactive line; a bare command line gets wrapped in parens."""
        if not line.lstrip().startswith("("):
            line = f"({line})"
        return self.eval(line, SHELL_FILENAME)

    def source(self, path: Union[str, Path]) -> LispValue:
        """Evaluate every form of a file, with the file on the VM's file stack."""
        program = compile_file(path)
        abs_path = os.path.abspath(path)
        self.vm.add_filename(abs_path)
        try:
            return self.vm.run(program)
        finally:
            self.vm.pop_filename()

    def run_file(self, path: Union[str, Path]) -> LispValue:
        """Run a script, binding CURR-SCRIPT-PATH to its absolute path."""
        self.vm.add_symbol(Symbol.with_value(SCRIPT_PATH, os.path.abspath(path)))
        return self.source(path)
