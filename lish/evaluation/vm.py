"""Tree-walking evaluator for lish.

The VM owns the global Environment for its whole lifetime and tracks the
frame currently being evaluated in ``scope``. Callables live in the function
slot of Symbol cells: user Functions first, then native Builtins, and when
neither is bound the list is handed to the command-not-found callable, which
runs the head as an external program.

Two flags shape the shell builtins: ``interactive`` (children inherit the
terminal) and ``defining`` (set while ``define`` evaluates, forcing output
capture). ``is_interactive`` combines them.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from lish import BuiltinFn, LispValue, SExpression
from lish.errors import LishError, LishEvalError, NonSymbolHead, UndefinedFunction
from lish.evaluation.apply import apply_function
from lish.types.cons_list import ConsList
from lish.types.environment import Environment
from lish.types.function import Builtin, Function
from lish.types.nil import Nil
from lish.types.symbol import Symbol

logger = logging.getLogger(__name__)


class VM:
    def __init__(self, interactive: bool = False):
        self.env: Environment = Environment()
        self.scope: Environment = self.env
        self.interactive: bool = interactive
        self.defining: bool = False
        self.files: list[str] = []
        self.cmd_not_found: Optional[Callable[[VM, ConsList], LispValue]] = None

    # --- setup ---
    def add_symbol(self, sym: Symbol) -> None:
        """Bind ``sym`` in the global frame."""
        self.env.set_symbol(sym)

    def add_builtin(self, name: str, fn: BuiltinFn) -> None:
        self.add_symbol(Symbol.with_builtin(name, fn))

    def set_cmd_not_found(self, fn: Callable[[VM, ConsList], LispValue]) -> None:
        self.cmd_not_found = fn

    def get_global(self, name: str) -> Symbol:
        return self.env.get_symbol(name)

    def is_interactive(self) -> bool:
        return self.interactive and not self.defining

    # --- file context ---
    def add_filename(self, filename: str) -> None:
        logger.debug("entering %s", filename)
        self.files.append(str(filename))

    def pop_filename(self) -> Optional[str]:
        return self.files.pop() if self.files else None

    @property
    def current_file(self) -> Optional[str]:
        return self.files[-1] if self.files else None

    # --- evaluation ---
    def run(self, program: ConsList) -> LispValue:
        """Evaluate each top-level form in order; return the last value."""
        result: LispValue = Nil
        try:
            for form in program:
                result = self.eval(form)
        except LishError as err:
            if err.filename is None:
                err.filename = self.current_file
            raise
        except RecursionError as err:
            error = LishEvalError("maximum recursion depth exceeded")
            error.filename = self.current_file
            raise error from err
        finally:
            self.scope = self.env
        return result

    def eval(self, node: SExpression) -> LispValue:
        if isinstance(node, Symbol):
            sym = self.scope.get_symbol(node.name)
            return sym.value if sym.value is not None else node.spelling
        if isinstance(node, ConsList):
            return self.eval_list(node)
        return node

    def eval_body(self, body: ConsList, frame: Environment) -> LispValue:
        saved = self.scope
        self.scope = frame
        try:
            result: LispValue = Nil
            for form in body:
                result = self.eval(form)
            return result
        finally:
            self.scope = saved

    def eval_list(self, form: ConsList) -> LispValue:
        if form.is_empty():
            return Nil
        head = form.head()
        args = form.tail()

        if isinstance(head, ConsList):
            head = self.eval(head)
        if isinstance(head, Function):
            return apply_function(self, head, args)
        if not isinstance(head, Symbol):
            raise NonSymbolHead(head)

        sym = self.scope.get_symbol(head.name)
        fn = sym.function
        if isinstance(fn, Function):
            return apply_function(self, fn, args)
        if isinstance(fn, Builtin):
            return fn(self, args)
        if isinstance(sym.value, Function):
            return apply_function(self, sym.value, args)
        if self.cmd_not_found is not None:
            return self.cmd_not_found(self, args.cons(head.name.lower()))
        raise UndefinedFunction(sym.name)
