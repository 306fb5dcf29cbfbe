# Core type aliases for lish's data model.
# Runtime values are plain Python objects: int for numbers, str for strings,
# ConsList for lists, Symbol cells, Function callables, dict for captured
# process results and the Nil singleton for the empty value. The same
# objects represent program structure, so the parser emits them directly.
#
# Naming guidance:
# - SExpression: use in reader/parser code to denote syntactic forms.
# - LispValue:  use in evaluator/runtime code to denote evaluated values.

from typing import Any, Callable

__version__ = "0.1.0"

# Runtime value alias
LispValue = Any
SExpression = LispValue

# Native callable: receives the VM and the unevaluated argument ConsList
BuiltinFn = Callable[..., LispValue]
