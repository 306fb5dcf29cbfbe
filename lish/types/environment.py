"""Lexical scope frames.

An Environment maps normalized names to shared Symbol cells and links to an
optional parent frame. Lookup never fails: a name that is bound nowhere in
the chain yields a fresh, unbound Symbol.
"""

from __future__ import annotations

from typing import Optional

from lish.types.symbol import Symbol, normalize_name


class Environment:
    __slots__ = ("syms", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.syms: dict[str, Symbol] = {}
        self.outer: Environment | None = outer

    def set_symbol(self, sym: Symbol) -> None:
        """Insert or overwrite the binding for ``sym.name`` in this frame only."""
        self.syms[sym.name] = sym

    def get_symbol(self, name: str) -> Symbol:
        """Return the nearest binding for ``name``, or a fresh unbound Symbol."""
        key = normalize_name(name)
        env: Optional[Environment] = self
        while env is not None:
            sym = env.syms.get(key)
            if sym is not None:
                return sym
            env = env.outer
        return Symbol(name)

    def contains(self, name: str) -> bool:
        """True if ``name`` is bound in this frame (parents are not consulted)."""
        return normalize_name(name) in self.syms

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest frame in the chain that binds ``name``."""
        key = normalize_name(name)
        env: Optional[Environment] = self
        while env is not None:
            if key in env.syms:
                return env
            env = env.outer
        return None

