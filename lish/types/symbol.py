"""Symbol cells.

A Symbol is the mutable, identity-bearing storage behind a named binding.
Every environment, closure and syntax node that refers to the same binding
holds the *same* Symbol object, so mutating ``value`` through one handle is
visible through all of them. Symbols never compare equal by name; use
``name`` for that.
"""

from __future__ import annotations

from typing import Optional

from lish import LispValue


def normalize_name(name: str) -> str:
    return name.upper()


class Symbol:
    __slots__ = ("name", "spelling", "value", "function", "properties")

    def __init__(self, name: str, value: Optional[LispValue] = None, function=None):
        self.name: str = normalize_name(name)
        # Source spelling, used when the symbol is evaluated while unbound
        self.spelling: str = name
        self.value: Optional[LispValue] = value
        self.function = function
        self.properties: Optional[dict[str, LispValue]] = None

    @classmethod
    def with_value(cls, name: str, value: LispValue) -> Symbol:
        return cls(name, value=value)

    @classmethod
    def with_builtin(cls, name: str, fn) -> Symbol:
        from lish.types.function import Builtin
        return cls(name, function=Builtin(normalize_name(name), fn))

    def is_bound(self) -> bool:
        return self.value is not None

    def value_or_name(self) -> LispValue:
        """Bound value, or the symbol's own spelling when unbound."""
        return self.value if self.value is not None else self.spelling

    def get_property(self, key: str) -> Optional[LispValue]:
        if self.properties is None:
            return None
        return self.properties.get(normalize_name(key))

    def put_property(self, key: str, value: LispValue) -> None:
        if self.properties is None:
            self.properties = {}
        self.properties[normalize_name(key)] = value

    def __repr__(self):
        return f"Symbol({self.name!r})"

    def __str__(self):
        return self.name
