"""Persistent singly linked list with structural sharing.

A ConsList is immutable once built: ``cons`` returns a new list whose tail
*is* the receiver, so every list ever built stays valid and unchanged.
``head``/``tail``/``cons`` are O(1); ``len`` is O(1) because each cell
caches the length of the list it starts.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Optional


class ConsList:
    __slots__ = ("_head", "_tail", "_len")

    def __init__(self, head: Any = None, tail: Optional[ConsList] = None):
        # ConsList() is the empty list; ConsList(x, rest) a new front cell.
        self._head = head
        self._tail = tail
        self._len = 0 if tail is None else tail._len + 1

    @classmethod
    def from_iterable(cls, items: Iterable[Any]) -> ConsList:
        """Build a list whose forward order matches ``items``."""
        result = EMPTY
        for item in reversed(list(items)):
            result = result.cons(item)
        return result

    def cons(self, item: Any) -> ConsList:
        """Return a new list with ``item`` in front, sharing this list as its tail."""
        return ConsList(item, self)

    def is_empty(self) -> bool:
        return self._tail is None

    def head(self) -> Any:
        """First element, or None for the empty list."""
        return self._head

    def tail(self) -> ConsList:
        """Everything after the first element; the tail of empty is empty."""
        return self._tail if self._tail is not None else self

    def __iter__(self) -> Iterator[Any]:
        node = self
        while node._tail is not None:
            yield node._head
            node = node._tail

    def __len__(self) -> int:
        return self._len

    def __bool__(self) -> bool:
        return self._tail is not None

    def __getitem__(self, index: int) -> Any:
        if index < 0:
            index += self._len
        if not 0 <= index < self._len:
            raise IndexError("ConsList index out of range")
        node = self
        for _ in range(index):
            node = node._tail
        return node._head

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConsList):
            return NotImplemented
        if self is other:
            return True
        if self._len != other._len:
            return False
        return all(a == b for a, b in zip(self, other))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        from lish.printer import to_source
        return to_source(self)


EMPTY = ConsList()
