import pytest
from hypothesis import given, strategies as st

from lish.types.cons_list import EMPTY, ConsList

items = st.lists(st.integers() | st.text(max_size=4), max_size=20)


@given(items)
def test_from_iterable_keeps_order(xs):
    lst = ConsList.from_iterable(xs)
    assert list(lst) == xs
    assert len(lst) == len(xs)
    assert lst.is_empty() == (not xs)


@given(items, st.integers())
def test_cons_shares_tail_and_leaves_original_alone(xs, x):
    lst = ConsList.from_iterable(xs)
    before = list(lst)
    longer = lst.cons(x)
    assert longer.head() == x
    assert longer.tail() is lst
    assert len(longer) == len(lst) + 1
    assert list(lst) == before


@given(items)
def test_indexing_matches_list(xs):
    lst = ConsList.from_iterable(xs)
    for i, x in enumerate(xs):
        assert lst[i] == x
        assert lst[-(i + 1)] == xs[-(i + 1)]


def test_empty_list():
    assert EMPTY.is_empty()
    assert EMPTY.head() is None
    assert EMPTY.tail() is EMPTY
    assert len(EMPTY) == 0
    assert not EMPTY
    with pytest.raises(IndexError):
        EMPTY[0]


def test_structural_equality():
    a = ConsList.from_iterable([1, ConsList.from_iterable(["x"])])
    b = ConsList.from_iterable([1, ConsList.from_iterable(["x"])])
    assert a == b
    assert a != ConsList.from_iterable([1])
    assert ConsList() == EMPTY


def test_not_hashable():
    with pytest.raises(TypeError):
        hash(EMPTY)


def test_repr_is_source_form():
    assert repr(ConsList.from_iterable([1, "a", ConsList()])) == '(1 "a" ())'
