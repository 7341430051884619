"""Tests for external iteration: the built-in protocol and snapshot cursors"""

from typing import Any, List, Tuple

import pytest

from ordcoll.collection import Collection
from ordcoll.common import Key
from ordcoll.cursor import Cursor


def walk(source: Any) -> List[Tuple[Key, Any]]:
    seen = []
    source.rewind()
    while source.valid():
        seen.append((source.key(), source.current()))
        source.advance()
    return seen


def test_empty_cursor():
    cursor = Cursor([])
    assert cursor.null()
    assert not cursor.valid()
    with pytest.raises(IndexError):
        cursor.current()
    with pytest.raises(IndexError):
        cursor.key()
    assert list(cursor) == []


def test_cursor_visits_every_entry_once():
    cursor = Cursor([(0, "a"), ("x", "b"), (5, "c")])
    assert cursor.size() == 3
    assert walk(cursor) == [(0, "a"), ("x", "b"), (5, "c")]
    assert not cursor.valid()

    # Advancing past the end stays past the end
    cursor.advance()
    assert cursor.position == 3

    # Rewinding restarts the walk
    assert walk(cursor) == [(0, "a"), ("x", "b"), (5, "c")]


def test_cursor_as_python_iterator():
    cursor = Cursor([(1, "one"), (2, "two")])
    assert next(cursor) == (1, "one")
    assert list(cursor) == [(2, "two")]
    cursor.rewind()
    assert dict(cursor) == {1: "one", 2: "two"}


def test_collection_protocol():
    """The built-in protocol walks entries in current order."""
    coll = Collection({"b": 2, "a": 1}).add(3)
    assert walk(coll) == [("b", 2), ("a", 1), (0, 3)]

    sorted_coll = coll.sort()
    assert walk(sorted_coll) == [("a", 1), ("b", 2), (0, 3)]


def test_collection_protocol_without_rewind():
    """The first use of the protocol starts at the first entry."""
    coll = Collection(["x", "y"])
    assert coll.valid()
    assert coll.key() == 0
    assert coll.current() == "x"
    coll.advance()
    assert coll.current() == "y"
    coll.advance()
    assert not coll.valid()
    with pytest.raises(IndexError):
        coll.current()


def test_collection_protocol_sees_order_at_rewind():
    coll = Collection(["x", "y"])
    coll.rewind()
    coll.add("z")
    coll.remove(0)
    assert coll.key() == 0
    assert coll.current() == "x"

    coll.rewind()
    assert walk(coll) == [(1, "y"), (2, "z")]


def test_independent_cursors():
    """Cursors from the same collection do not share position or entries."""
    coll = Collection(["a", "b", "c"])
    first = coll.cursor()
    second = coll.cursor()
    first.advance()
    first.advance()
    assert first.current() == "c"
    assert second.current() == "a"

    coll.clear()
    assert second.size() == 3
    assert walk(second) == [(0, "a"), (1, "b"), (2, "c")]
    assert coll.cursor().null()


def test_collection_protocol_starts_lazily():
    """The built-in cursor snapshots on first use when never rewound."""
    coll = Collection(["a"])
    coll.add("b")
    assert coll.key() == 0
    coll.add("c")
    coll.advance()
    assert coll.current() == "b"
    coll.advance()
    assert not coll.valid()

    coll.rewind()
    assert walk(coll) == [(0, "a"), (1, "b"), (2, "c")]
