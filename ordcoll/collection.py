"""Insertion-ordered collection with mixed integer and string keys"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import cmp_to_key
from types import MappingProxyType
from typing import (
    Any,
    Callable,
    Dict,
    Generator,
    Iterable,
    List,
    Optional,
    Tuple,
    Union,
    override,
)

from ordcoll.common import (
    MISSING,
    Iterating,
    Key,
    KeyNotFound,
    Missing,
    Sized,
    check_key,
    compare_key,
    is_key,
    strict_equal,
)
from ordcoll.cursor import Cursor
from ordcoll.order import SortOrder
from ordcoll.pattern import PatternLike, find_all
from ordcoll.shape import Structure, field_of, record_of

__all__ = ["Collection"]

type SortOrderLike = Union[SortOrder, str]

_SORT_KEY = cmp_to_key(compare_key)


class Collection[V](Sized, Iterating[Tuple[Key, V]], Structure):
    """An ordered sequence of key/value entries usable as a list or a dict.

    Entries keep insertion order. Keys are ints or strs and are unique;
    writing an existing key replaces its value without moving it. Adding a
    value without a key appends it under the next automatic integer key, one
    past the largest non-negative integer key held so far.

    Mutators (add, remove, clear, fill) change the collection in place and
    return it for chaining. Transforms (map, filter, match) and the sort
    family return new collections.

    Example:
        >>> c = Collection(["b", "a"]).add("c").add("z", "last")
        >>> c.to_array()
        {0: 'b', 1: 'a', 2: 'c', 'last': 'z'}
        >>> c.sort().to_array()
        {1: 'a', 0: 'b', 2: 'c', 'last': 'z'}
    """

    def __init__(
        self, values: Union[Mapping[Key, V], Iterable[V], None] = None
    ) -> None:
        """Create a collection.

        Args:
            values: A mapping of keys to values, another Collection, or a
                plain iterable of values placed at keys 0, 1, 2, ...
        """
        self._entries: Dict[Key, V] = {}
        self._next_key = 0
        self._cursor: Optional[Cursor] = None
        if values is None:
            return
        if isinstance(values, Collection):
            for key, value in values.items():
                self.add(value, key)
        elif isinstance(values, Mapping):
            for key, value in values.items():
                self.add(value, key)
        else:
            for value in values:
                self.add(value)

    @staticmethod
    def empty() -> Collection[Any]:
        """Create an empty collection."""
        return Collection()

    @staticmethod
    def mk[W](pairs: Iterable[Tuple[Key, W]]) -> Collection[W]:
        """Create a collection from (key, value) pairs.

        Later pairs overwrite earlier pairs with the same key, keeping the
        position of the first occurrence.

        Args:
            pairs: Iterable of (key, value) tuples.

        Returns:
            A collection holding the pairs in order.
        """
        coll: Collection[W] = Collection()
        for key, value in pairs:
            coll.add(value, key)
        return coll

    # ------------------------------------------------------------ mutation

    def _track(self, key: Key) -> None:
        if isinstance(key, int) and key >= self._next_key:
            self._next_key = key + 1

    def add(self, value: V, key: Optional[Key] = None) -> Collection[V]:
        """Insert or overwrite an entry.

        Without a key the value is appended under the next automatic integer
        key. With a key the entry at that key is overwritten in place, or
        appended as the newest entry if the key is new.

        Args:
            value: The value to store.
            key: Optional int or str key.

        Returns:
            This collection.

        Raises:
            TypeError: If the key is neither an int nor a str.
        """
        if key is None:
            key = self._next_key
        else:
            check_key(key)
        self._entries[key] = value
        self._track(key)
        return self

    def remove(self, *keys: Key) -> Collection[V]:
        """Delete entries by key, ignoring keys that are not present.

        Removing keys never lowers the automatic key counter.

        Returns:
            This collection.
        """
        for key in keys:
            if is_key(key):
                self._entries.pop(key, None)
        return self

    def clear(self) -> Collection[V]:
        """Remove every entry and restart automatic keys at 0.

        Returns:
            This collection.
        """
        logging.debug("Clearing collection of %d entries", len(self._entries))
        self._entries = {}
        self._next_key = 0
        return self

    def get(self, key: Key, default: Union[V, Missing] = MISSING) -> V:
        """Get the value stored at a key.

        Args:
            key: The key to look up.
            default: Value to return if the key is absent. If not provided,
                an absent key raises KeyNotFound.

        Returns:
            The stored value, or default.

        Raises:
            KeyNotFound: If the key is absent and no default is provided.
        """
        if is_key(key) and key in self._entries:
            return self._entries[key]
        if isinstance(default, Missing):
            raise KeyNotFound(key)
        return default

    def count(self) -> int:
        """Get the number of entries."""
        return len(self._entries)

    @override
    def size(self) -> int:
        return len(self._entries)

    # ---------------------------------------------------------- transforms

    def map[W](self, fn: Callable[[V], W]) -> Collection[W]:
        """Transform every value, keeping keys and order.

        Args:
            fn: Function applied to each value. It does not see the key.

        Returns:
            A new collection with the same keys holding fn(value).
        """
        return Collection.mk((key, fn(value)) for key, value in self._entries.items())

    def filter(self, pred: Callable[[V], bool]) -> Collection[V]:
        """Keep the entries whose value satisfies a predicate.

        Keys are kept as they are, not renumbered.

        Args:
            pred: Predicate applied to each value.

        Returns:
            A new collection of the matching entries in their original order.
        """
        return Collection.mk(
            (key, value) for key, value in self._entries.items() if pred(value)
        )

    def fill(self, start: int, count: int, value: V) -> Collection[V]:
        """Replace the whole collection with a run of one value.

        The run holds count entries at consecutive keys from start. A negative
        start holds a single entry at that key, and the remaining count - 1
        entries continue from key 0.

        Args:
            start: First key of the run.
            count: Number of entries to place.
            value: The value stored at every key.

        Returns:
            This collection.

        Raises:
            TypeError: If start or count is not an int.
        """
        for arg in (start, count):
            if not isinstance(arg, int) or isinstance(arg, bool):
                raise TypeError(f"fill expects int arguments, not {type(arg).__name__}")
        entries: Dict[Key, V] = {}
        if start < 0:
            logging.debug("Filling key %d before the run from 0", start)
            entries[start] = value
            start = 0
            count -= 1
        for key in range(start, start + count):
            entries[key] = value
        self._entries = entries
        self._next_key = start + count if count > 0 else 0
        return self

    # -------------------------------------------------- membership & search

    def is_key_exist(self, key: Any) -> bool:
        """Check whether a key is present. Never raises."""
        return is_key(key) and key in self._entries

    def is_value_exist(self, value: Any) -> bool:
        """Check whether a value is present, comparing without coercion."""
        return any(strict_equal(item, value) for item in self._entries.values())

    def contains(self, value: Any) -> bool:
        """Check whether a value is present, comparing without coercion."""
        for item in self._entries.values():
            if strict_equal(item, value):
                return True
        return False

    def get_first_element(
        self, pred: Optional[Callable[[V], bool]] = None, default: Any = None
    ) -> Optional[V]:
        """Get the first value, or the first value satisfying a predicate.

        Args:
            pred: Optional predicate applied to values in order.
            default: Returned when the collection is empty or nothing matches.

        Returns:
            The first (matching) value, or default.
        """
        for value in self._entries.values():
            if pred is None or pred(value):
                return value
        return default

    def get_last_element(self, default: Any = None) -> Optional[V]:
        """Get the value in the last position, or default when empty."""
        return next(reversed(self._entries.values()), default)

    @staticmethod
    def match(pattern: PatternLike, text: str) -> Collection[str]:
        """Collect every substring of text matched by pattern.

        Only full matches are kept; capture groups are discarded.

        Args:
            pattern: A regular expression, compiled pattern, or delimited
                pattern such as "/[0-9]+/".
            text: The text to search.

        Returns:
            A new collection of the matches at keys 0, 1, 2, ...

        Example:
            >>> Collection.match("/[0-9]+/", "a12 b3").to_array()
            {0: '12', 1: '3'}
        """
        return Collection(find_all(pattern, text))

    # -------------------------------------------------------------- sorting

    def _reorder(
        self, keyed: List[Tuple[Key, Any]], order: SortOrder
    ) -> Collection[V]:
        # keyed holds (entry key, sort key) pairs in current order
        ranked = sorted(
            keyed, key=lambda pair: _SORT_KEY(pair[1]), reverse=order.descending
        )
        return Collection.mk((key, self._entries[key]) for key, _ in ranked)

    def _log_excluded(self, method: str, kept: int) -> None:
        excluded = len(self._entries) - kept
        if excluded > 0:
            logging.debug(
                "%s excluded %d of %d entries", method, excluded, len(self._entries)
            )

    def sort(self, order: SortOrderLike = SortOrder.ASC) -> Collection[V]:
        """Sort entries by value, keeping each value at its key.

        The sort is stable in both directions: entries with equal values keep
        their relative order.

        Args:
            order: SortOrder.ASC or SortOrder.DESC, or "asc" / "desc".

        Returns:
            A new collection with the same entries in sorted order.

        Raises:
            InvalidSortOrder: If order is not a recognized sort order.
            TypeError: If two values cannot be compared.
        """
        resolved = SortOrder.coerce(order)
        return self._reorder(list(self._entries.items()), resolved)

    def sort_by(
        self, extractor: Callable[[Any], Any], order: SortOrderLike = SortOrder.ASC
    ) -> Collection[V]:
        """Sort structured record values by an extracted sort key.

        Only entries holding an object take part: structured records and
        nested collections. Scalars and plain dicts, lists and tuples are left
        out of the result.

        Args:
            extractor: Function computing the sort key of a record.
            order: SortOrder.ASC or SortOrder.DESC, or "asc" / "desc".

        Returns:
            A new collection of the record entries in sorted order, holding
            the original values at their original keys.

        Raises:
            InvalidSortOrder: If order is not a recognized sort order.
        """
        resolved = SortOrder.coerce(order)
        keyed: List[Tuple[Key, Any]] = []
        for key, value in self._entries.items():
            record = record_of(value)
            if record is not None:
                keyed.append((key, extractor(record.value)))
        self._log_excluded("sort_by", len(keyed))
        return self._reorder(keyed, resolved)

    def sort_by_field(
        self, field: Any, order: SortOrderLike = SortOrder.ASC
    ) -> Collection[V]:
        """Sort entries by a field of their nested structures.

        Nested values (mappings, lists, tuples, collections) are ranked by
        their value at field; nested values without that field are left out
        of the result. Any other value is ranked by itself.

        Args:
            field: Field name or index inside nested values.
            order: SortOrder.ASC or SortOrder.DESC, or "asc" / "desc".

        Returns:
            A new collection holding the original values at their original
            keys, in sorted order.

        Raises:
            InvalidSortOrder: If order is not a recognized sort order.
        """
        resolved = SortOrder.coerce(order)
        keyed: List[Tuple[Key, Any]] = []
        for key, value in self._entries.items():
            sort_key = field_of(value, field)
            if not isinstance(sort_key, Missing):
                keyed.append((key, sort_key))
        self._log_excluded("sort_by_field", len(keyed))
        return self._reorder(keyed, resolved)

    # ------------------------------------------------ conversion & iteration

    def to_array(self) -> Dict[Key, V]:
        """Copy the entries into a dict, in order."""
        return dict(self._entries)

    @override
    def fields(self) -> Mapping[Key, V]:
        return MappingProxyType(self._entries)

    def render(self) -> str:
        """Render the entries one per line as key => value, inside braces."""
        lines = ["{"]
        lines.extend(f"\t{key} => {value}" for key, value in self._entries.items())
        lines.append("}")
        return "\n".join(lines)

    @override
    def iter(self) -> Generator[Tuple[Key, V]]:
        """Iterate over (key, value) pairs in order."""
        yield from self._entries.items()

    def keys(self) -> Generator[Key]:
        yield from self._entries.keys()

    def values(self) -> Generator[V]:
        yield from self._entries.values()

    def items(self) -> Generator[Tuple[Key, V]]:
        yield from self._entries.items()

    def cursor(self) -> Cursor:
        """Create an independent cursor over a snapshot of the entries."""
        return Cursor(self._entries.items())

    def _active_cursor(self) -> Cursor:
        if self._cursor is None:
            self._cursor = self.cursor()
        return self._cursor

    def rewind(self) -> None:
        """Restart the built-in cursor at the first entry.

        The cursor sees the entries as they are now; later mutations are not
        reflected until the next rewind.
        """
        self._cursor = self.cursor()

    def valid(self) -> bool:
        return self._active_cursor().valid()

    def current(self) -> V:
        return self._active_cursor().current()

    def key(self) -> Key:
        return self._active_cursor().key()

    def advance(self) -> None:
        self._active_cursor().advance()

    # ------------------------------------------------------------- dunders

    def __contains__(self, key: Any) -> bool:
        return self.is_key_exist(key)

    def __getitem__(self, key: Key) -> V:
        return self.get(key)

    def __setitem__(self, key: Key, value: V) -> None:
        self.add(value, key)

    def __delitem__(self, key: Key) -> None:
        self.remove(key)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Collection):
            return list(self._entries.items()) == list(other._entries.items())
        else:
            return False

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Collection({self._entries!r})"
