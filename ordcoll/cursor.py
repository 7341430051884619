"""Snapshot cursor for external iteration over a collection"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Tuple, override

from ordcoll.common import Key, Sized

__all__ = ["Cursor"]


class Cursor(Sized, Iterator[Tuple[Key, Any]]):
    """A restartable cursor over a snapshot of key/value entries.

    The entries are captured when the cursor is created, so mutating the
    source collection afterwards does not disturb an iteration in progress,
    and any number of cursors may walk the same collection at once.

    The cursor is also a Python iterator of (key, value) pairs, starting from
    its current position.
    """

    def __init__(self, entries: Iterable[Tuple[Key, Any]]) -> None:
        self._entries: Tuple[Tuple[Key, Any], ...] = tuple(entries)
        self._position = 0

    @override
    def size(self) -> int:
        return len(self._entries)

    @property
    def position(self) -> int:
        return self._position

    def rewind(self) -> None:
        """Move back to the first entry."""
        self._position = 0

    def valid(self) -> bool:
        """Check whether the cursor addresses an entry."""
        return 0 <= self._position < len(self._entries)

    def _entry(self) -> Tuple[Key, Any]:
        if not self.valid():
            raise IndexError(
                f"Cursor position {self._position} is past the last of {len(self._entries)} entries"
            )
        return self._entries[self._position]

    def current(self) -> Any:
        """Get the value at the cursor.

        Raises:
            IndexError: If the cursor is not valid.
        """
        return self._entry()[1]

    def key(self) -> Key:
        """Get the key at the cursor.

        Raises:
            IndexError: If the cursor is not valid.
        """
        return self._entry()[0]

    def advance(self) -> None:
        """Move to the next entry."""
        if self._position < len(self._entries):
            self._position += 1

    @override
    def __next__(self) -> Tuple[Key, Any]:
        if not self.valid():
            raise StopIteration
        entry = self._entries[self._position]
        self._position += 1
        return entry

    @override
    def __iter__(self) -> Cursor:
        return self
