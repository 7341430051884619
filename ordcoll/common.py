"""Common utility types and functions for the ordcoll collection library.

This module provides the key type, the error taxonomy, and the comparison
utilities shared by the collection, its cursor, and the sort family.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generator, List, Union

__all__ = [
    "Impossible",
    "InvalidSortOrder",
    "Iterating",
    "Key",
    "KeyNotFound",
    "MISSING",
    "Missing",
    "Ordering",
    "Sized",
    "check_key",
    "is_key",
    "compare",
    "compare_key",
    "strict_equal",
]


type Key = Union[int, str]


class Impossible(Exception):
    """Exception raised when encountering theoretically impossible states.

    Used to indicate internal consistency violations in collection operations.
    """

    pass


class KeyNotFound(KeyError):
    """Raised when reading a key that is not present in a collection."""

    def __init__(self, key: Any):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Key not found: {self.key!r}"


class InvalidSortOrder(ValueError):
    """Raised when a sort order is neither ascending nor descending."""

    def __init__(self, order: Any):
        super().__init__(f"Invalid sort order: {order!r}")
        self.order = order


@dataclass(frozen=True)
class Missing:
    pass


MISSING = Missing()


class Sized(metaclass=ABCMeta):
    @abstractmethod
    def size(self) -> int: ...

    def null(self) -> bool:
        return self.size() == 0

    def __bool__(self) -> bool:
        return not self.null()

    def __len__(self) -> int:
        return self.size()


class Iterating[U](metaclass=ABCMeta):
    @abstractmethod
    def iter(self) -> Generator[U]: ...

    def list(self) -> List[U]:
        return list(self.iter())

    def __iter__(self) -> Generator[U]:
        return self.iter()


class Ordering(Enum):
    """Enumeration representing the result of a comparison operation."""

    Lt = -1
    Eq = 0
    Gt = 1


def compare[T](a: T, b: T) -> Ordering:
    """Compare two values and return their ordering relationship.

    Uses the == and < operators, so values of incompatible types raise
    TypeError instead of being ordered arbitrarily.

    Args:
        a: First value to compare.
        b: Second value to compare.

    Returns:
        Ordering indicating the relationship between a and b.
    """
    if a < b:  # type: ignore[operator]
        return Ordering.Lt
    elif a == b:
        return Ordering.Eq
    else:
        return Ordering.Gt


def compare_key[T](a: T, b: T) -> int:
    """Adapt compare for functools.cmp_to_key."""
    return compare(a, b).value


def is_key(key: Any) -> bool:
    # bool is an int subclass but never a valid key
    return isinstance(key, (int, str)) and not isinstance(key, bool)


def check_key(key: Any) -> Key:
    """Validate a collection key.

    Args:
        key: The candidate key.

    Returns:
        The key unchanged.

    Raises:
        TypeError: If the key is not an int or a str.
    """
    if not is_key(key):
        raise TypeError(f"Collection keys must be int or str, not {type(key).__name__}")
    return key


def strict_equal(a: Any, b: Any) -> bool:
    """Compare two values without coercion.

    Values are equal when they are the same object, or when they have exactly
    the same type and compare equal. So 1, 1.0 and True are all distinct.
    Lists, tuples and dicts are compared item by item with the same rule,
    dicts in key order, so [1] and [1.0] differ too.
    """
    if a is b:
        return True
    if type(a) is not type(b):
        return False
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(strict_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict):
        return len(a) == len(b) and all(
            strict_equal(ka, kb) and strict_equal(va, vb)
            for (ka, va), (kb, vb) in zip(a.items(), b.items())
        )
    return bool(a == b)
