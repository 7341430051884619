"""Value shapes used to pick sort keys.

The sort family treats a value differently depending on whether it is a
structured record, a nested key/value structure, or a plain scalar. The
check happens once per value through shape_of, which returns one arm of
the Shape sum type.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from numbers import Number
from typing import Any, Optional, Union

from ordcoll.common import MISSING, Impossible, Missing

__all__ = [
    "Nested",
    "Record",
    "Scalar",
    "Shape",
    "Structure",
    "field_of",
    "record_of",
    "shape_of",
]


class Structure(metaclass=ABCMeta):
    """A value that exposes its contents as addressable fields."""

    @abstractmethod
    def fields(self) -> Mapping[Any, Any]: ...


@dataclass(frozen=True)
class Record:
    """A structured object, addressed through an extractor function."""

    value: Any


@dataclass(frozen=True)
class Nested:
    """A nested key/value structure, addressed by field name."""

    fields: Mapping[Any, Any]


@dataclass(frozen=True)
class Scalar:
    """A plain value that is its own sort key."""

    value: Any


type Shape = Union[Record, Nested, Scalar]

_SCALAR_TYPES = (str, bytes, bytearray, Number)


def shape_of(value: Any) -> Shape:
    """Classify a value.

    Args:
        value: Any collection value.

    Returns:
        Nested for mappings, lists, tuples and other Structures;
        Scalar for None, numbers, strings and bytes;
        Record for every other object.
    """
    if isinstance(value, Structure):
        return Nested(value.fields())
    elif isinstance(value, Mapping):
        return Nested(value)
    elif isinstance(value, (list, tuple)):
        return Nested(dict(enumerate(value)))
    elif value is None or isinstance(value, _SCALAR_TYPES):
        return Scalar(value)
    else:
        return Record(value)


def field_of(value: Any, name: Any) -> Union[Any, Missing]:
    """Find the sort key for a value by field name.

    Returns the field of a nested structure, the value itself for records and
    scalars, or MISSING when a nested structure lacks the field.
    """
    shape = shape_of(value)
    match shape:
        case Nested(fields):
            return fields[name] if name in fields else MISSING
        case Record(inner) | Scalar(inner):
            return inner
        case _:
            raise Impossible


def record_of(value: Any) -> Optional[Record]:
    """Wrap a value that sort_by can rank, or return None.

    Records and Structures (such as nested collections) are objects and take
    part. Scalars and plain mappings, lists and tuples do not.
    """
    if isinstance(value, Structure):
        return Record(value)
    shape = shape_of(value)
    return shape if isinstance(shape, Record) else None
