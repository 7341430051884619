from ordcoll.collection import Collection
from ordcoll.common import Impossible, InvalidSortOrder, Key, KeyNotFound, Ordering
from ordcoll.cursor import Cursor
from ordcoll.order import SortOrder
from ordcoll.shape import Nested, Record, Scalar, Shape, shape_of

__all__ = [
    "Collection",
    "Cursor",
    "Impossible",
    "InvalidSortOrder",
    "Key",
    "KeyNotFound",
    "Nested",
    "Ordering",
    "Record",
    "Scalar",
    "Shape",
    "SortOrder",
    "shape_of",
]
