"""Sort direction for the collection sort family."""

from __future__ import annotations

from enum import Enum, unique
from typing import Any

from ordcoll.common import InvalidSortOrder

__all__ = ["SortOrder"]


@unique
class SortOrder(Enum):
    """The two recognized sort directions.

    Either a member or its string value ("asc" / "desc", in any case)
    is accepted wherever a sort order is expected.
    """

    ASC = "asc"  # Smallest sort key first
    DESC = "desc"  # Largest sort key first

    @property
    def descending(self) -> bool:
        return self == SortOrder.DESC

    @staticmethod
    def coerce(order: Any) -> SortOrder:
        """Resolve a sort order argument to a SortOrder member.

        Args:
            order: A SortOrder member or one of the strings "asc" / "desc".

        Returns:
            The matching SortOrder.

        Raises:
            InvalidSortOrder: If the argument names neither direction.
        """
        if isinstance(order, SortOrder):
            return order
        if isinstance(order, str):
            for member in SortOrder:
                if member.value == order.lower():
                    return member
        raise InvalidSortOrder(order)
