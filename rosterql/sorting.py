"""Default sort resolver for member listings.

Maps an order-by value such as ``firstName_DESC`` to an ordering description,
a tuple of ``(field, direction)`` pairs that member stores understand.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Tuple

from .errors import INVALID_ORDER_BY, ClientInputError

Ordering = Tuple[Tuple[str, str], ...]
SortResolver = Callable[[Any], Ordering]

SORTABLE_FIELDS = ('id', 'firstName', 'lastName', 'email', 'appLanguageCode')

ORDER_BY_VALUES = tuple(
    f"{name}_{suffix}" for name in SORTABLE_FIELDS for suffix in ('ASC', 'DESC')
)

UserOrderBy = Enum('UserOrderBy', {value: value for value in ORDER_BY_VALUES})


def get_sort(order_by: Any) -> Ordering:
    if order_by is None:
        return ()
    value = str(getattr(order_by, 'value', order_by))
    name, _, direction = value.rpartition('_')
    if name not in SORTABLE_FIELDS or direction not in ('ASC', 'DESC'):
        raise ClientInputError(
            f"Invalid orderBy '{value}'. Allowed: {list(ORDER_BY_VALUES)}",
            code=INVALID_ORDER_BY,
        )
    return ((name, direction.lower()),)
