"""Stable multi-key sorting of in-memory records."""

import math
from functools import cmp_to_key
from typing import Any, Iterable, List, Mapping, Tuple, Union

from sheets_orm.query.schemas import SortDirection
from sheets_orm.utils import parse_float


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def compare_values(left: Any, right: Any) -> int:
    """Numeric comparison when both sides parse as finite numbers, text comparison otherwise."""
    left_num = parse_float(left)
    right_num = parse_float(right)
    if math.isfinite(left_num) and math.isfinite(right_num):
        return (left_num > right_num) - (left_num < right_num)

    left_text = _as_text(left)
    right_text = _as_text(right)
    return (left_text > right_text) - (left_text < right_text)


def _direction(value: Union[str, SortDirection]) -> SortDirection:
    if isinstance(value, SortDirection):
        return value
    return SortDirection.DESC if str(value).lower() == "desc" else SortDirection.ASC


def sort_records(records: Iterable[Mapping[str, Any]], order_by: Mapping[str, Union[str, SortDirection]]) -> List[Any]:
    """
    Return a new list ordered by ``order_by``.

    The first key is primary and later keys break ties. Records equal on
    every key keep their original relative order.
    """
    keys: List[Tuple[str, int]] = [(field, _direction(direction).multiplier) for field, direction in order_by.items()]

    def compare(a: Mapping[str, Any], b: Mapping[str, Any]) -> int:
        for field, multiplier in keys:
            result = compare_values(a.get(field), b.get(field))
            if result != 0:
                return result * multiplier
        return 0

    # sorted() is stable, which keeps ties in input order
    return sorted(records, key=cmp_to_key(compare))
