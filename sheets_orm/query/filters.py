"""
Predicate filtering over in-memory records.

A where-clause maps field names to conditions. A record matches when every
condition matches. A condition is either a literal (loose equality) or an
operator object such as ``{"$gte": 18, "$lt": 65}``; every recognized operator
in the object must hold.
"""

import math
import re
from typing import Any, Callable, Dict, Iterable, List, Mapping

from sheets_orm.query.schemas import OPERATOR_ORDER, Operator
from sheets_orm.utils import parse_float, to_number


def loose_equals(left: Any, right: Any) -> bool:
    """
    Equality that tolerates the text/number mix of spreadsheet cells.

    ``"30" == 30`` and ``"1" == True`` hold; ``None`` only equals ``None``.
    """
    if left is None or right is None:
        return left is None and right is None
    if type(left) is type(right):
        return left == right

    numeric = (int, float)
    left_num = isinstance(left, numeric)
    right_num = isinstance(right, numeric)
    # Booleans are ints, so they land here and compare as 1/0
    if left_num and right_num:
        return float(left) == float(right)
    if left_num and isinstance(right, str):
        return float(left) == to_number(right)
    if right_num and isinstance(left, str):
        return to_number(left) == float(right)
    return left == right


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return "object"


def strict_equals(left: Any, right: Any) -> bool:
    """Equality that also requires the same kind of value (1 is not True, "1" is not 1)."""
    return _kind(left) == _kind(right) and left == right


def like_to_regex(pattern: str) -> "re.Pattern[str]":
    """Translate a SQL-style pattern (``%`` wildcard) into a case-insensitive regex."""
    parts = str(pattern).split("%")
    return re.compile(".*".join(re.escape(part) for part in parts), re.IGNORECASE)


def _compare(value: Any, bound: Any, op: Callable[[float, float], bool]) -> bool:
    left = parse_float(value)
    right = parse_float(bound)
    if math.isnan(left) or math.isnan(right):
        return False
    return op(left, right)


def _like(value: Any, pattern: Any) -> bool:
    text = "" if value is None else str(value)
    return like_to_regex(pattern).search(text) is not None


def _in(value: Any, options: Any) -> bool:
    return any(strict_equals(value, option) for option in options or ())


OPERATORS: Dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.EQ: loose_equals,
    Operator.NE: lambda value, arg: not loose_equals(value, arg),
    Operator.GT: lambda value, arg: _compare(value, arg, lambda a, b: a > b),
    Operator.GTE: lambda value, arg: _compare(value, arg, lambda a, b: a >= b),
    Operator.LT: lambda value, arg: _compare(value, arg, lambda a, b: a < b),
    Operator.LTE: lambda value, arg: _compare(value, arg, lambda a, b: a <= b),
    Operator.IN: _in,
    Operator.NIN: lambda value, arg: not _in(value, arg),
    Operator.LIKE: _like,
}


def match_condition(value: Any, condition: Any) -> bool:
    """Evaluate one field condition against a record value."""
    if not isinstance(condition, Mapping):
        return loose_equals(value, condition)

    matched_any = False
    for op in OPERATOR_ORDER:
        if op.value not in condition:
            continue
        matched_any = True
        if not OPERATORS[op](value, condition[op.value]):
            return False

    # An operator object without a recognized operator never matches
    return matched_any


def match_record(record: Mapping[str, Any], where: Mapping[str, Any]) -> bool:
    return all(match_condition(record.get(field), condition) for field, condition in where.items())


def filter_records(records: Iterable[Mapping[str, Any]], where: Mapping[str, Any]) -> List[Any]:
    """Keep the records matching every condition, in their original order."""
    return [record for record in records if match_record(record, where)]
