# sheets_orm/utils/__init__.py
"""Utility functions package"""

import math
import re
from datetime import date, datetime
from typing import Any, Union

_FLOAT_PREFIX = re.compile(r"^[+-]?(?:inf(?:inity)?|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.IGNORECASE)


def parse_float(value: Any) -> float:
    """
    Parse the leading numeric part of a value as a float.

    Mirrors spreadsheet-style lenient parsing:
    - numbers are returned as floats (booleans count as 1/0)
    - strings are stripped and their longest numeric prefix is used
      ("12px" -> 12.0, " 3.5 " -> 3.5)
    - anything unparsable yields NaN, as does any other type (dates
      are not numbers)

    Args:
        value: Any cell or record value

    Returns:
        The parsed float, or NaN
    """
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return math.nan
    text = value.strip()
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return math.nan
    try:
        return float(match.group(0))
    except ValueError:
        return math.nan


def is_finite_number(value: Any) -> bool:
    """True for ints/floats (not bools) and strings that are entirely a finite number."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if isinstance(value, str):
        try:
            return math.isfinite(float(value.strip()))
        except ValueError:
            return False
    return False


def to_number(value: Any) -> float:
    """Strict numeric conversion used by loose equality: the whole string must be numeric."""
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if text == "":
            return 0.0
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def parse_date(value: Union[str, date, datetime]) -> Union[date, datetime]:
    """
    Parse an ISO-8601 date or datetime string.

    Date and datetime values are returned unchanged. A trailing ``Z`` is read
    as UTC. Raises ``ValueError`` for anything that is not a calendar date.
    """
    if isinstance(value, (date, datetime)):
        return value
    text = str(value).strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def is_date_like(value: Any) -> bool:
    try:
        parse_date(value)
    except (TypeError, ValueError):
        return False
    return True
