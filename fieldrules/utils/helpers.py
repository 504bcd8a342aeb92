"""
fieldrules Helpers
==================

Value inspection, data-bag lookup and date parsing shared by the rules.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Any, Callable, Iterable, List, Optional

from dateutil import parser as date_parser


# =============================================================================
# Value Helpers
# =============================================================================

_DIGITS = re.compile(r"[0-9]+")
_NUMERIC = re.compile(r"\s*[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*")


def is_digits(value: Any) -> bool:
    """
    Check that a value consists only of decimal digits.

    Example:
        >>> is_digits("0042"), is_digits("-1"), is_digits(""), is_digits(7)
        (True, False, False, True)
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    if isinstance(value, str):
        return _DIGITS.fullmatch(value) is not None
    return False


def is_numeric(value: Any) -> bool:
    """
    Check that a value is a number or a numeric string.

    Accepts signs, decimals and exponents ("-1.5e3"); rejects "inf",
    "nan" and booleans.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return value == value and value not in (float("inf"), float("-inf"))
    if isinstance(value, str):
        return _NUMERIC.fullmatch(value) is not None
    return False


def to_number(value: Any) -> Optional[float]:
    """Convert a numeric value to float, or None if it is not numeric."""
    if not is_numeric(value):
        return None
    return float(value)


def is_empty(value: Any) -> bool:
    """
    Check whether a submitted value counts as empty.

    None, blank strings and empty containers are empty; numbers never are.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def is_falsy(value: Any) -> bool:
    """
    Check whether a submitted value counts as not given, PHP `empty()` style.

    Like `is_empty`, plus zero, "0" and False. Blank strings of spaces
    are still given.
    """
    if isinstance(value, str):
        return value in ("", "0")
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return not value


def loosely_equal(left: Any, right: Any) -> bool:
    """
    Compare a submitted value with a rule parameter.

    Numbers compare numerically ("2" == 2.0), None equals "",
    everything else compares as text.
    """
    if is_numeric(left) and is_numeric(right):
        return float(left) == float(right)
    left = "" if left is None else left
    right = "" if right is None else right
    return str(left) == str(right)


# =============================================================================
# Collection Helpers
# =============================================================================

def data_get(
    data: Any,
    path: str,
    default: Any = None,
) -> Any:
    """
    Get nested value from the data bag using dot notation.

    Example:
        >>> data_get({"user": {"emails": ["a@b.c"]}}, "user.emails.0")
        'a@b.c'
    """
    if isinstance(data, dict) and path in data:
        return data[path]

    current = data
    for key in path.split("."):
        if isinstance(current, dict):
            if key not in current:
                return default
            current = current[key]
        elif isinstance(current, (list, tuple)) and key.isdigit():
            index = int(key)
            if index >= len(current):
                return default
            current = current[index]
        else:
            return default

    return current


def has_key(data: Any, path: str) -> bool:
    """Check that a dot-notation path exists in the data bag."""
    missing = object()
    return data_get(data, path, missing) is not missing


def flatten(items: Iterable) -> List:
    """
    Flatten nested lists, tuples and dict values.

    Example:
        >>> flatten([["1", ["2"]], {"a": "3"}])
        ['1', '2', '3']
    """
    result = []

    for item in items:
        if isinstance(item, dict):
            result.extend(flatten(item.values()))
        elif isinstance(item, (list, tuple)):
            result.extend(flatten(item))
        else:
            result.append(item)

    return result


# =============================================================================
# Time Helpers
# =============================================================================

_RELATIVE_DAYS = {
    "today": 0,
    "tomorrow": 1,
    "yesterday": -1,
}

_SHORT_NUMBER = re.compile(r"[+-]?[0-9]{1,7}")

# PHP-style date format letters accepted by array_dates
_FORMAT_LETTERS = {
    "d": "%d",
    "j": "%d",
    "D": "%a",
    "l": "%A",
    "m": "%m",
    "n": "%m",
    "M": "%b",
    "F": "%B",
    "Y": "%Y",
    "y": "%y",
    "H": "%H",
    "G": "%H",
    "h": "%I",
    "g": "%I",
    "i": "%M",
    "s": "%S",
    "A": "%p",
    "a": "%p",
    "u": "%f",
    "e": "%Z",
    "T": "%Z",
    "O": "%z",
    "P": "%z",
}


def to_strptime_format(fmt: str) -> str:
    """
    Translate a PHP-style date format ("Y-m-d") to strptime ("%Y-%m-%d").

    Formats that already contain "%" are returned unchanged. A backslash
    escapes the next character.
    """
    if "%" in fmt:
        return fmt

    out = []
    escaped = False
    for char in fmt:
        if escaped:
            out.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            out.append(_FORMAT_LETTERS.get(char, char))
    return "".join(out)


def matches_date_format(value: Any, fmt: str) -> bool:
    """Check that a string parses against a date format without errors."""
    if not isinstance(value, str):
        return False
    try:
        datetime.strptime(value, to_strptime_format(fmt))
    except ValueError:
        return False
    return True


def parse_timestamp(
    value: Any,
    clock: Callable[[], datetime] = datetime.now,
) -> Optional[float]:
    """
    Parse a date value into a Unix timestamp.

    Accepts datetime/date objects, the words "now", "today", "tomorrow"
    and "yesterday" (relative to `clock`), and any string dateutil can
    parse. Parts missing from a string ("13:00", "June 20") are taken
    from the clock's date. Naive values are read as local time.

    Returns:
        Timestamp or None if the value cannot be parsed or is out of range
    """
    try:
        moment = _to_datetime(value, clock)
        return moment.timestamp() if moment is not None else None
    except (ValueError, OverflowError, OSError):
        return None


def _to_datetime(value: Any, clock: Callable[[], datetime]) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip().lower()

    if text == "now":
        return clock()

    midnight = datetime.combine(clock().date(), time.min)

    if text in _RELATIVE_DAYS:
        return midnight + timedelta(days=_RELATIVE_DAYS[text])

    # A lone day or year number ("30", "2024") is not a date
    if _SHORT_NUMBER.fullmatch(text):
        return None

    return date_parser.parse(value, default=midnight)
