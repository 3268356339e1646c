"""Internal helpers for turning decorated order values into numbers.

This is an internal module used by the domain ``from_dict`` constructors.
Order data arrives with numbers as strings ("12.5"), decorated lengths
("1.20 m") and angles ("45°"); everything is parsed here, once.
"""

import math
import re
from typing import Any

_LEADING_FLOAT = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_NON_NUMERIC = re.compile(r"[^0-9.]")


def parse_number(value: Any) -> float | None:
    """Parse a numeric-like value into a finite float.

    Strings are read up to the end of their leading number, so ``"12mm"``
    parses as 12.0.

    Args:
        value: Number or string to parse

    Returns:
        Finite float, or None if the value is missing or not numeric
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        match = _LEADING_FLOAT.match(value)
        if match is None:
            return None
        result = float(match.group(0))
    else:
        return None

    return result if math.isfinite(result) else None


def parse_length(text: Any) -> float:
    """Extract the numeric part of a display length such as ``"1,200 mm"``.

    Every character other than digits and dots is dropped before parsing.

    Args:
        text: Display length string

    Returns:
        Parsed length, 0.0 when nothing numeric remains
    """
    if text is None:
        return 0.0
    stripped = _NON_NUMERIC.sub("", str(text))
    value = parse_number(stripped)
    return value if value is not None else 0.0


def parse_angle(text: Any) -> float | None:
    """Parse an angle callout such as ``"135°"`` into degrees."""
    if isinstance(text, str):
        text = text.replace("°", "")
    return parse_number(text)


def parse_int(value: Any) -> int | None:
    """Parse an integer index or quantity, truncating numeric strings."""
    number = parse_number(value)
    if number is None:
        return None
    return int(number)
