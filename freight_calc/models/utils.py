"""Utility functions for working with freight table data.

Spreadsheet cells arrive as strings that may be blank, padded or not numeric
at all. These helpers coerce them without ever raising, so that a bad cell
degrades into a missing value instead of aborting a table load.
"""

import math
from enum import Enum
from typing import Any, Optional


def parse_number(value: Any) -> Optional[float]:
    """Parse a spreadsheet cell into a float.

    Args:
        value: Raw cell value (str, int, float or None)

    Returns:
        The parsed float, or None when the value is blank, not numeric,
        NaN or infinite. Booleans are not treated as numbers.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_number_or_zero(value: Any) -> float:
    """Parse a cell into a float, treating anything unusable as 0."""
    number = parse_number(value)
    return 0.0 if number is None else number


def normalize_key(value: Any) -> str:
    """Return the case-insensitive comparison key for a country or carrier.

    Enum members compare by their value. Surrounding whitespace is kept:
    lookups are exact apart from letter case.
    """
    if isinstance(value, Enum):
        value = value.value
    return str(value).upper()


def keys_match(left: Any, right: Any) -> bool:
    """Case-insensitive exact comparison of two lookup keys."""
    return normalize_key(left) == normalize_key(right)
