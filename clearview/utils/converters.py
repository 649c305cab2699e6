"""Type conversion utilities for form and document input.

This module is the single source of truth for safe type conversion.
Invalid numeric input is rejected by returning a default (or None), never by
raising, so callers can treat it as "no change".
"""

import math
from typing import Any


def safe_float(val: Any, default: float = 0.0) -> float:
    """Safely convert a value to float.

    Examples:
        >>> safe_float("3.14")
        3.14
        >>> safe_float(None)
        0.0
        >>> safe_float("invalid", default=-1.0)
        -1.0
    """
    if val is None or val == "":
        return default
    try:
        result = float(val)
    except (ValueError, TypeError):
        return default
    if math.isnan(result) or math.isinf(result):
        return default
    return result


def safe_int(val: Any, default: int = 0) -> int:
    """Safely convert a value to int.

    Examples:
        >>> safe_int("42")
        42
        >>> safe_int(3.7)
        3
        >>> safe_int(None)
        0
    """
    if val is None or val == "":
        return default
    try:
        return int(float(val))  # Handle "3.0" -> 3
    except (ValueError, TypeError, OverflowError):
        return default


def parse_quantity(val: Any) -> int | None:
    """Parse a stock quantity: a non-negative whole number, else None.

    Accepts ints and integer strings (surrounding whitespace allowed).
    Booleans, floats with a fraction, negatives and text are rejected.

    Examples:
        >>> parse_quantity("12")
        12
        >>> parse_quantity(-1) is None
        True
        >>> parse_quantity("abc") is None
        True
    """
    if isinstance(val, bool) or val is None:
        return None
    if isinstance(val, int):
        return val if val >= 0 else None
    if isinstance(val, float):
        if val.is_integer() and val >= 0:
            return int(val)
        return None
    if isinstance(val, str):
        text = val.strip()
        if text.isascii() and text.isdigit():
            return int(text)
    return None


def parse_amount(val: Any) -> float | None:
    """Parse a money amount: a finite float >= 0, else None."""
    if isinstance(val, bool):
        return None
    amount = safe_float(val, default=-1.0)
    return amount if amount >= 0 else None
