"""Type conversion utilities for safely handling descriptor fragments.

This module is the single source of truth for safe type conversion.
All other modules should import from here instead of defining their own.
"""

from typing import Any


def safe_float(val: Any, default: float = 0.0) -> float:
    """Safely convert a value to float.

    Args:
        val: Value to convert (can be str, int, float, None, etc.)
        default: Value to return if conversion fails

    Returns:
        Converted float or default value

    Examples:
        >>> safe_float("1.6")
        1.6
        >>> safe_float(None)
        0.0
        >>> safe_float("K4M", default=-1.0)
        -1.0
    """
    if val is None or val == "":
        return default
    try:
        return float(val)
    except (ValueError, TypeError):
        return default


def safe_int(val: Any, default: int = 0) -> int:
    """Safely convert a value to int.

    Examples:
        >>> safe_int("102")
        102
        >>> safe_int(None)
        0
    """
    if val is None or val == "":
        return default
    try:
        return int(float(val))  # Handle "3.0" -> 3
    except (ValueError, TypeError):
        return default


def leading_number(text: str, default: float = 0.0) -> float:
    """Convert the first whitespace-separated token of ``text`` to float.

    Examples:
        >>> leading_number("1.6 16V K4M")
        1.6
        >>> leading_number("16V K4M")
        0.0
    """
    tokens = text.split() if text else []
    if not tokens:
        return default
    return safe_float(tokens[0], default)
