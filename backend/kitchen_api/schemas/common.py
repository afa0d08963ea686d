"""
Input coercion helpers shared by the request schemas.

The back-office forms send '' for untouched optional fields; these helpers
turn such values into None (or 0 for numeric line inputs) before validation.
"""

from typing import Any


def blank_to_none(value: Any) -> Any:
    """'' or whitespace-only strings become None; anything else passes through."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def blank_to_zero(value: Any) -> Any:
    """'' and None become 0; numeric-looking strings are left for pydantic to parse."""
    if value is None:
        return 0
    if isinstance(value, str) and not value.strip():
        return 0
    return value


def lenient_number(value: Any) -> Any:
    """Anything that is not a finite number becomes 0 (hidden form inputs)."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if number != number or number in (float("inf"), float("-inf")):
        return 0
    return number
