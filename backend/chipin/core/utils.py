"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional
import math
import re

# Longest leading numeric prefix, e.g. "12.5abc" -> "12.5", " .5" -> ".5"
_NUMBER_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(value: Any) -> Optional[float]:
    """
    Leniently parse a form value into a float.

    Numbers are taken as-is; strings are parsed from their longest leading
    numeric prefix after stripping leading whitespace. Returns None for
    anything that is not a number (None, booleans, empty or non-numeric
    strings, NaN).
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            number = math.inf if value > 0 else -math.inf
    elif isinstance(value, str):
        match = _NUMBER_PREFIX.match(value.lstrip())
        if not match:
            return None
        number = float(match.group(0))
    else:
        return None

    if math.isnan(number):
        return None
    return number


def coerce_amount(value: Any) -> float:
    """Parse a number, falling back to 0 when the value is not numeric."""
    number = parse_number(value)
    return number if number is not None else 0.0


def is_valid_amount(value: Any) -> bool:
    """Check that a value parses to a finite, non-negative number."""
    number = parse_number(value)
    return number is not None and math.isfinite(number) and number >= 0


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message}
    if details:
        response["details"] = details
    return response
