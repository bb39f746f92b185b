"""
Lenient value parsing shared by the normalizer and the validator.

LLM output and half-typed form fields both carry numbers as strings
("45 minutes", "350", " 12.5"), so parsing reads the leading number and
ignores whatever follows it.
"""

import math
import re
from typing import Any, Optional, Union

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+))")


def is_blank(value: Any) -> bool:
    """True for None and empty or whitespace-only strings."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def parse_leading_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """
    Parse the integer a value starts with.

    Floats are truncated toward zero, strings are read up to the first
    non-digit character. Anything else returns ``default``.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return default
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    return default


def parse_leading_number(value: Any) -> Optional[float]:
    """Like parse_leading_int but keeps the fractional part."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            return None
        return float(value)
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if match:
            return float(match.group(1))
    return None


def format_number(value: Union[int, float]) -> str:
    """Render whole floats without a trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
