import re
from typing import Any, Optional


_LEADING_INT_RE = re.compile(r'^\s*([+-]?\d+)')


def to_int(value: Any, fallback: int = 0) -> int:
    """
    Lenient integer parsing used for every value that comes from a
    catalog document, widget configuration or UI control.

    Strings are read up to the first non-digit ("4-pack" -> 4, " 12px" -> 12);
    anything that does not start with a number returns ``fallback``.
    """
    if isinstance(value, bool) or value is None:
        return fallback
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float('inf'), float('-inf')):
            return fallback
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        if match:
            return int(match.group(1))
    return fallback


def to_bool(value: Any, fallback: Optional[bool] = None) -> Optional[bool]:
    """Parse booleans from JSON/settings/query-string style values."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ('1', 'true', 'yes', 'on'):
            return True
        if lowered in ('0', 'false', 'no', 'off'):
            return False
    return fallback
