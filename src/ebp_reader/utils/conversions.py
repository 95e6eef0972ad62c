"""
Value conversion helpers for EBP attribute strings.

Attribute values in project files are plain strings; numeric ones are
decimal integers. Anything that doesn't parse is treated as absent so the
caller can pick its own default.
"""

import re
from typing import Any, Optional

# ASCII digits only: int() alone would also take "1_0" and non-Latin digits
DECIMAL_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """
    Parse a decimal integer attribute value.

    Args:
        value: Raw attribute value (usually str or None)
        default: Returned when the value is missing or not an integer

    Returns:
        Parsed integer or default
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value

    text = str(value).strip()
    if not DECIMAL_PATTERN.fullmatch(text):
        return default
    return int(text)
