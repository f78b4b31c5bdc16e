# designer/utils.py

import math
import re
import time
from datetime import datetime
from typing import Optional

from designer.errors import InvalidColorError

_HEX_RE = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')


def format_currency(amount, currency="USD", decimals=0):
    """Format currency with proper symbols and formatting."""
    if currency == "INR":
        return f"₹{amount:,.{decimals}f}"
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.{decimals}f}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def percentage(part: float, whole: float) -> int:
    """Whole-number percentage of part in whole; 0 when whole is 0."""
    if not whole:
        return 0
    return round_half_up(part * 100 / whole)


def normalize_hex(value: str) -> str:
    """Return a lowercase #rrggbb string, expanding #rgb shorthand."""
    if not isinstance(value, str):
        raise InvalidColorError(value)
    match = _HEX_RE.match(value.strip())
    if not match:
        raise InvalidColorError(value)
    digits = match.group(1).lower()
    if len(digits) == 3:
        digits = ''.join(ch * 2 for ch in digits)
    return f"#{digits}"


def hex_to_rgb(value: str):
    """'#d4af37' -> (212, 175, 55)"""
    digits = normalize_hex(value)[1:]
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def hex_to_rgba(value: str, alpha: int = 255):
    return (*hex_to_rgb(value), alpha)


def timestamp_ms(now: Optional[datetime] = None) -> int:
    """Milliseconds since the epoch, like a browser's Date.now()."""
    if now is None:
        return int(time.time() * 1000)
    return int(now.timestamp() * 1000)
