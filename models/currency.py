"""Currency and number helpers shared by the calculators and the PDF report.

Form values arrive as loosely formatted strings ("£200,000", " 5.5 ", "84 pts"),
so parsing follows the lenient leading-number rules of the web form that
submits them: the numeric prefix is taken, anything after it is ignored, and a
value with no usable number falls back to a default instead of raising.
"""

import math
import re
from datetime import date

CURRENCY_SYMBOL = "£"

_CURRENCY_NOISE = re.compile(r"[£,\s]")
_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"[+-]?\d+")

MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def _float_prefix(value) -> float | None:
    """Leading float of a value, or None when there isn't a finite one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    match = _FLOAT_PREFIX.match(str(value).strip())
    if not match:
        return None
    number = float(match.group(0))
    return number if math.isfinite(number) else None


def parse_number(value, default: float = 0.0) -> float:
    """Parse a rate/count field. Missing, non-numeric and zero values all give `default`."""
    number = _float_prefix(value)
    return number if number else float(default)


def parse_int(value, default: int = 0) -> int:
    """Parse the leading integer of a value (e.g. "84.7" -> 84), else `default`."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, int):
        return value
    match = _INT_PREFIX.match(str(value).strip())
    return int(match.group(0)) if match else default


def parse_currency(value, default: float = 0.0) -> float:
    """Parse a money field such as "£1,200" into 1200.0; unusable input gives 0."""
    if not value:
        return float(default)
    cleaned = _CURRENCY_NOISE.sub("", str(value))
    return parse_number(cleaned, default)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_currency(value: float) -> str:
    """Whole-unit currency string: 1234.5 -> "£1,235", -80 -> "-£80"."""
    rounded = _round_half_up(value or 0.0)
    if rounded < 0:
        return f"-{CURRENCY_SYMBOL}{abs(rounded):,}"
    return f"{CURRENCY_SYMBOL}{rounded:,}"


def format_percent(value: float, places: int = 1) -> str:
    return f"{(value or 0.0):.{places}f}%"


def format_plain_number(value: float) -> str:
    """20.0 -> "20", 12.5 -> "12.5"."""
    return f"{value:g}"


def ordinal_suffix(day: int) -> str:
    if day % 10 == 1 and day % 100 != 11:
        return "st"
    if day % 10 == 2 and day % 100 != 12:
        return "nd"
    if day % 10 == 3 and day % 100 != 13:
        return "rd"
    return "th"


def format_ordinal_date(value: date) -> str:
    """date(2026, 10, 1) -> "1st October 2026"."""
    return f"{value.day}{ordinal_suffix(value.day)} {MONTHS[value.month - 1]} {value.year}"
