"""Display formatting for dashboard numbers and dates."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Optional

import pandas as pd


def to_decimal(value: Any) -> Decimal:
    """Decimal from a number via its shortest repr; non-finite or junk -> 0."""
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal(0)
    return number if number.is_finite() else Decimal(0)


def _round_half_up(number: Decimal, places: int) -> Decimal:
    # Precision must cover every integer digit plus the kept decimals
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, number.adjusted() + places + 2)
        return number.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def fixed(value: Any, places: int) -> str:
    """Render ``value`` with exactly ``places`` decimals, rounding half up.

    >>> fixed(350.505, 2)
    '350.51'
    """
    rounded = _round_half_up(to_decimal(value), places)
    if rounded.is_zero():
        rounded = abs(rounded)
    return format(rounded, "f")


def percentage(part: int, whole: int, places: int = 1) -> str:
    """``part / whole`` as a percentage string; "0.0" when ``whole`` is 0."""
    if whole <= 0:
        return fixed(0, places)
    return fixed(Decimal(part) * 100 / Decimal(whole), places)


def format_currency(amount: float, decimals: int = 0) -> str:
    number = to_decimal(amount)
    sign = "-" if number < 0 else ""
    rounded = _round_half_up(abs(number), decimals)
    return f"{sign}${rounded:,.{decimals}f}"


def format_large_number(num: float, currency: bool = True) -> str:
    """Human readable K/M suffixes, e.g. 1_250_000 -> "$1.3M"."""
    prefix = "$" if currency else ""
    if num >= 1_000_000:
        return f"{prefix}{fixed(num / 1_000_000, 1)}M"
    if num >= 1_000:
        return f"{prefix}{fixed(num / 1_000, 1)}K"
    return format_currency(num) if currency else f"{num:g}"


def format_date(value: Optional[str], style: str = "short") -> str:
    """US-style date: "Jan 5, 2024" (short) or "January 5, 2024 at 02:30 PM" (long)."""
    ts = pd.to_datetime(value, errors="coerce")
    if value is None or pd.isna(ts):
        return "Invalid Date"
    if style == "long":
        return f"{ts:%B} {ts.day}, {ts.year} at {ts:%I:%M %p}"
    return f"{ts:%b} {ts.day}, {ts.year}"
