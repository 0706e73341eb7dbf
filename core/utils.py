from __future__ import annotations

import datetime
import re
from typing import Tuple

from dateutil.relativedelta import relativedelta

_NON_AMOUNT_CHARS = re.compile(r"[^\d.]*")


def format_as_currency(cents: int) -> str:
    """Format integer cents as ``$1,234.56``; negatives render as ``$-1,234.56``."""
    sign = "-" if cents < 0 else ""
    whole, frac = divmod(abs(int(cents)), 100)
    return f"${sign}{whole:,}.{frac:02d}"


def format_as_date(day: datetime.date) -> str:
    """Display form of a date: ``MM/DD/YYYY``."""
    return f"{day.month:02d}/{day.day:02d}/{day.year}"


def date_string(year, month, day) -> str:
    """Canonical ``YYYY-MM-DD`` text, zero-padded."""
    return f"{int(year):04d}-{int(month):02d}-{int(day):02d}"


def parse_date_string(text: str) -> Tuple[int, int, int]:
    """
    Parse ``YYYY-MM-DD`` (components may be unpadded) into ``(year, month, day)``.
    Malformed or partial input yields ``(0, 0, 0)`` instead of raising.
    """
    parts = (text or "").strip().split("-")
    if len(parts) != 3 or not all(p.isdecimal() for p in parts):
        return 0, 0, 0
    year, month, day = (int(p) for p in parts)
    return year, month, day


def normalized_date(year: int, month: int, day: int) -> datetime.date:
    """
    Build a date, letting out-of-range month/day values overflow into the
    neighbouring month or year (month 13 -> January next year, day 0 -> last
    day of the previous month).
    """
    return datetime.date(year, 1, 1) + relativedelta(months=month - 1, days=day - 1)


def parse_dollar_amount(text: str, assume_positive: bool = False) -> int:
    """
    Parse a currency string such as ``$1,234.56``, ``+50.00`` or ``-12`` into cents.

    Amounts are negative (bills) unless the input leads with ``+``/``$+``, or
    ``assume_positive`` is set. With ``assume_positive`` a leading ``-``/``$-``
    flips the result back to negative (e.g. a negative starting balance).
    """
    text = text or ""
    digits = _NON_AMOUNT_CHARS.sub("", text)

    multiplier = -1
    if text.startswith(("+", "$+")) or assume_positive:
        multiplier = 1
    if assume_positive and text.startswith(("-", "$-")):
        multiplier = -1

    parts = digits.split(".")
    cents = 0
    if len(parts) == 2:
        frac = parts[1]
        cents = int(frac) if frac else 0
        # "10.2" means $10.20, but "10.05" stays five cents
        if not frac.startswith("0") and cents < 10:
            cents *= 10
        # too many fractional digits: drop them
        if cents >= 100:
            cents = 0

    whole = int(parts[0]) if parts[0] else 0
    return multiplier * (whole * 100 + cents)


def div_trunc(numerator: int, denominator: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return -quotient if (numerator < 0) != (denominator < 0) else quotient
