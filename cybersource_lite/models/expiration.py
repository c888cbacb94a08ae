"""Card expiration parsing (``MM/YY``) and two-digit year resolution."""

import re
from datetime import date
from typing import Optional

from cybersource_lite.errors import ValidationError

_EXPIRATION_RE = re.compile(r"^(\d\d)/(\d\d)$")


def resolve_expiration_year(two_digit_year: int, today: Optional[date] = None) -> int:
    """
    Expand a two-digit expiry year to four digits.

    The century is taken from the current year, except late in a century
    (current two-digit year > 60) where a small expiry year that lies more
    than 20 years "behind" now is assumed to belong to the next century.
    """
    today = today or date.today()
    centuries = today.year - today.year % 100
    current = today.year % 100
    if current > 60 and two_digit_year + 20 < current:
        centuries += 100
    return centuries + two_digit_year


def parse_expiration(value: str, today: Optional[date] = None) -> tuple[str, int]:
    """Return ``(month, four_digit_year)``; month keeps its leading zero."""
    match = _EXPIRATION_RE.match((value or "").strip())
    if not match:
        raise ValidationError("Card expiration must be formatted MM/YY")
    month, year = match.groups()
    if not 1 <= int(month) <= 12:
        raise ValidationError(f"Card expiration month out of range: {month}")
    return month, resolve_expiration_year(int(year), today)
