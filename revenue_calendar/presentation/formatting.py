"""Text formatting for tooltip and report values."""
from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from revenue_calendar.domain.results import WEEKDAY_NAMES


def format_fixed(value: float, places: int) -> str:
    """Fixed-point text with ties rounded away from zero (1.25 -> "1.3")."""
    # Decimal(float) is exact, so only true binary ties round up.
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_money(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${format_fixed(abs(value), 2)}"


def format_number(value: float) -> str:
    return format_fixed(value, 1)


def format_date(value: date) -> str:
    return f"{value.day}.{value.month}.{value.year}"


def format_day_name(value: date) -> str:
    return WEEKDAY_NAMES[value.weekday()]
