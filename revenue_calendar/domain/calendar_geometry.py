"""Grid placement of calendar days: one column per week, one row per weekday."""
from __future__ import annotations

from datetime import date, datetime, timedelta

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _week_start(value: date) -> date:
    return value - timedelta(days=value.weekday())


def day_of_week_row(value: date | datetime) -> int:
    """Monday is row 0, Sunday row 6."""
    return _as_date(value).weekday()


def week_index_within_year(value: date | datetime) -> int:
    """Number of Mondays passed since January 1st of the same year.

    Days before the year's first Monday are in column 0.
    """
    day = _as_date(value)
    first_week_start = _week_start(date(day.year, 1, 1))
    return (_week_start(day) - first_week_start).days // 7


def grid_position(value: date | datetime) -> tuple[int, int]:
    return week_index_within_year(value), day_of_week_row(value)


def week_labels(columns: int = 53) -> list[str]:
    # Every other week is labelled to keep the header readable.
    return [str(index + 1) if index % 2 == 0 else "" for index in range(columns)]


def weekday_labels() -> list[str]:
    return list(WEEKDAY_LABELS)
