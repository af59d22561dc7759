"""Application-level DTOs handed to the presentation layer."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from revenue_calendar.domain.models import HourlyBucket
from revenue_calendar.domain.results import DaySummary


@dataclass(slots=True, frozen=True)
class CalendarCell:
    date: date
    column: int
    row: int
    total: float
    color: str
    order_count: int


@dataclass(slots=True, frozen=True)
class YearView:
    year: int
    cells: Sequence[CalendarCell]
    legend: Sequence[tuple[float, str]]
    week_labels: Sequence[str]
    weekday_labels: Sequence[str]
    can_go_prev: bool
    can_go_next: bool
    week_columns: int = 53

    @property
    def is_empty(self) -> bool:
        return not self.cells

    @property
    def total(self) -> float:
        return sum(cell.total for cell in self.cells)


@dataclass(slots=True, frozen=True)
class DayDetail:
    summary: DaySummary
    hourly: Sequence[HourlyBucket] = field(default_factory=tuple)
