"""Domain-level results produced while loading and summarising transactions."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from .models import DayAggregate, TransactionRecord

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass(frozen=True)
class RowParseFailure:
    row_number: int
    kind: str
    message: str
    raw: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class LoadReport:
    source: str
    records: Sequence[TransactionRecord] = field(default_factory=tuple)
    failures: Sequence[RowParseFailure] = field(default_factory=tuple)

    def has_failures(self) -> bool:
        return bool(self.failures)

    def failure_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for failure in self.failures:
            counts[failure.kind] = counts.get(failure.kind, 0) + 1
        return counts


@dataclass(frozen=True)
class DaySummary:
    """Tooltip figures for one day."""

    date: date
    weekday: str
    total: float
    order_count: int
    avg_quantity: float
    avg_unit_price: float

    @classmethod
    def from_aggregate(cls, day: DayAggregate) -> "DaySummary":
        count = len(day.records)
        return cls(
            date=day.date,
            weekday=WEEKDAY_NAMES[day.date.weekday()],
            total=day.total,
            order_count=count,
            avg_quantity=sum(r.quantity for r in day.records) / count,
            avg_unit_price=sum(r.unit_price for r in day.records) / count,
        )
