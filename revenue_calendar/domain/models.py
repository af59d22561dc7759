"""Domain models for the revenue calendar.

These dataclasses capture transactions, their per-day aggregates and the
derived per-hour breakdown used for sparklines.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterator, Sequence


@dataclass(frozen=True)
class TransactionRecord:
    """A single invoice line with its revenue already computed."""

    timestamp: datetime
    quantity: float
    unit_price: float
    revenue: float

    @classmethod
    def from_raw(cls, timestamp: datetime, quantity: float, unit_price: float, discount: float) -> "TransactionRecord":
        return cls(
            timestamp=timestamp,
            quantity=quantity,
            unit_price=unit_price,
            revenue=quantity * unit_price * (1 - discount),
        )

    @property
    def day(self) -> date:
        return self.timestamp.date()


@dataclass(frozen=True)
class DayAggregate:
    """Revenue total and raw records for one calendar day."""

    date: date
    total: float
    records: tuple[TransactionRecord, ...]

    def __post_init__(self) -> None:
        if not self.records:
            raise ValueError(f"DayAggregate for {self.date} needs at least one record")

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def order_count(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class HourlyBucket:
    hour: int
    value: float
    minute: int = 0


@dataclass(frozen=True)
class Dataset:
    """Every day aggregate across all years, built once at load time."""

    days: tuple[DayAggregate, ...] = field(default_factory=tuple)
    _by_date: dict[date, DayAggregate] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[date, DayAggregate] = {}
        for aggregate in self.days:
            index.setdefault(aggregate.date, aggregate)
        object.__setattr__(self, "_by_date", index)

    def __iter__(self) -> Iterator[DayAggregate]:
        return iter(self.days)

    def __len__(self) -> int:
        return len(self.days)

    def years(self) -> list[int]:
        return sorted({day.year for day in self.days})

    def max_total(self) -> float:
        return max((day.total for day in self.days), default=0.0)

    def get(self, day: date) -> DayAggregate | None:
        return self._by_date.get(day)

    def all_records(self) -> Sequence[TransactionRecord]:
        return tuple(record for day in self.days for record in day.records)
