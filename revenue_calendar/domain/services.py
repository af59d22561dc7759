"""Domain services aggregating transactions into daily and hourly revenue."""
from __future__ import annotations

import math
from collections import defaultdict
from datetime import date
from typing import Iterable, Sequence

from .models import Dataset, DayAggregate, HourlyBucket, TransactionRecord

MINUTES_PER_DAY = 24 * 60
HOURS_PER_DAY = 24


def aggregate_daily(records: Iterable[TransactionRecord]) -> Dataset:
    """Partition records by calendar day and sum their revenue.

    Days keep the order in which they first appear and records keep their
    input order inside each day.
    """
    grouped: dict[date, list[TransactionRecord]] = defaultdict(list)
    for record in records:
        grouped[record.day].append(record)

    days = tuple(
        DayAggregate(date=day, total=math.fsum(r.revenue for r in day_records), records=tuple(day_records))
        for day, day_records in grouped.items()
    )
    return Dataset(days=days)


def hourly_revenue(records: Sequence[TransactionRecord], bucket_count: int = HOURS_PER_DAY) -> list[HourlyBucket]:
    """Sum revenue into ``bucket_count`` equal slices of the day.

    Timestamps that do not sit on a slice boundary are truncated into the
    slice they fall in, so with the default 24 slices 09:45 counts as hour 9.
    """
    if bucket_count <= 0 or MINUTES_PER_DAY % bucket_count:
        raise ValueError(f"bucket_count must divide {MINUTES_PER_DAY}, got {bucket_count}")
    width = MINUTES_PER_DAY // bucket_count

    values = [0.0] * bucket_count
    for record in records:
        minute_of_day = record.timestamp.hour * 60 + record.timestamp.minute
        values[minute_of_day // width] += record.revenue

    buckets: list[HourlyBucket] = []
    for index, value in enumerate(values):
        start = index * width
        buckets.append(HourlyBucket(hour=start // 60, value=value, minute=start % 60))
    return buckets
