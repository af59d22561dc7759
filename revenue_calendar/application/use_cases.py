"""Application services orchestrating loading and browsing the revenue calendar."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Sequence

from revenue_calendar.application.dto import CalendarCell, DayDetail, YearView
from revenue_calendar.config import SETTINGS, Settings
from revenue_calendar.domain.calendar_geometry import grid_position, week_labels, weekday_labels
from revenue_calendar.domain.color_scale import ColorScale
from revenue_calendar.domain.models import Dataset
from revenue_calendar.domain.navigation import Direction, NavigationState, advance, select_year
from revenue_calendar.domain.repositories import TransactionRepository
from revenue_calendar.domain.results import DaySummary, RowParseFailure
from revenue_calendar.domain.services import aggregate_daily, hourly_revenue
from revenue_calendar.exceptions import LoadFailure, SessionNotReady

logger = logging.getLogger(__name__)


class LoadStatus(Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class LoadedCalendar:
    dataset: Dataset
    color_scale: ColorScale
    failures: Sequence[RowParseFailure]


class CalendarSession:
    """Owns the loaded dataset, its color scale and the displayed year.

    Nothing can be queried until ``load()`` has completed successfully.
    """

    def __init__(self, repository: TransactionRepository, settings: Settings | None = None) -> None:
        self._repository = repository
        self._settings = settings or SETTINGS
        self._status = LoadStatus.UNINITIALIZED
        self._loaded: LoadedCalendar | None = None
        self._navigation: NavigationState | None = None
        self._error: LoadFailure | None = None

    @property
    def status(self) -> LoadStatus:
        return self._status

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def error(self) -> LoadFailure | None:
        return self._error

    def _set_status(self, status: LoadStatus) -> None:
        logger.debug("Session %s -> %s", self._status.value, status.value)
        self._status = status

    def load(self) -> Dataset:
        if self._status is LoadStatus.READY and self._loaded is not None:
            return self._loaded.dataset

        self._set_status(LoadStatus.LOADING)
        settings = self._settings
        try:
            report = self._repository.load()
            dataset = aggregate_daily(report.records)
            color_scale = ColorScale.from_dataset(dataset, settings.color_low, settings.color_high)
        except LoadFailure as exc:
            logger.error("%s", exc)
            self._error = exc
            self._set_status(LoadStatus.FAILED)
            raise
        except Exception:
            logger.exception("Unexpected error while loading transactions")
            self._set_status(LoadStatus.FAILED)
            raise

        self._loaded = LoadedCalendar(dataset=dataset, color_scale=color_scale, failures=tuple(report.failures))
        self._navigation = NavigationState(
            current_year=settings.default_year,
            min_year=settings.min_year,
            max_year=settings.max_year,
        )
        self._error = None
        self._set_status(LoadStatus.READY)

        logger.info(
            "Loaded %d days from %d transactions (%d rows skipped); max daily revenue %.2f",
            len(dataset),
            len(report.records),
            len(report.failures),
            color_scale.domain_max,
        )
        return dataset

    def _require_ready(self) -> LoadedCalendar:
        if self._status is not LoadStatus.READY or self._loaded is None:
            raise SessionNotReady(f"Calendar data is not available (status: {self._status.value})")
        return self._loaded

    @property
    def dataset(self) -> Dataset:
        return self._require_ready().dataset

    @property
    def color_scale(self) -> ColorScale:
        return self._require_ready().color_scale

    @property
    def failures(self) -> Sequence[RowParseFailure]:
        return self._require_ready().failures

    @property
    def navigation(self) -> NavigationState:
        self._require_ready()
        if self._navigation is None:
            raise SessionNotReady("Navigation has not been initialised")
        return self._navigation

    @property
    def current_year(self) -> int:
        return self.navigation.current_year

    def advance(self, direction: Direction) -> int:
        self._navigation = advance(self.navigation, direction)
        return self._navigation.current_year

    def year_view(self, year: int | None = None) -> YearView:
        loaded = self._require_ready()
        navigation = self.navigation
        year = navigation.current_year if year is None else year

        cells: list[CalendarCell] = []
        for day in select_year(loaded.dataset, year):
            column, row = grid_position(day.date)
            cells.append(
                CalendarCell(
                    date=day.date,
                    column=column,
                    row=row,
                    total=day.total,
                    color=loaded.color_scale.map(day.total),
                    order_count=day.order_count,
                )
            )
        cells.sort(key=lambda cell: cell.date)

        # A leap year starting on Sunday spills its last day into a 54th column.
        columns = max([self._settings.week_columns] + [cell.column + 1 for cell in cells])
        return YearView(
            year=year,
            cells=tuple(cells),
            legend=tuple(loaded.color_scale.legend(self._settings.legend_steps)),
            week_labels=tuple(week_labels(columns)),
            weekday_labels=tuple(weekday_labels()),
            can_go_prev=navigation.can_go(Direction.PREV),
            can_go_next=navigation.can_go(Direction.NEXT),
            week_columns=columns,
        )

    def day_detail(self, day: date) -> DayDetail | None:
        aggregate = self.dataset.get(day)
        if aggregate is None:
            return None
        return DayDetail(
            summary=DaySummary.from_aggregate(aggregate),
            hourly=tuple(hourly_revenue(aggregate.records, self._settings.hourly_buckets)),
        )

    def year_summaries(self, year: int | None = None) -> list[DaySummary]:
        year = self.current_year if year is None else year
        return [DaySummary.from_aggregate(day) for day in select_year(self.dataset, year)]
