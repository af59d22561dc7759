"""Daily revenue calendar heatmap toolkit."""
from revenue_calendar.application.use_cases import CalendarSession, LoadStatus
from revenue_calendar.domain.calendar_geometry import day_of_week_row, week_index_within_year
from revenue_calendar.domain.color_scale import ColorScale
from revenue_calendar.domain.navigation import Direction, NavigationState, advance, select_year
from revenue_calendar.domain.services import aggregate_daily, hourly_revenue
from revenue_calendar.infrastructure.repositories.file_repositories import FileTransactionRepository

__all__ = [
    "CalendarSession",
    "LoadStatus",
    "ColorScale",
    "Direction",
    "NavigationState",
    "advance",
    "select_year",
    "aggregate_daily",
    "hourly_revenue",
    "day_of_week_row",
    "week_index_within_year",
    "FileTransactionRepository",
]
