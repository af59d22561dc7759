"""Central configuration for the revenue calendar package."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

from revenue_calendar.domain.color_scale import parse_color
from revenue_calendar.exceptions import ConfigurationError
from revenue_calendar.infrastructure.parsing.transactions import DEFAULT_TIMESTAMP_FORMATS

MINUTES_PER_DAY = 24 * 60

ENV_PREFIX = "REVENUE_CALENDAR_"


@dataclass(slots=True, frozen=True)
class Settings:
    min_year: int = 2020
    max_year: int = 2025
    default_year: int = 2022
    hourly_buckets: int = 24
    week_columns: int = 53
    color_low: str = "#1c1c1c"
    color_high: str = "#2fff00"
    legend_steps: int = 5
    delimiter: str = ","
    timestamp_formats: tuple[str, ...] = DEFAULT_TIMESTAMP_FORMATS
    data_path: Path = Path("data.csv")
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.min_year > self.max_year:
            raise ConfigurationError(f"min_year {self.min_year} is after max_year {self.max_year}")
        if not self.min_year <= self.default_year <= self.max_year:
            raise ConfigurationError(
                f"default_year {self.default_year} outside [{self.min_year}, {self.max_year}]"
            )
        if self.hourly_buckets <= 0 or MINUTES_PER_DAY % self.hourly_buckets:
            raise ConfigurationError(f"hourly_buckets must divide {MINUTES_PER_DAY}, got {self.hourly_buckets}")
        if self.week_columns < 53:
            raise ConfigurationError(f"week_columns must be at least 53, got {self.week_columns}")
        if self.legend_steps < 2:
            raise ConfigurationError(f"legend_steps must be at least 2, got {self.legend_steps}")
        if not self.timestamp_formats:
            raise ConfigurationError("at least one timestamp format is required")
        for color in (self.color_low, self.color_high):
            try:
                parse_color(color)
            except ValueError as exc:
                raise ConfigurationError(str(exc)) from exc

    def with_overrides(self, **changes: Any) -> "Settings":
        return replace(self, **{key: value for key, value in changes.items() if value is not None})


_INT_FIELDS = ("min_year", "max_year", "default_year", "hourly_buckets", "week_columns", "legend_steps")
_STR_FIELDS = ("color_low", "color_high", "delimiter", "log_level")


def load_settings(environ: Mapping[str, str] | None = None, base: Settings | None = None) -> Settings:
    """Build settings from ``REVENUE_CALENDAR_*`` environment variables on top of ``base``."""
    env = os.environ if environ is None else environ
    changes: dict[str, Any] = {}
    for name in _INT_FIELDS:
        raw = env.get(ENV_PREFIX + name.upper())
        if raw is None or not raw.strip():
            continue
        try:
            changes[name] = int(raw)
        except ValueError as exc:
            raise ConfigurationError(f"{ENV_PREFIX}{name.upper()} must be an integer, got {raw!r}") from exc
    for name in _STR_FIELDS:
        raw = env.get(ENV_PREFIX + name.upper())
        if raw:
            changes[name] = raw.strip()
    data_path = env.get(ENV_PREFIX + "DATA_PATH")
    if data_path:
        changes["data_path"] = Path(data_path)
    return (base or Settings()).with_overrides(**changes)


SETTINGS = Settings()
