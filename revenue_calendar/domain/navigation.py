"""Year selection and bounded prev/next navigation."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .models import Dataset, DayAggregate


class Direction(Enum):
    PREV = -1
    NEXT = 1


@dataclass(frozen=True)
class NavigationState:
    current_year: int
    min_year: int
    max_year: int

    def __post_init__(self) -> None:
        if not self.min_year <= self.current_year <= self.max_year:
            raise ValueError(
                f"current_year {self.current_year} outside [{self.min_year}, {self.max_year}]"
            )

    def can_go(self, direction: Direction) -> bool:
        return self.min_year <= self.current_year + direction.value <= self.max_year


def advance(state: NavigationState, direction: Direction) -> NavigationState:
    """Move one year back or forward; stays put at either bound."""
    if not state.can_go(direction):
        return state
    return replace(state, current_year=state.current_year + direction.value)


def select_year(dataset: Dataset, year: int) -> list[DayAggregate]:
    return [day for day in dataset if day.year == year]
