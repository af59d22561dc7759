from datetime import datetime

import pytest

from revenue_calendar.domain.models import TransactionRecord
from revenue_calendar.domain.navigation import Direction, NavigationState, advance, select_year
from revenue_calendar.domain.services import aggregate_daily


def make_state(year: int) -> NavigationState:
    return NavigationState(current_year=year, min_year=2020, max_year=2025)


def make_dataset():
    stamps = [datetime(2022, 6, 25, 9), datetime(2022, 6, 26, 9), datetime(2023, 1, 2, 9)]
    return aggregate_daily(
        [TransactionRecord(timestamp=s, quantity=1.0, unit_price=1.0, revenue=1.0) for s in stamps]
    )


def test_advance_moves_one_year():
    assert advance(make_state(2022), Direction.NEXT).current_year == 2023
    assert advance(make_state(2022), Direction.PREV).current_year == 2021


def test_prev_at_min_year_is_noop():
    state = make_state(2020)
    assert advance(state, Direction.PREV) is state


def test_next_at_max_year_is_noop():
    state = make_state(2025)
    assert advance(state, Direction.NEXT) is state


def test_no_wraparound_after_repeated_next():
    state = make_state(2024)
    for _ in range(5):
        state = advance(state, Direction.NEXT)
    assert state.current_year == 2025


def test_can_go_reflects_bounds():
    assert not make_state(2020).can_go(Direction.PREV)
    assert make_state(2020).can_go(Direction.NEXT)
    assert not make_state(2025).can_go(Direction.NEXT)


def test_state_outside_range_rejected():
    with pytest.raises(ValueError):
        NavigationState(current_year=2030, min_year=2020, max_year=2025)


def test_select_year_filters_days():
    dataset = make_dataset()

    days = select_year(dataset, 2022)

    assert len(days) == 2
    assert all(day.year == 2022 for day in days)


def test_select_year_without_data_is_empty():
    only_2022 = aggregate_daily(
        [TransactionRecord(timestamp=datetime(2022, 6, 25, 9), quantity=1.0, unit_price=1.0, revenue=1.0)]
    )

    assert select_year(only_2022, 2021) == []
