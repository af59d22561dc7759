import zipfile
from datetime import date, datetime
from pathlib import Path

import pytest

from revenue_calendar.application.use_cases import CalendarSession, LoadStatus
from revenue_calendar.config import Settings
from revenue_calendar.domain.models import TransactionRecord
from revenue_calendar.domain.navigation import Direction
from revenue_calendar.domain.results import LoadReport, RowParseFailure
from revenue_calendar.exceptions import LoadFailure, SessionNotReady
from revenue_calendar.infrastructure.repositories.file_repositories import FileTransactionRepository


class StaticRepository:
    def __init__(self, records, failures=()) -> None:
        self.records = records
        self.failures = failures
        self.calls = 0

    def load(self) -> LoadReport:
        self.calls += 1
        return LoadReport(source="static", records=tuple(self.records), failures=tuple(self.failures))


class BrokenRepository:
    def load(self) -> LoadReport:
        raise LoadFailure("broken.csv", "disk on fire")


class CrashingRepository:
    def load(self) -> LoadReport:
        raise KeyError("[Content_Types].xml")


def make_record(stamp: datetime, revenue: float, quantity: float = 1.0) -> TransactionRecord:
    return TransactionRecord(timestamp=stamp, quantity=quantity, unit_price=revenue / quantity, revenue=revenue)


def make_session(records=None, failures=()) -> CalendarSession:
    if records is None:
        records = [
            make_record(datetime(2022, 6, 25, 9), 20.0, quantity=2.0),
            make_record(datetime(2022, 6, 25, 9), 4.5),
            make_record(datetime(2022, 1, 3, 14), 100.0),
            make_record(datetime(2023, 3, 1, 8), 50.0),
        ]
    return CalendarSession(StaticRepository(records, failures), Settings())


def test_queries_refused_before_load():
    session = make_session()

    assert session.status is LoadStatus.UNINITIALIZED
    with pytest.raises(SessionNotReady):
        session.year_view()
    with pytest.raises(SessionNotReady):
        session.advance(Direction.NEXT)
    with pytest.raises(SessionNotReady):
        _ = session.dataset


def test_load_builds_dataset_and_scale():
    failure = RowParseFailure(row_number=7, kind="invalid_number", message="Quantity 'x' is not a number")
    session = make_session(failures=[failure])

    dataset = session.load()

    assert session.status is LoadStatus.READY
    assert len(dataset) == 3
    assert session.color_scale.domain() == (0.0, 100.0)
    assert session.current_year == 2022
    assert list(session.failures) == [failure]


def test_load_twice_reuses_dataset():
    repository = StaticRepository([make_record(datetime(2022, 1, 1, 0), 1.0)])
    session = CalendarSession(repository, Settings())

    first = session.load()
    second = session.load()

    assert first is second
    assert repository.calls == 1


def test_failed_load_sets_failed_status():
    session = CalendarSession(BrokenRepository(), Settings())

    with pytest.raises(LoadFailure):
        session.load()

    assert session.status is LoadStatus.FAILED
    assert session.error is not None
    with pytest.raises(SessionNotReady):
        session.year_view()


def test_year_view_positions_and_colors_cells():
    session = make_session()
    session.load()

    view = session.year_view()

    assert view.year == 2022
    assert [cell.date for cell in view.cells] == [date(2022, 1, 3), date(2022, 6, 25)]
    jan3, jun25 = view.cells
    assert (jan3.column, jan3.row) == (1, 0)
    assert (jun25.column, jun25.row) == (25, 5)
    assert jan3.color == "#2fff00"
    assert jun25.total == pytest.approx(24.5)
    assert jun25.order_count == 2
    assert len(view.legend) == 5
    assert len(view.week_labels) == 53
    assert view.can_go_prev and view.can_go_next


def test_color_domain_fixed_across_years():
    session = make_session()
    session.load()
    domain_before = session.color_scale.domain()

    session.advance(Direction.NEXT)
    view = session.year_view()

    assert view.year == 2023
    assert session.color_scale.domain() == domain_before
    assert view.cells[0].color == session.color_scale.map(50.0)


def test_empty_year_renders_empty_view():
    session = make_session()
    session.load()

    session.advance(Direction.PREV)
    view = session.year_view()

    assert view.year == 2021
    assert view.is_empty
    assert view.total == 0
    assert len(view.legend) == 5


def test_navigation_is_clamped():
    session = make_session()
    session.load()

    for _ in range(10):
        session.advance(Direction.NEXT)

    assert session.current_year == 2025
    assert not session.year_view().can_go_next


def test_day_detail_has_summary_and_hourly_buckets():
    session = make_session()
    session.load()

    detail = session.day_detail(date(2022, 6, 25))

    assert detail is not None
    assert detail.summary.weekday == "Saturday"
    assert detail.summary.order_count == 2
    assert detail.summary.avg_quantity == pytest.approx(1.5)
    assert detail.summary.avg_unit_price == pytest.approx(7.25)
    assert len(detail.hourly) == 24
    assert detail.hourly[9].value == pytest.approx(24.5)
    assert session.day_detail(date(2022, 6, 24)) is None


def test_empty_dataset_is_ready_with_degenerate_scale():
    session = make_session(records=[])
    session.load()

    assert session.color_scale.is_degenerate()
    assert session.year_view().is_empty


def test_year_summaries():
    session = make_session()
    session.load()

    summaries = session.year_summaries(2022)

    assert {s.date for s in summaries} == {date(2022, 6, 25), date(2022, 1, 3)}


def test_session_over_csv_file(tmp_path: Path):
    path = tmp_path / "data.csv"
    path.write_text(
        "InvoiceDate,Quantity,UnitPrice,Discount\n"
        "2022-06-25 09:00,2,10,0\n"
        "2022-06-25 09:00,1,5,0.1\n"
        "oops,1,1,0\n",
        encoding="utf-8",
    )
    session = CalendarSession(FileTransactionRepository(path), Settings())

    session.load()

    assert session.dataset.days[0].total == pytest.approx(24.5)
    assert len(session.failures) == 1


def test_refund_only_data_loads_with_flat_scale():
    session = make_session(records=[make_record(datetime(2022, 3, 4, 10), -20.0)])

    session.load()

    assert session.status is LoadStatus.READY
    assert session.color_scale.domain() == (0.0, 0.0)
    cell = session.year_view().cells[0]
    assert cell.total == pytest.approx(-20.0)
    assert cell.color == Settings().color_low


def test_unexpected_repository_error_sets_failed_status():
    session = CalendarSession(CrashingRepository(), Settings())

    with pytest.raises(KeyError):
        session.load()

    assert session.status is LoadStatus.FAILED
    with pytest.raises(SessionNotReady):
        session.year_view()


def test_session_over_corrupt_workbook_fails(tmp_path: Path):
    path = tmp_path / "bad.xlsx"
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("hello.txt", "not a workbook")
    session = CalendarSession(FileTransactionRepository(path), Settings())

    with pytest.raises(LoadFailure):
        session.load()

    assert session.status is LoadStatus.FAILED
    assert session.error is not None
