"""Command-line entrypoint for the revenue calendar."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from revenue_calendar.application.use_cases import CalendarSession
from revenue_calendar.config import load_settings
from revenue_calendar.exceptions import ConfigurationError, LoadFailure
from revenue_calendar.infrastructure.repositories.file_repositories import FileTransactionRepository
from revenue_calendar.log import configure_logging
from revenue_calendar.presentation.day_report import render_csv
from revenue_calendar.presentation.formatting import format_date, format_money


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarise daily revenue from a transaction log")
    parser.add_argument("source", type=str, nargs="?", help="Path to the transaction CSV or .xlsx file")
    parser.add_argument("--year", type=int, help="Year to summarise (defaults to the configured default year)")
    parser.add_argument("--export-csv", type=str, help="Write the year's daily summary to this CSV path")
    parser.add_argument("--top", type=int, default=5, help="Number of best days to list")
    parser.add_argument("--log-level", type=str, help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        settings = load_settings().with_overrides(
            log_level=args.log_level,
            data_path=Path(args.source) if args.source else None,
        )
        if args.year is not None:
            settings = settings.with_overrides(
                default_year=args.year,
                min_year=min(settings.min_year, args.year),
                max_year=max(settings.max_year, args.year),
            )
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    configure_logging(settings.log_level)

    repository = FileTransactionRepository(
        settings.data_path,
        delimiter=settings.delimiter,
        timestamp_formats=settings.timestamp_formats,
    )
    session = CalendarSession(repository, settings)
    try:
        session.load()
    except LoadFailure as exc:
        print(f"Load failed: {exc}", file=sys.stderr)
        return 1

    dataset = session.dataset
    low, high = session.color_scale.domain()
    print("Load Summary")
    print("============")
    print(f"Days with revenue: {len(dataset)}")
    print(f"Transactions: {sum(day.order_count for day in dataset)}")
    print(f"Skipped rows: {len(session.failures)}")
    print(f"Years: {', '.join(str(year) for year in dataset.years()) or '-'}")
    print(f"Color domain: {format_money(low)} - {format_money(high)}")

    for failure in session.failures:
        print(f"- row {failure.row_number}: {failure.kind}: {failure.message}")

    view = session.year_view()
    print(f"\nYear {view.year}")
    print("=========")
    if view.is_empty:
        print("No revenue recorded.")
    else:
        print(f"Days: {len(view.cells)}")
        print(f"Revenue: {format_money(view.total)}")
        best = sorted(view.cells, key=lambda cell: cell.total, reverse=True)[: max(args.top, 0)]
        for cell in best:
            print(f"- {format_date(cell.date)} (week {cell.column + 1}): {format_money(cell.total)}")

    if args.export_csv:
        Path(args.export_csv).write_bytes(render_csv(session.year_summaries()))
        print(f"\nWrote {args.export_csv}")

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
