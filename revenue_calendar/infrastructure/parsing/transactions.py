"""Transaction row parser producing canonical records."""
from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Iterable, Mapping, Sequence

from revenue_calendar.domain.models import TransactionRecord
from revenue_calendar.domain.results import LoadReport, RowParseFailure
from revenue_calendar.exceptions import InvalidNumber, InvalidTimestamp, MissingField, RowParseError

logger = logging.getLogger(__name__)

DATE_COLUMN = "InvoiceDate"
QUANTITY_COLUMN = "Quantity"
UNIT_PRICE_COLUMN = "UnitPrice"
DISCOUNT_COLUMN = "Discount"

REQUIRED_COLUMNS = (DATE_COLUMN, QUANTITY_COLUMN, UNIT_PRICE_COLUMN, DISCOUNT_COLUMN)

DEFAULT_TIMESTAMP_FORMATS = ("%Y-%m-%d %H:%M", "%Y-%m-%d %H:%M:%S")


def _field(row: Mapping[str, object], column: str) -> str:
    if column not in row or row[column] is None:
        raise MissingField(column, None, f"{column} is missing")
    return str(row[column]).strip()


def parse_timestamp(value: str, formats: Sequence[str] = DEFAULT_TIMESTAMP_FORMATS) -> datetime:
    text = str(value).strip()
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise InvalidTimestamp(DATE_COLUMN, value, f"{DATE_COLUMN} {value!r} does not match {formats[0]!r}")


def parse_number(value: str, column: str) -> float:
    text = str(value).strip()
    if not text:
        raise InvalidNumber(column, value, f"{column} is blank")
    try:
        number = float(text)
    except ValueError as exc:
        raise InvalidNumber(column, value, f"{column} {value!r} is not a number") from exc
    if not math.isfinite(number):
        raise InvalidNumber(column, value, f"{column} {value!r} is not a finite number")
    return number


def parse_row(row: Mapping[str, object], formats: Sequence[str] = DEFAULT_TIMESTAMP_FORMATS) -> TransactionRecord:
    timestamp = parse_timestamp(_field(row, DATE_COLUMN), formats)
    quantity = parse_number(_field(row, QUANTITY_COLUMN), QUANTITY_COLUMN)
    unit_price = parse_number(_field(row, UNIT_PRICE_COLUMN), UNIT_PRICE_COLUMN)
    discount = parse_number(_field(row, DISCOUNT_COLUMN), DISCOUNT_COLUMN)
    return TransactionRecord.from_raw(timestamp, quantity, unit_price, discount)


def parse_rows(
    rows: Iterable[Mapping[str, object]],
    source: str = "<memory>",
    formats: Sequence[str] = DEFAULT_TIMESTAMP_FORMATS,
) -> LoadReport:
    """Parse every row, skipping and recording the malformed ones."""
    records: list[TransactionRecord] = []
    failures: list[RowParseFailure] = []
    for row_number, row in enumerate(rows, start=1):
        try:
            records.append(parse_row(row, formats))
        except RowParseError as exc:
            logger.warning("Skipping row %d of %s: %s", row_number, source, exc)
            failures.append(
                RowParseFailure(
                    row_number=row_number,
                    kind=exc.kind,
                    message=str(exc),
                    raw={column: str(row.get(column, "")) for column in REQUIRED_COLUMNS},
                )
            )

    if failures:
        logger.warning("Skipped %d of %d rows in %s", len(failures), len(records) + len(failures), source)
    logger.info("Parsed %d transactions from %s", len(records), source)
    return LoadReport(source=source, records=tuple(records), failures=tuple(failures))
