"""Daily revenue report exports for the displayed year."""
from __future__ import annotations

import csv
import io
from html import escape
from typing import Sequence

from revenue_calendar.domain.results import DaySummary
from revenue_calendar.presentation.formatting import format_date, format_fixed, format_money, format_number


def summaries_to_rows(summaries: Sequence[DaySummary]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for item in sorted(summaries, key=lambda summary: summary.date):
        rows.append(
            {
                "date": item.date.isoformat(),
                "weekday": item.weekday,
                "revenue": format_fixed(item.total, 2),
                "orders": str(item.order_count),
                "avg_quantity": format_number(item.avg_quantity),
                "avg_unit_price": format_fixed(item.avg_unit_price, 2),
            }
        )
    return rows


def render_csv(summaries: Sequence[DaySummary]) -> bytes:
    rows = summaries_to_rows(summaries)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(rows[0].keys()) if rows else [])
    if rows:
        writer.writeheader()
        writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def render_tooltip_lines(summary: DaySummary) -> list[str]:
    return [
        summary.weekday,
        format_date(summary.date),
        f"Revenue: {format_money(summary.total)}",
        f"Orders: {summary.order_count}",
        f"Avg. qty: {format_number(summary.avg_quantity)}",
        f"Avg. price: {format_money(summary.avg_unit_price)}",
    ]


def render_html(year: int, summaries: Sequence[DaySummary]) -> str:
    rows = summaries_to_rows(summaries)
    if not rows:
        return f"<p>No revenue recorded in {year}.</p>"
    header = "".join(f"<th>{escape(col)}</th>" for col in rows[0].keys())
    body_parts = []
    for row in rows:
        body_parts.append("<tr>" + "".join(f"<td>{escape(value)}</td>" for value in row.values()) + "</tr>")
    body_html = "".join(body_parts)
    return f"<h2>Revenue {year}</h2><table><thead><tr>{header}</tr></thead><tbody>{body_html}</tbody></table>"
