"""Plotly figure builders for the calendar grid and the intraday sparkline."""
from __future__ import annotations

from typing import Sequence

import plotly.graph_objects as go

from revenue_calendar.application.dto import YearView
from revenue_calendar.domain.models import HourlyBucket
from revenue_calendar.presentation.formatting import format_date, format_day_name, format_money

CELL_SIZE = 15
SPARKLINE_FILL = "rgba(78, 16, 165, 0.4)"
LEGEND_ROW = 8.5


def build_calendar_figure(view: YearView, title: str = "Revenue Calendar") -> go.Figure:
    cells = list(view.cells)
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=[cell.column for cell in cells],
            y=[cell.row for cell in cells],
            mode="markers",
            marker=dict(symbol="square", size=CELL_SIZE - 2, color=[cell.color for cell in cells]),
            customdata=[
                [format_day_name(cell.date), format_date(cell.date), format_money(cell.total), cell.order_count]
                for cell in cells
            ],
            hovertemplate=(
                "%{customdata[0]}<br><b>%{customdata[1]}</b><br>"
                "Revenue: %{customdata[2]}<br>Orders: %{customdata[3]}<extra></extra>"
            ),
            name=str(view.year),
            showlegend=False,
        )
    )

    legend = list(view.legend)
    fig.add_trace(
        go.Scatter(
            x=[view.week_columns - len(legend) + i for i in range(len(legend))],
            y=[LEGEND_ROW] * len(legend),
            mode="markers",
            marker=dict(symbol="square", size=CELL_SIZE, color=[color for _, color in legend]),
            hovertemplate=[f"{format_money(value)}<extra></extra>" for value, _ in legend],
            showlegend=False,
        )
    )
    fig.add_annotation(x=view.week_columns - len(legend) - 1, y=LEGEND_ROW, text="Less", showarrow=False, xanchor="right")
    fig.add_annotation(x=view.week_columns, y=LEGEND_ROW, text="More", showarrow=False, xanchor="left")

    fig.update_xaxes(
        tickmode="array",
        tickvals=list(range(view.week_columns)),
        ticktext=list(view.week_labels),
        side="top",
        showgrid=False,
        zeroline=False,
        range=[-1, view.week_columns + 1],
    )
    fig.update_yaxes(
        tickmode="array",
        tickvals=list(range(len(view.weekday_labels))),
        ticktext=list(view.weekday_labels),
        autorange="reversed",
        showgrid=False,
        zeroline=False,
    )
    fig.update_layout(
        title=f"{title} {view.year}",
        height=CELL_SIZE * 7 + 180,
        width=CELL_SIZE * view.week_columns + 160,
        plot_bgcolor="white",
        margin=dict(l=40, r=20, t=80, b=40),
    )
    return fig


def build_sparkline_figure(buckets: Sequence[HourlyBucket], width: int = 150, height: int = 50) -> go.Figure:
    fig = go.Figure(
        go.Scatter(
            x=[bucket.hour + bucket.minute / 60 for bucket in buckets],
            y=[bucket.value for bucket in buckets],
            mode="lines",
            fill="tozeroy",
            fillcolor=SPARKLINE_FILL,
            line=dict(color="#000000", width=1),
            hovertemplate="%{x:.0f}:00 %{y:$.2f}<extra></extra>",
        )
    )
    fig.update_xaxes(visible=False, range=[0, 23])
    fig.update_yaxes(visible=False, rangemode="tozero")
    fig.update_layout(
        width=width,
        height=height,
        margin=dict(l=0, r=0, t=5, b=5),
        showlegend=False,
        plot_bgcolor="rgba(0,0,0,0)",
    )
    return fig
