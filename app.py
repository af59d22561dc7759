"""Streamlit front-end for the revenue calendar."""
from __future__ import annotations

from io import BytesIO

import pandas as pd
import streamlit as st

from revenue_calendar import CalendarSession, Direction, FileTransactionRepository
from revenue_calendar.config import load_settings
from revenue_calendar.exceptions import LoadFailure
from revenue_calendar.infrastructure.parsing.utils import ensure_bytes, source_cache_key
from revenue_calendar.log import configure_logging
from revenue_calendar.presentation.charts import build_calendar_figure, build_sparkline_figure
from revenue_calendar.presentation.day_report import render_csv, render_html, render_tooltip_lines

DATA_SOURCE_URL = "https://www.kaggle.com/datasets/yusufdelikkaya/online-sales-dataset/"

settings = load_settings()
configure_logging(settings.log_level)

st.set_page_config(page_title="Revenue Calendar", layout="wide")
st.title("Revenue Calendar")


def open_session(data: bytes, name: str) -> CalendarSession:
    repository = FileTransactionRepository(
        BytesIO(data),
        name=name,
        delimiter=settings.delimiter,
        timestamp_formats=settings.timestamp_formats,
    )
    session = CalendarSession(repository, settings)
    session.load()
    return session


uploaded = st.file_uploader("Upload transactions", type=["csv", "xlsx"])
source_name = uploaded.name if uploaded else str(settings.data_path)

try:
    source_bytes = uploaded.getvalue() if uploaded else ensure_bytes(settings.data_path)
except LoadFailure as exc:
    st.error(str(exc))
    st.stop()

# Same-named re-exports must reload, so the cache is keyed on content.
cache_key = source_cache_key(source_name, source_bytes)
if st.session_state.get("cache_key") != cache_key:
    st.session_state["cache_key"] = cache_key
    st.session_state["session"] = None
    st.session_state["load_error"] = None
    with st.spinner("Loading transactions..."):
        try:
            st.session_state["session"] = open_session(source_bytes, source_name)
        except LoadFailure as exc:
            st.session_state["load_error"] = str(exc)

session: CalendarSession | None = st.session_state.get("session")
if session is None:
    st.error(st.session_state.get("load_error") or f"Could not load {source_name}")
    st.stop()

if session.failures:
    with st.expander(f"{len(session.failures)} rows skipped"):
        st.dataframe(
            pd.DataFrame(
                [
                    {"row": f.row_number, "kind": f.kind, "message": f.message}
                    for f in session.failures
                ]
            )
        )

col_prev, col_year, col_next = st.columns([1, 2, 1])
view = session.year_view()
with col_prev:
    if st.button("◀ Prev", disabled=not view.can_go_prev, key="btn_prev"):
        session.advance(Direction.PREV)
        st.rerun()
with col_year:
    st.subheader(str(view.year))
with col_next:
    if st.button("Next ▶", disabled=not view.can_go_next, key="btn_next"):
        session.advance(Direction.NEXT)
        st.rerun()

st.plotly_chart(build_calendar_figure(view), use_container_width=False)
st.caption(f"Data source: {DATA_SOURCE_URL}")

if view.is_empty:
    st.info(f"No revenue recorded in {view.year}.")
else:
    day_options = [cell.date for cell in view.cells]
    selected_day = st.selectbox("Day details", day_options, format_func=lambda d: d.isoformat())
    detail = session.day_detail(selected_day)
    if detail is not None:
        col_text, col_chart = st.columns([1, 2])
        with col_text:
            lines = render_tooltip_lines(detail.summary)
            st.caption(lines[0])
            st.markdown(f"**{lines[1]}**")
            for line in lines[2:]:
                st.write(line)
        with col_chart:
            st.plotly_chart(build_sparkline_figure(detail.hourly, width=300, height=100))

    summaries = session.year_summaries()
    st.download_button(
        "Download daily summary CSV",
        data=render_csv(summaries),
        file_name=f"revenue_{view.year}.csv",
        mime="text/csv",
    )
    st.download_button(
        "Download daily summary HTML",
        data=render_html(view.year, summaries).encode("utf-8"),
        file_name=f"revenue_{view.year}.html",
        mime="text/html",
    )
