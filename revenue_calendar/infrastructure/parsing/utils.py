"""Shared helpers for reading transaction files into pandas frames."""
from __future__ import annotations

import hashlib
from io import BytesIO
from pathlib import Path

import pandas as pd

from revenue_calendar.exceptions import LoadFailure
from revenue_calendar.infrastructure.parsing.transactions import REQUIRED_COLUMNS

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


def ensure_bytes(source: BytesIO | Path | bytes, name: str | None = None) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, Path):
        try:
            return source.read_bytes()
        except OSError as exc:
            raise LoadFailure(name or str(source), exc.strerror or str(exc)) from exc
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def compute_file_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def source_cache_key(name: str, data: bytes | None = None) -> str:
    """Identify a source by name and, when its bytes are known, by content."""
    if data is None:
        return name
    return f"{name}:{compute_file_hash(data)}"


def is_excel(name: str) -> bool:
    return Path(name).suffix.lower() in EXCEL_SUFFIXES


def read_transactions_raw(data: bytes, name: str, delimiter: str = ",") -> pd.DataFrame:
    """Read every cell as text; numeric and date parsing happens per row."""
    if not data.strip():
        raise LoadFailure(name, "file is empty")
    try:
        if is_excel(name):
            frame = pd.read_excel(BytesIO(data), engine="openpyxl", dtype=str, keep_default_na=False)
        else:
            frame = pd.read_csv(BytesIO(data), sep=delimiter, dtype=str, keep_default_na=False)
    except Exception as exc:
        # openpyxl reports a zip that is not a workbook as KeyError, pandas as ParserError.
        raise LoadFailure(name, f"unreadable file ({type(exc).__name__}: {exc})") from exc

    frame.columns = [str(column).strip() for column in frame.columns]
    missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
    if missing:
        raise LoadFailure(name, f"missing required columns: {', '.join(missing)}")
    return frame
