"""File-backed repositories for transaction data."""
from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Sequence

from revenue_calendar.domain.repositories import TransactionRepository
from revenue_calendar.domain.results import LoadReport
from revenue_calendar.infrastructure.parsing.transactions import (
    DEFAULT_TIMESTAMP_FORMATS,
    REQUIRED_COLUMNS,
    parse_rows,
)
from revenue_calendar.infrastructure.parsing.utils import (
    compute_file_hash,
    ensure_bytes,
    read_transactions_raw,
)

logger = logging.getLogger(__name__)


class FileTransactionRepository(TransactionRepository):
    """Reads a CSV (or .xlsx) transaction log.

    The bytes are read lazily on ``load()`` so a missing file surfaces as a
    ``LoadFailure`` during the session's load phase.
    """

    def __init__(
        self,
        source: BytesIO | Path | bytes,
        name: str | None = None,
        delimiter: str = ",",
        timestamp_formats: Sequence[str] = DEFAULT_TIMESTAMP_FORMATS,
    ) -> None:
        self._source = source
        self._name = name or (str(source) if isinstance(source, Path) else "<upload>")
        self._delimiter = delimiter
        self._formats = tuple(timestamp_formats)

    @property
    def name(self) -> str:
        return self._name

    def load(self) -> LoadReport:
        data = ensure_bytes(self._source, self._name)
        logger.debug("Read %d bytes from %s (sha256 %s)", len(data), self._name, compute_file_hash(data)[:12])
        frame = read_transactions_raw(data, self._name, delimiter=self._delimiter)
        rows = frame[list(REQUIRED_COLUMNS)].to_dict(orient="records")
        return parse_rows(rows, source=self._name, formats=self._formats)
