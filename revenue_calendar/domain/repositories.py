"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol

from .results import LoadReport


class TransactionRepository(Protocol):
    """Provides parsed transaction records together with skipped-row diagnostics."""

    def load(self) -> LoadReport:
        ...
