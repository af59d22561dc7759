"""Exception hierarchy for the revenue calendar package."""
from __future__ import annotations


class RevenueCalendarError(Exception):
    """Base class for every error raised by the package."""


class LoadFailure(RevenueCalendarError):
    """The transaction source could not be read at all."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Could not load transactions from {source}: {reason}")
        self.source = source
        self.reason = reason


class RowParseError(RevenueCalendarError):
    """A single transaction row is malformed."""

    kind = "invalid_row"

    def __init__(self, field: str, value: object, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class InvalidTimestamp(RowParseError):
    kind = "invalid_timestamp"


class InvalidNumber(RowParseError):
    kind = "invalid_number"


class MissingField(RowParseError):
    kind = "missing_field"


class ConfigurationError(RevenueCalendarError):
    """Settings are inconsistent."""


class SessionNotReady(RevenueCalendarError):
    """A calendar session was queried before its data finished loading."""
