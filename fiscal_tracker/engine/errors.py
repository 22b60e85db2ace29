"""Typed errors raised by the engine.

Contract violations (an out-of-range fiscal index, a malformed date string)
are caller bugs and fail fast with these types. Both subclass ValueError so
callers that only care about "bad input" can catch that.
"""


class FiscalTrackerError(Exception):
    """Base class for all tracker errors."""


class FiscalIndexError(FiscalTrackerError, ValueError):
    """Raised for a fiscal-month index or calendar month outside 0..11.

    Attributes:
        value: The offending value as received.
    """

    def __init__(self, value, kind: str = "fiscal month index"):
        self.value = value
        super().__init__(f"Invalid {kind} {value!r}: must be an integer in 0..11")


class InvalidDateError(FiscalTrackerError, ValueError):
    """Raised when a value cannot be read as a YYYY-MM-DD calendar date.

    Attributes:
        value: The offending value as received.
    """

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid calendar date {value!r}: expected YYYY-MM-DD")


class MonthLockedError(FiscalTrackerError):
    """Raised when the month is chosen while it is locked to a meeting date."""

    def __init__(self, locked_month: int, meeting_start_date: str):
        self.locked_month = locked_month
        self.meeting_start_date = meeting_start_date
        super().__init__(
            f"Month is locked to meeting start date {meeting_start_date} "
            f"(fiscal month {locked_month}); clear the date to choose a month"
        )
