"""Calendar-date parsing and formatting at the YYYY-MM-DD boundary.

Dates cross every interface as ``YYYY-MM-DD`` strings with no time of day
and no zone. Inside the engine they are ``datetime.date`` values; a
``datetime`` is truncated to its calendar date.
"""

import re
from datetime import date, datetime

from fiscal_tracker.engine.errors import InvalidDateError

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DateLike = date | datetime | str


def to_date(value: DateLike) -> date:
    """Normalize a date-like value to a ``datetime.date``.

    Raises:
        InvalidDateError: For malformed strings, impossible dates
            (e.g. 2023-02-29) and unsupported types.
    """
    # datetime is a date subclass, so check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not _ISO_DATE_RE.match(text):
            raise InvalidDateError(value)
        try:
            return date.fromisoformat(text)
        except ValueError as exc:
            raise InvalidDateError(value) from exc
    raise InvalidDateError(value)


def format_date(value: date) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
