"""Day-level calendar grid for one calendar month.

Builds the cells a monthly calendar renders: one per day, each marked when
a project's meeting range covers it. All comparisons happen on calendar
dates; a ``datetime`` is truncated to its date first, so a meeting ending
"today" covers all of today.

Calendar months are 0-based (January = 0), matching ``fiscal_calendar``.
"""

import logging
from datetime import date, timedelta
from typing import Iterable

from fiscal_tracker.engine.dates import DateLike, to_date
from fiscal_tracker.engine.errors import FiscalIndexError
from fiscal_tracker.schemas.models import DayCell, Project

logger = logging.getLogger(__name__)


def _check_calendar_month(calendar_month) -> None:
    if isinstance(calendar_month, bool) or not isinstance(calendar_month, int):
        raise FiscalIndexError(calendar_month, kind="calendar month")
    if not 0 <= calendar_month < 12:
        raise FiscalIndexError(calendar_month, kind="calendar month")


def days_in_month(calendar_month: int, calendar_year: int) -> int:
    """Number of days in a month, as "day 0 of the next month".

    Raises:
        FiscalIndexError: If ``calendar_month`` is not in 0..11.
    """
    _check_calendar_month(calendar_month)
    if calendar_month == 11:
        first_of_next = date(calendar_year + 1, 1, 1)
    else:
        first_of_next = date(calendar_year, calendar_month + 2, 1)
    return (first_of_next - timedelta(days=1)).day


def first_weekday_of_month(calendar_month: int, calendar_year: int) -> int:
    """Weekday of day 1, with 0 = Sunday .. 6 = Saturday."""
    _check_calendar_month(calendar_month)
    # date.weekday() is Monday = 0
    return (date(calendar_year, calendar_month + 1, 1).weekday() + 1) % 7


def is_date_in_range(value: DateLike, start: DateLike, end: DateLike) -> bool:
    """True when ``start <= value <= end`` at day granularity.

    Raises:
        InvalidDateError: If any argument is a malformed date string.
    """
    day = to_date(value)
    return to_date(start) <= day <= to_date(end)


def build_month_grid(
    calendar_month: int, calendar_year: int, projects: Iterable[Project],
) -> list[DayCell]:
    """Build one DayCell per day of the month, in day order.

    Projects without a complete meeting range never mark a day. Covering
    projects are attached in input order.
    """
    count = days_in_month(calendar_month, calendar_year)
    ranged = [(p, p.meeting_range) for p in projects]
    ranged = [(p, r) for p, r in ranged if r is not None]

    cells = []
    for day in range(1, count + 1):
        current = date(calendar_year, calendar_month + 1, day)
        covering = [p for p, (start, end) in ranged if start <= current <= end]
        cells.append(DayCell(
            day=day,
            date=current,
            has_event=bool(covering),
            projects=covering,
        ))

    logger.debug(
        "Built grid for %04d-%02d: %d days, %d with events",
        calendar_year, calendar_month + 1, count,
        sum(1 for c in cells if c.has_event),
    )
    return cells
