"""Date-preserving rescheduling of a project's meeting range.

When a project moves to another fiscal month (edited, or dropped on a
different month cell), its meeting range follows it into the new month
while keeping the day-of-month the user chose:

    2025-10-05..2025-10-07 moved to March -> 2026-03-05..2026-03-07

Each endpoint is clamped independently to the target month's length, so a
meeting on the 31st moved into February lands on the 28th (or 29th). When
both endpoints exceed the month, the range collapses to the last day.

A range that spanned a month boundary (Oct 30 - Nov 2) maps to an
inverted pair (Jan 30 - Jan 2). ``reschedule`` reports that as is;
``move_project`` keeps the start day and ends the range on the last day of
the target month so the moved project stays valid.

Rescheduling runs inside an interactive gesture, so it never raises:
any failure is logged and the original dates are returned unchanged.
"""

import logging
from datetime import date
from typing import NamedTuple, Optional

from fiscal_tracker.engine.dates import format_date, to_date
from fiscal_tracker.engine.day_grid import days_in_month
from fiscal_tracker.engine.fiscal_calendar import fiscal_month_to_calendar, validate_fiscal_index
from fiscal_tracker.schemas.models import FiscalYear, Project

logger = logging.getLogger(__name__)


class RescheduleResult(NamedTuple):
    """New meeting range as YYYY-MM-DD strings (both None when absent)."""

    start: Optional[str]
    end: Optional[str]


def reschedule(
    old_start: Optional[str],
    old_end: Optional[str],
    new_fiscal_month: int,
    fiscal_year: FiscalYear,
) -> RescheduleResult:
    """Move a meeting range into ``new_fiscal_month`` of ``fiscal_year``.

    Args:
        old_start: Current first meeting day (YYYY-MM-DD) or None.
        old_end: Current last meeting day (YYYY-MM-DD) or None.
        new_fiscal_month: Target fiscal index, 0 = October.
        fiscal_year: Fiscal year the target month belongs to.

    Returns:
        The rescheduled range; (None, None) if either input date is absent;
        the original pair if the computation fails.
    """
    if not old_start or not old_end:
        return RescheduleResult(None, None)

    try:
        month, year = fiscal_month_to_calendar(new_fiscal_month, fiscal_year)
        max_day = days_in_month(month, year)
        start_day = min(to_date(old_start).day, max_day)
        end_day = min(to_date(old_end).day, max_day)
        new_start = date(year, month + 1, start_day)
        new_end = date(year, month + 1, end_day)
    except (ValueError, TypeError) as exc:
        logger.warning(
            "Could not reschedule %s..%s to fiscal month %r, keeping original dates: %s",
            old_start, old_end, new_fiscal_month, exc,
        )
        return RescheduleResult(old_start, old_end)

    return RescheduleResult(format_date(new_start), format_date(new_end))


def move_project(project: Project, target_month: int, fiscal_year: FiscalYear) -> Project:
    """Return ``project`` moved to ``target_month`` with its range rescheduled.

    A project already in ``target_month`` is returned as is. The input is
    never mutated; the caller applies the returned copy to its collection.
    """
    validate_fiscal_index(target_month)
    if project.start_month == target_month:
        return project

    start, end = reschedule(
        project.meeting_start_date, project.meeting_end_date, target_month, fiscal_year,
    )
    # a range that crossed a month end comes back inverted
    if start and end and end < start:
        month, year = fiscal_month_to_calendar(target_month, fiscal_year)
        end = format_date(date(year, month + 1, days_in_month(month, year)))
    logger.debug(
        "Moving project %s from month %d to %d (meeting %s..%s -> %s..%s)",
        project.id, project.start_month, target_month,
        project.meeting_start_date, project.meeting_end_date,
        start, end,
    )
    return project.model_validate({
        **project.model_dump(),
        "start_month": target_month,
        "meeting_start_date": start,
        "meeting_end_date": end,
    })
