"""Fiscal calendar: fiscal-month indices <-> calendar months and years.

The fiscal year runs October through September. Fiscal index 0 is October
of the start year and index 11 is September of the end year:

    index  0  1  2 | 3  4  5  6  7  8  9 10 11
    month Oct Nov Dec|Jan Feb Mar Apr May Jun Jul Aug Sep
    year  start_year | end_year

Calendar months are 0-based here (January = 0) so the index arithmetic is a
plain offset of 9 / 3. Every function takes its reference values as
arguments; nothing reads the wall clock.
"""

from datetime import date
from typing import NamedTuple

from fiscal_tracker.config import BUDDHIST_ERA_OFFSET
from fiscal_tracker.engine.dates import DateLike, to_date
from fiscal_tracker.engine.errors import FiscalIndexError
from fiscal_tracker.schemas.models import FiscalMonth, FiscalYear

FISCAL_MONTHS_PER_YEAR = 12
OCTOBER = 9  # 0-based calendar month
Q1_LENGTH = 3  # Oct, Nov, Dec fall in the start year

MONTH_LABELS = {
    "th": (
        "ตุลาคม", "พฤศจิกายน", "ธันวาคม", "มกราคม", "กุมภาพันธ์", "มีนาคม",
        "เมษายน", "พฤษภาคม", "มิถุนายน", "กรกฎาคม", "สิงหาคม", "กันยายน",
    ),
    "en": (
        "October", "November", "December", "January", "February", "March",
        "April", "May", "June", "July", "August", "September",
    ),
}

SHORT_MONTH_LABELS = {
    "th": (
        "ต.ค.", "พ.ย.", "ธ.ค.", "ม.ค.", "ก.พ.", "มี.ค.",
        "เม.ย.", "พ.ค.", "มิ.ย.", "ก.ค.", "ส.ค.", "ก.ย.",
    ),
    "en": (
        "Oct", "Nov", "Dec", "Jan", "Feb", "Mar",
        "Apr", "May", "Jun", "Jul", "Aug", "Sep",
    ),
}


class CalendarMonth(NamedTuple):
    """A calendar month (0 = January) and its Gregorian year."""

    month: int
    year: int


def validate_fiscal_index(fiscal_index) -> int:
    """Return ``fiscal_index`` if it is an int in 0..11, else raise.

    Raises:
        FiscalIndexError: For out-of-range values, non-integers and bools.
    """
    if isinstance(fiscal_index, bool) or not isinstance(fiscal_index, int):
        raise FiscalIndexError(fiscal_index)
    if not 0 <= fiscal_index < FISCAL_MONTHS_PER_YEAR:
        raise FiscalIndexError(fiscal_index)
    return fiscal_index


def current_fiscal_year(today: date) -> FiscalYear:
    """Return the fiscal year containing ``today``.

    October-December belong to the fiscal year starting that calendar year;
    January-September to the one that started the previous year.
    """
    start_year = today.year if today.month >= OCTOBER + 1 else today.year - 1
    return FiscalYear.starting(start_year)


def fiscal_month_to_calendar(fiscal_index: int, fiscal_year: FiscalYear) -> CalendarMonth:
    """Map a fiscal index to its calendar month (0 = January) and year.

    Raises:
        FiscalIndexError: If ``fiscal_index`` is not an int in 0..11.
    """
    validate_fiscal_index(fiscal_index)
    if fiscal_index < Q1_LENGTH:
        return CalendarMonth(fiscal_index + OCTOBER, fiscal_year.start_year)
    return CalendarMonth(fiscal_index - Q1_LENGTH, fiscal_year.end_year)


def calendar_month_to_fiscal_index(calendar_month: int) -> int:
    """Map a 0-based calendar month to its fiscal index."""
    if isinstance(calendar_month, bool) or not isinstance(calendar_month, int):
        raise FiscalIndexError(calendar_month, kind="calendar month")
    if not 0 <= calendar_month < 12:
        raise FiscalIndexError(calendar_month, kind="calendar month")
    if calendar_month >= OCTOBER:
        return calendar_month - OCTOBER
    return calendar_month + Q1_LENGTH


def calendar_date_to_fiscal_month(value: DateLike) -> int:
    """Return the fiscal index of the month ``value`` falls in.

    Only the month matters; the year is not checked against any fiscal
    year. This is the rule that locks a project's month to its meeting
    start date.

    Raises:
        InvalidDateError: If ``value`` is a malformed date string.
    """
    return calendar_month_to_fiscal_index(to_date(value).month - 1)


def _year_suffix(year: int, locale: str) -> str:
    if locale == "th":
        year += BUDDHIST_ERA_OFFSET
    return f"{year % 100:02d}"


def enumerate_fiscal_months(fiscal_year: FiscalYear, locale: str = "th") -> list[FiscalMonth]:
    """Return the 12 months of ``fiscal_year`` in October -> September order.

    Args:
        fiscal_year: The fiscal year to enumerate.
        locale: "th" for Thai names and Buddhist-era year suffixes,
            "en" for English names and Gregorian suffixes.

    Raises:
        ValueError: For an unsupported locale.
    """
    if locale not in MONTH_LABELS:
        raise ValueError(
            f"Unsupported locale '{locale}'. Must be one of: {sorted(MONTH_LABELS)}"
        )
    months = []
    for index in range(FISCAL_MONTHS_PER_YEAR):
        calendar_month, calendar_year = fiscal_month_to_calendar(index, fiscal_year)
        months.append(FiscalMonth(
            index=index,
            calendar_month=calendar_month,
            calendar_year=calendar_year,
            label=MONTH_LABELS[locale][index],
            short_label=SHORT_MONTH_LABELS[locale][index],
            year_suffix=_year_suffix(calendar_year, locale),
        ))
    return months


def fiscal_year_label(fiscal_year: FiscalYear, locale: str = "th") -> str:
    """Human-readable fiscal year label for report headers.

    The Thai fiscal year is named after its end year in the Buddhist era,
    e.g. fiscal year 2025/2026 -> "ปีงบประมาณ 2569 (ต.ค. 68 - ก.ย. 69)".
    """
    first, last = SHORT_MONTH_LABELS.get(locale, SHORT_MONTH_LABELS["en"])[::11]
    start = _year_suffix(fiscal_year.start_year, locale)
    end = _year_suffix(fiscal_year.end_year, locale)
    if locale == "th":
        return (
            f"ปีงบประมาณ {fiscal_year.end_year + BUDDHIST_ERA_OFFSET} "
            f"({first} {start} - {last} {end})"
        )
    return f"FY{fiscal_year.end_year} ({first} {start} - {last} {end})"
