"""Tests for the fiscal calendar mapping.

Covers current fiscal year derivation at the October boundary, the
index -> calendar mapping and its inverse, fail-fast index validation,
and month enumeration with Thai and English labels.
"""

from datetime import date, datetime

import pytest

from fiscal_tracker.engine.errors import FiscalIndexError, InvalidDateError
from fiscal_tracker.engine.fiscal_calendar import (
    CalendarMonth,
    calendar_date_to_fiscal_month,
    calendar_month_to_fiscal_index,
    current_fiscal_year,
    enumerate_fiscal_months,
    fiscal_month_to_calendar,
    fiscal_year_label,
)
from fiscal_tracker.schemas.models import FiscalYear

FY_2024 = FiscalYear(start_year=2024, end_year=2025)


# ── current_fiscal_year ──


class TestCurrentFiscalYear:
    """October 1 starts a new fiscal year."""

    def test_october_first_starts_new_year(self):
        fy = current_fiscal_year(date(2024, 10, 1))
        assert fy.start_year == 2024
        assert fy.end_year == 2025

    def test_september_thirtieth_belongs_to_previous(self):
        fy = current_fiscal_year(date(2024, 9, 30))
        assert fy.start_year == 2023
        assert fy.end_year == 2024

    def test_december_uses_same_year(self):
        assert current_fiscal_year(date(2024, 12, 31)).start_year == 2024

    def test_january_uses_previous_year(self):
        assert current_fiscal_year(date(2025, 1, 1)).start_year == 2024

    def test_datetime_accepted(self):
        """A datetime works the same as its date."""
        assert current_fiscal_year(datetime(2024, 10, 1, 23, 59)).start_year == 2024


# ── fiscal_month_to_calendar ──


class TestFiscalMonthToCalendar:
    """Index 0-2 are Oct-Dec of start_year; 3-11 are Jan-Sep of end_year."""

    def test_index_zero_is_october_of_start_year(self):
        assert fiscal_month_to_calendar(0, FY_2024) == CalendarMonth(9, 2024)

    def test_index_three_is_january_of_end_year(self):
        assert fiscal_month_to_calendar(3, FY_2024) == CalendarMonth(0, 2025)

    def test_index_two_is_december(self):
        assert fiscal_month_to_calendar(2, FY_2024) == CalendarMonth(11, 2024)

    def test_index_eleven_is_september(self):
        assert fiscal_month_to_calendar(11, FY_2024) == CalendarMonth(8, 2025)

    def test_unpacks_as_month_and_year(self):
        month, year = fiscal_month_to_calendar(5, FY_2024)
        assert (month, year) == (2, 2025)

    @pytest.mark.parametrize("bad", [-1, 12, 100])
    def test_out_of_range_fails_fast(self, bad):
        with pytest.raises(FiscalIndexError) as exc_info:
            fiscal_month_to_calendar(bad, FY_2024)
        assert exc_info.value.value == bad

    @pytest.mark.parametrize("bad", [1.0, "3", None, True])
    def test_non_integer_fails_fast(self, bad):
        with pytest.raises(FiscalIndexError):
            fiscal_month_to_calendar(bad, FY_2024)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            fiscal_month_to_calendar(12, FY_2024)


# ── calendar_date_to_fiscal_month ──


class TestCalendarDateToFiscalMonth:
    """The inverse used when a meeting start date locks the month."""

    @pytest.mark.parametrize("value,expected", [
        ("2024-10-15", 0),
        ("2024-11-01", 1),
        ("2024-12-31", 2),
        ("2025-01-01", 3),
        ("2025-03-05", 5),
        ("2025-09-30", 11),
    ])
    def test_string_dates(self, value, expected):
        assert calendar_date_to_fiscal_month(value) == expected

    def test_date_object(self):
        assert calendar_date_to_fiscal_month(date(2025, 2, 28)) == 4

    def test_year_does_not_matter(self):
        assert calendar_date_to_fiscal_month("1999-10-01") == 0

    def test_malformed_string_raises(self):
        with pytest.raises(InvalidDateError):
            calendar_date_to_fiscal_month("2025/03/05")

    def test_impossible_date_raises(self):
        with pytest.raises(InvalidDateError):
            calendar_date_to_fiscal_month("2025-02-30")

    def test_round_trip_all_indices(self):
        """index -> calendar month -> first day -> index is the identity."""
        for fy in (FY_2024, FiscalYear.starting(2027)):
            for i in range(12):
                month, year = fiscal_month_to_calendar(i, fy)
                assert calendar_date_to_fiscal_month(date(year, month + 1, 1)) == i

    def test_calendar_month_index_mapping(self):
        assert calendar_month_to_fiscal_index(9) == 0
        assert calendar_month_to_fiscal_index(0) == 3
        with pytest.raises(FiscalIndexError):
            calendar_month_to_fiscal_index(12)


# ── enumerate_fiscal_months ──


class TestEnumerateFiscalMonths:
    """Twelve months, October first, with locale labels."""

    def test_twelve_months_in_order(self):
        months = enumerate_fiscal_months(FY_2024)
        assert [m.index for m in months] == list(range(12))
        assert months[0].calendar_month == 9
        assert months[-1].calendar_month == 8

    def test_years_roll_over_in_january(self):
        months = enumerate_fiscal_months(FY_2024)
        assert {m.calendar_year for m in months[:3]} == {2024}
        assert {m.calendar_year for m in months[3:]} == {2025}

    def test_thai_labels_use_buddhist_era(self):
        months = enumerate_fiscal_months(FY_2024, locale="th")
        assert months[0].label == "ตุลาคม"
        assert months[0].short_label == "ต.ค."
        assert months[0].year_suffix == "67"  # 2024 + 543 = 2567
        assert months[3].year_suffix == "68"

    def test_english_labels_use_gregorian(self):
        months = enumerate_fiscal_months(FY_2024, locale="en")
        assert months[0].label == "October"
        assert months[5].short_label == "Mar"
        assert months[0].year_suffix == "24"
        assert months[11].year_suffix == "25"

    def test_month_number_is_one_based(self):
        months = enumerate_fiscal_months(FY_2024)
        assert months[0].month_number == 10
        assert months[3].month_number == 1

    def test_deterministic(self):
        assert enumerate_fiscal_months(FY_2024) == enumerate_fiscal_months(FY_2024)

    def test_unknown_locale_raises(self):
        with pytest.raises(ValueError, match="Unsupported locale"):
            enumerate_fiscal_months(FY_2024, locale="fr")


class TestFiscalYearLabel:
    """Report header labels."""

    def test_thai_label(self):
        label = fiscal_year_label(FiscalYear.starting(2025), "th")
        assert label == "ปีงบประมาณ 2569 (ต.ค. 68 - ก.ย. 69)"

    def test_english_label(self):
        assert fiscal_year_label(FiscalYear.starting(2025), "en") == "FY2026 (Oct 25 - Sep 26)"
