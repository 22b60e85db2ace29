"""Pydantic v2 schema models for Fiscal Budget Tracker data validation.

Provides strict validation models for all core data structures:
- Project: one budgeted activity with its optional meeting range
- FiscalYear: the October-September (start_year, end_year) window
- FiscalMonth: a fiscal month with calendar position and display labels
- MonthlyBudgetSummary: per-month budget progress row values
- DayCell: one day of a monthly calendar grid

All models use Pydantic v2 validation with field descriptions and
examples. Schema violations are bugs, not warnings.
"""

from fiscal_tracker.schemas.models import (
    COLOR_OPTIONS,
    DEFAULT_COLOR,
    DEFAULT_STATUS,
    PROJECT_GROUPS,
    PROJECT_STATUSES,
    DayCell,
    FiscalMonth,
    FiscalYear,
    MonthlyBudgetSummary,
    Project,
)

__all__ = [
    "COLOR_OPTIONS",
    "DEFAULT_COLOR",
    "DEFAULT_STATUS",
    "PROJECT_GROUPS",
    "PROJECT_STATUSES",
    "DayCell",
    "FiscalMonth",
    "FiscalYear",
    "MonthlyBudgetSummary",
    "Project",
]
