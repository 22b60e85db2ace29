"""Budget aggregation across the 12 fiscal months.

Produces the three progress rows under the timeline: the budget of
projects starting in each month, the running cumulative total, and that
total as a percentage of the grand total next to the cumulative target
curve. The aggregator only reports numbers; deciding whether a month is
"on track" is left to presentation code (``is_on_track``).
"""

import logging
from typing import Iterable, Sequence

from fiscal_tracker.engine.fiscal_calendar import FISCAL_MONTHS_PER_YEAR
from fiscal_tracker.schemas.models import FiscalMonth, MonthlyBudgetSummary, Project

logger = logging.getLogger(__name__)


def validate_target_curve(curve: Sequence[float]) -> list[float]:
    """Check a cumulative target curve and return it as a list of floats.

    The curve must have one entry per fiscal month, never decrease, and
    end at 100.

    Raises:
        ValueError: If any of those conditions fails.
    """
    values = [float(v) for v in curve]
    if len(values) != FISCAL_MONTHS_PER_YEAR:
        raise ValueError(
            f"Cumulative target curve needs {FISCAL_MONTHS_PER_YEAR} entries, got {len(values)}"
        )
    for i in range(1, len(values)):
        if values[i] < values[i - 1]:
            raise ValueError(
                f"Cumulative target curve decreases at month {i}: "
                f"{values[i - 1]} -> {values[i]}"
            )
    if values[-1] != 100.0:
        raise ValueError(f"Cumulative target curve must end at 100, got {values[-1]}")
    return values


def total_budget(projects: Iterable[Project]) -> float:
    """Sum of all project budgets."""
    return sum(p.budget for p in projects)


def summarize(
    projects: Iterable[Project],
    fiscal_months: Sequence[FiscalMonth],
    cumulative_target_curve: Sequence[float],
) -> list[MonthlyBudgetSummary]:
    """Compute per-month and cumulative budget progress.

    Projects are bucketed by ``start_month`` and the months are scanned
    once, left to right. With a zero grand total every actual percentage
    is 0.0.

    Args:
        projects: Snapshot of the project collection.
        fiscal_months: The 12 fiscal months, October first.
        cumulative_target_curve: 12 expected cumulative percentages.

    Returns:
        One MonthlyBudgetSummary per fiscal month, in order.
    """
    targets = validate_target_curve(cumulative_target_curve)
    if len(fiscal_months) != FISCAL_MONTHS_PER_YEAR:
        raise ValueError(
            f"Expected {FISCAL_MONTHS_PER_YEAR} fiscal months, got {len(fiscal_months)}"
        )

    buckets = [0.0] * FISCAL_MONTHS_PER_YEAR
    grand_total = 0.0
    for project in projects:
        buckets[project.start_month] += project.budget
        grand_total += project.budget

    summaries = []
    cumulative = 0.0
    for month in fiscal_months:
        monthly = buckets[month.index]
        cumulative += monthly
        actual = cumulative / grand_total * 100 if grand_total > 0 else 0.0
        summaries.append(MonthlyBudgetSummary(
            index=month.index,
            monthly_budget=monthly,
            cumulative_budget=cumulative,
            cumulative_target_percent=targets[month.index],
            cumulative_actual_percent=actual,
        ))

    logger.debug("Summarized budget: total=%.2f across %d months", grand_total, len(summaries))
    return summaries


def is_on_track(summary: MonthlyBudgetSummary) -> bool:
    """True when actual cumulative spend meets or beats the target."""
    return summary.cumulative_actual_percent >= summary.cumulative_target_percent
