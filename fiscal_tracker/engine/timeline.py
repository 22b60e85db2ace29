"""Timeline row selection: group filter, name search and sort order."""

from typing import Iterable

from fiscal_tracker.engine.fiscal_calendar import validate_fiscal_index
from fiscal_tracker.schemas.models import Project

ALL_GROUPS = "ทั้งหมด"  # "all"; sentinel for the group filter

SORT_KEYS = ("start_month", "name", "budget", "status")


def filter_and_sort(
    projects: Iterable[Project],
    group: str = ALL_GROUPS,
    sort_by: str = "start_month",
    search: str = "",
) -> list[Project]:
    """Return the projects shown on the timeline, in display order.

    Name and status sort ascending, budget descending (largest first),
    start month ascending. The sort is stable, so ties keep input order.

    Raises:
        ValueError: For an unknown ``sort_by``.
    """
    if sort_by not in SORT_KEYS:
        raise ValueError(f"Unknown sort key '{sort_by}'. Must be one of: {list(SORT_KEYS)}")

    rows = list(projects)
    if group != ALL_GROUPS:
        rows = [p for p in rows if p.group == group]
    if search:
        needle = search.casefold()
        rows = [p for p in rows if needle in p.name.casefold()]

    if sort_by == "budget":
        return sorted(rows, key=lambda p: p.budget, reverse=True)
    return sorted(rows, key=lambda p: getattr(p, sort_by))


def projects_starting_in(projects: Iterable[Project], fiscal_index: int) -> list[Project]:
    """Projects whose fiscal start month is ``fiscal_index``."""
    validate_fiscal_index(fiscal_index)
    return [p for p in projects if p.start_month == fiscal_index]
