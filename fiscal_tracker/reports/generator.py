"""Timeline report generator.

Produces the fiscal-year timeline as Markdown and JSON: one row per
project with its budget in its start-month column, followed by the
budget progress rows (monthly budget, cumulative target %, cumulative
actual %). Also renders a single month as a text calendar grid with the
meetings that fall on each day.
"""

import json
import logging
import shutil
from datetime import date
from pathlib import Path

from fiscal_tracker.config import CUMULATIVE_TARGETS, DEFAULT_LOCALE
from fiscal_tracker.engine.budget import is_on_track, summarize, total_budget
from fiscal_tracker.engine.day_grid import build_month_grid, first_weekday_of_month
from fiscal_tracker.engine.fiscal_calendar import (
    enumerate_fiscal_months,
    fiscal_month_to_calendar,
    fiscal_year_label,
)
from fiscal_tracker.engine.timeline import ALL_GROUPS, filter_and_sort, projects_starting_in
from fiscal_tracker.paths import OUTPUTS_DIR
from fiscal_tracker.schemas.models import FiscalYear, Project
from fiscal_tracker.utils import format_amount, format_compact

logger = logging.getLogger(__name__)

WEEKDAY_LABELS = {
    "th": ("อา", "จ", "อ", "พ", "พฤ", "ศ", "ส"),
    "en": ("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"),
}


class ReportGenerator:
    """Generates timeline reports in Markdown and JSON.

    Args:
        outputs_dir: Directory for LATEST-* files; ``archive/`` goes under it.
        locale: Month/weekday label locale ("th" or "en").
    """

    def __init__(self, outputs_dir: Path | None = None, locale: str = DEFAULT_LOCALE):
        self.outputs_dir = outputs_dir or OUTPUTS_DIR
        self.archive_dir = self.outputs_dir / "archive"
        self.locale = locale

    def generate(
        self,
        projects: list[Project],
        fiscal_year: FiscalYear,
        targets: list[float] | None = None,
        today: date | None = None,
        group: str = ALL_GROUPS,
        sort_by: str = "start_month",
    ) -> dict:
        """Write Markdown and JSON timeline reports. Returns file paths."""
        targets = targets or CUMULATIVE_TARGETS
        stamp = (today or date.today()).isoformat()
        self.outputs_dir.mkdir(parents=True, exist_ok=True)
        self.archive_dir.mkdir(parents=True, exist_ok=True)

        md_content = self.build_markdown(projects, fiscal_year, targets, group=group, sort_by=sort_by)
        json_content = self.build_json(projects, fiscal_year, targets, generated=stamp)

        md_path = self.outputs_dir / "LATEST-TIMELINE.md"
        json_path = self.outputs_dir / "LATEST-TIMELINE.json"
        md_path.write_text(md_content, encoding="utf-8")
        json_path.write_text(
            json.dumps(json_content, indent=2, ensure_ascii=False, default=str), encoding="utf-8",
        )

        shutil.copy2(md_path, self.archive_dir / f"timeline-{stamp}.md")
        shutil.copy2(json_path, self.archive_dir / f"timeline-{stamp}.json")

        logger.info("Reports written: %s, %s", md_path, json_path)
        return {"markdown": str(md_path), "json": str(json_path)}

    def build_markdown(
        self,
        projects: list[Project],
        fiscal_year: FiscalYear,
        targets: list[float],
        group: str = ALL_GROUPS,
        sort_by: str = "start_month",
        search: str = "",
    ) -> str:
        """Build the Markdown timeline with its budget progress footer."""
        months = enumerate_fiscal_months(fiscal_year, self.locale)
        summaries = summarize(projects, months, targets)
        rows = filter_and_sort(projects, group=group, sort_by=sort_by, search=search)

        lines = [
            f"# Project Timeline — {fiscal_year_label(fiscal_year, self.locale)}",
            "",
            f"**Projects:** {len(projects)}  ",
            f"**Total Budget:** {format_amount(total_budget(projects))}  ",
        ]
        if group != ALL_GROUPS:
            lines.append(f"**Group:** {group} ({len(rows)} shown)  ")
        lines.append("")

        header = "| Activity | " + " | ".join(
            f"{m.short_label} {m.year_suffix}" for m in months
        ) + " |"
        divider = "|----------|" + "|".join(":---:" for _ in months) + "|"
        lines.extend(["## Timeline", "", header, divider])

        if not rows:
            lines.append("| _No activities_ |" + " |" * len(months))
        for p in rows:
            cells = [format_compact(p.budget) if p.start_month == m.index else "" for m in months]
            name = f"**{p.name}** ({p.status})<br>{p.group}"
            lines.append(f"| {name} | " + " | ".join(cells) + " |")

        lines.append(
            "| Monthly budget | "
            + " | ".join(format_compact(s.monthly_budget) if s.monthly_budget > 0 else "" for s in summaries)
            + " |"
        )
        lines.append(
            "| Cumulative target (%) | "
            + " | ".join(f"{s.cumulative_target_percent:g}%" for s in summaries)
            + " |"
        )
        lines.append(
            "| Cumulative actual (%) | "
            + " | ".join(
                f"{s.cumulative_actual_percent:.1f}% {'▲' if is_on_track(s) else '▼'}"
                for s in summaries
            )
            + " |"
        )
        lines.append("")
        lines.append("▲ on or above target, ▼ below target")
        lines.append("")
        return "\n".join(lines)

    def build_calendar(
        self, projects: list[Project], fiscal_index: int, fiscal_year: FiscalYear,
    ) -> str:
        """Render one fiscal month as a Sunday-first text calendar."""
        calendar_month, calendar_year = fiscal_month_to_calendar(fiscal_index, fiscal_year)
        month = enumerate_fiscal_months(fiscal_year, self.locale)[fiscal_index]
        cells = build_month_grid(calendar_month, calendar_year, projects)
        leading = first_weekday_of_month(calendar_month, calendar_year)

        lines = [f"{month.label} {month.year_suffix}", ""]
        lines.append(" ".join(f"{d:>4}" for d in WEEKDAY_LABELS[self.locale]))

        slots = [""] * leading + [f"{c.day}{'*' if c.has_event else ''}" for c in cells]
        for start in range(0, len(slots), 7):
            lines.append(" ".join(f"{s:>4}" for s in slots[start:start + 7]))

        event_days = [c for c in cells if c.has_event]
        lines.append("")
        if event_days:
            lines.append("Meetings:")
            for cell in event_days:
                names = ", ".join(p.name for p in cell.projects)
                lines.append(f"  {cell.date.isoformat()}: {names}")
        else:
            lines.append("No meetings this month.")

        starting = projects_starting_in(projects, fiscal_index)
        lines.append("")
        lines.append(f"Projects starting this month ({len(starting)}):")
        for p in starting:
            when = (
                f" [{p.meeting_start_date} - {p.meeting_end_date}]" if p.meeting_range else ""
            )
            lines.append(f"  - {p.name}: {format_amount(p.budget)}{when}")
        return "\n".join(lines)

    def build_json(
        self,
        projects: list[Project],
        fiscal_year: FiscalYear,
        targets: list[float],
        generated: str | None = None,
    ) -> dict:
        """Build the machine-readable timeline."""
        months = enumerate_fiscal_months(fiscal_year, self.locale)
        summaries = summarize(projects, months, targets)
        return {
            "generated": generated,
            "fiscal_year": fiscal_year.model_dump(),
            "total_budget": total_budget(projects),
            "months": [m.model_dump() for m in months],
            "summary": [
                {**s.model_dump(), "on_track": is_on_track(s)} for s in summaries
            ],
            "projects": [p.to_wire() for p in projects],
        }
