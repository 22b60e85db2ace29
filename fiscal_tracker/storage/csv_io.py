"""CSV import and export of the project collection.

Column order matches the spreadsheet export used by the tracker's users:

    id,name,group,budget,startMonth,color,status,
    meetingStartDate,meetingEndDate,vehicle,chairman

Older files without the last two columns still import. Blank or
unparsable cells fall back to the defaults new projects get (fresh id,
budget 0, October, blue, not started); rows that still fail validation
are skipped with a warning instead of aborting the whole import.
"""

import csv
import io
import logging
import math
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from fiscal_tracker.schemas.models import DEFAULT_COLOR, DEFAULT_STATUS, PROJECT_GROUPS, Project
from fiscal_tracker.utils import generate_project_id

logger = logging.getLogger(__name__)

CSV_COLUMNS = (
    "id", "name", "group", "budget", "startMonth", "color", "status",
    "meetingStartDate", "meetingEndDate", "vehicle", "chairman",
)


def _parse_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def _parse_int(text: str) -> int:
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        return 0


def _format_budget(budget: float) -> str:
    return str(int(budget)) if float(budget).is_integer() else repr(budget)


def _row_to_project(values: list[str]) -> Project:
    values = [v.strip() for v in values] + [""] * (len(CSV_COLUMNS) - len(values))
    row = dict(zip(CSV_COLUMNS, values))
    return Project.model_validate({
        "id": row["id"] or generate_project_id(),
        "name": row["name"],
        "group": row["group"] or PROJECT_GROUPS[0],
        "budget": _parse_float(row["budget"]),
        "startMonth": _parse_int(row["startMonth"]),
        "color": row["color"] or DEFAULT_COLOR,
        "status": row["status"] or DEFAULT_STATUS,
        "meetingStartDate": row["meetingStartDate"] or None,
        "meetingEndDate": row["meetingEndDate"] or None,
        "vehicle": row["vehicle"] or None,
        "chairman": row["chairman"] or None,
    })


def parse_csv(text: str) -> list[Project]:
    """Parse CSV text (header row first) into projects."""
    reader = csv.reader(io.StringIO(text.strip()))
    projects = []
    header_seen = False
    for line_no, values in enumerate(reader, start=1):
        if not header_seen:
            header_seen = True
            continue
        if not any(v.strip() for v in values):
            continue
        try:
            projects.append(_row_to_project(values))
        except ValidationError as exc:
            logger.warning("Skipping CSV line %d: %s", line_no, exc)
    logger.info("Parsed %d projects from CSV", len(projects))
    return projects


def projects_to_csv(projects: list[Project]) -> str:
    """Render projects as CSV text with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for p in projects:
        writer.writerow([
            p.id,
            p.name,
            p.group,
            _format_budget(p.budget),
            p.start_month,
            p.color,
            p.status,
            p.meeting_start_date or "",
            p.meeting_end_date or "",
            p.vehicle or "",
            p.chairman or "",
        ])
    return buffer.getvalue().rstrip("\n")


def read_csv(path: Path) -> list[Project]:
    """Read projects from a CSV file (UTF-8, BOM tolerated)."""
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        return parse_csv(f.read())


def write_csv(projects: list[Project], path: Path) -> Path:
    """Write projects to a CSV file with a BOM so spreadsheet apps detect UTF-8."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8-sig", newline="") as f:
        f.write(projects_to_csv(projects) + "\n")
    logger.info("Exported %d projects to %s", len(projects), path)
    return path


def export_filename(today: date) -> str:
    """Default export file name for a given day."""
    return f"projects_{today.isoformat()}.csv"
