"""Fiscal Budget Tracker — command-line entry point.

Flow: Load (remote sheet -> local store) -> Engine computations -> Output/Save

Usage:
    python -m fiscal_tracker.main                       # Timeline to stdout
    python -m fiscal_tracker.main --calendar 5          # Calendar for fiscal month 5 (March)
    python -m fiscal_tracker.main --move <id> 5         # Move a project to March
    python -m fiscal_tracker.main --add --name "Workshop" --budget 50000 --month 2
    python -m fiscal_tracker.main --edit <id> --meeting-start 2026-03-05 --meeting-end 2026-03-06
    python -m fiscal_tracker.main --delete <id>
    python -m fiscal_tracker.main --import-csv in.csv   # Replace the collection from CSV
    python -m fiscal_tracker.main --export-csv          # Export to outputs/projects_<date>.csv
    python -m fiscal_tracker.main --report              # Write Markdown/JSON reports
    python -m fiscal_tracker.main --reset               # Drop local copy, reload remote
"""

import argparse
import asyncio
import logging
import sys
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from fiscal_tracker.config import get_cumulative_targets, get_locale, load_config
from fiscal_tracker.engine.dates import to_date
from fiscal_tracker.engine.errors import FiscalTrackerError
from fiscal_tracker.engine.fiscal_calendar import current_fiscal_year, validate_fiscal_index
from fiscal_tracker.engine.month_lock import MonthSelection
from fiscal_tracker.engine.rescheduler import move_project
from fiscal_tracker.engine.timeline import ALL_GROUPS, SORT_KEYS
from fiscal_tracker.paths import OUTPUTS_DIR
from fiscal_tracker.reports.generator import ReportGenerator
from fiscal_tracker.schemas.models import Project
from fiscal_tracker.storage.csv_io import export_filename, read_csv, write_csv
from fiscal_tracker.storage.local_store import LocalProjectStore
from fiscal_tracker.sync.repository import ProjectRepository
from fiscal_tracker.sync.sheets_client import SheetsClient
from fiscal_tracker.utils import generate_project_id

logger = logging.getLogger(__name__)


def build_repository(config: dict, offline: bool = False, store_path: Path | None = None) -> ProjectRepository:
    """Wire the local store and (unless offline or disabled) the remote client."""
    store = LocalProjectStore(store_path)
    client = None
    if not offline and config.get("sync", {}).get("enabled", True):
        client = SheetsClient(config)
        if not client.is_configured:
            logger.info("No sheets endpoint configured, running local-only")
            client = None
    return ProjectRepository(store, client)


def find_project(projects: list[Project], project_id: str) -> Project | None:
    return next((p for p in projects if p.id == project_id), None)


def save_collection(repo: ProjectRepository, projects: list[Project]) -> None:
    """Save the whole collection, logging when a backend did not take it."""
    if not asyncio.run(repo.save(projects)):
        logger.warning("Saving %d projects did not reach every backend", len(projects))


def move_and_save(
    repo: ProjectRepository, projects: list[Project], project_id: str,
    target_month: int, today: date,
) -> Project:
    """Move one project to ``target_month`` and save the whole collection.

    Raises:
        KeyError: If no project has ``project_id``.
        FiscalIndexError: If ``target_month`` is outside 0..11.
    """
    project = find_project(projects, project_id)
    if project is None:
        raise KeyError(project_id)
    moved = move_project(project, target_month, current_fiscal_year(today))
    save_collection(repo, [moved if p.id == project_id else p for p in projects])
    return moved


# --option -> Project field, for options copied as given
FIELD_OPTIONS = {
    "name": "name",
    "budget": "budget",
    "status": "status",
    "color": "color",
    "meeting_end": "meeting_end_date",
    "vehicle": "vehicle",
    "chairman": "chairman",
}


def build_project(args: argparse.Namespace, base: Project | None = None) -> Project:
    """Apply the field options in ``args`` to ``base``, or to a new project.

    The month goes through MonthSelection: a meeting start date locks it to
    the date's month, and ``--month`` is refused while it is locked. An
    empty ``--meeting-start`` clears the date and unlocks the month.

    Raises:
        MonthLockedError: ``--month`` while locked to a meeting start date.
        FiscalTrackerError: Month outside 0..11 or a malformed start date.
        ValidationError: Any other invalid field, including a meeting end
            date before the start date.
    """
    data = base.model_dump() if base else {"id": generate_project_id()}
    for option, field in FIELD_OPTIONS.items():
        value = getattr(args, option)
        if value is not None:
            data[field] = value
    if args.group != ALL_GROUPS:
        data["group"] = args.group

    selection = MonthSelection.from_project(base) if base else MonthSelection()
    if args.meeting_start is not None:
        selection.set_meeting_start(args.meeting_start)
    if args.month is not None:
        selection.choose_month(args.month)
    data["start_month"] = selection.start_month
    data["meeting_start_date"] = selection.meeting_start_date
    return Project.model_validate(data)


def add_and_save(repo: ProjectRepository, projects: list[Project], args: argparse.Namespace) -> Project:
    project = build_project(args)
    save_collection(repo, [*projects, project])
    return project


def edit_and_save(
    repo: ProjectRepository, projects: list[Project], project_id: str, args: argparse.Namespace,
) -> Project:
    """Update one project from the field options and save the collection.

    Raises:
        KeyError: If no project has ``project_id``.
    """
    project = find_project(projects, project_id)
    if project is None:
        raise KeyError(project_id)
    updated = build_project(args, project)
    save_collection(repo, [updated if p.id == project_id else p for p in projects])
    return updated


def delete_and_save(repo: ProjectRepository, projects: list[Project], project_id: str) -> Project:
    """Remove one project and save the collection. Returns the removed project.

    Raises:
        KeyError: If no project has ``project_id``.
    """
    project = find_project(projects, project_id)
    if project is None:
        raise KeyError(project_id)
    save_collection(repo, [p for p in projects if p.id != project_id])
    return project


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fiscal Budget Tracker — October-September project timeline and budget progress"
    )
    parser.add_argument("--calendar", type=int, metavar="MONTH",
                        help="Show the calendar for a fiscal month (0 = October .. 11 = September)")
    parser.add_argument("--move", nargs=2, metavar=("PROJECT_ID", "MONTH"),
                        help="Move a project to another fiscal month")
    parser.add_argument("--add", action="store_true", help="Add a project from the field options below")
    parser.add_argument("--edit", metavar="PROJECT_ID", help="Update a project from the field options below")
    parser.add_argument("--delete", metavar="PROJECT_ID", help="Delete a project")
    parser.add_argument("--import-csv", type=Path, metavar="PATH",
                        help="Replace the project collection with a CSV file")
    parser.add_argument("--export-csv", nargs="?", const="", metavar="PATH",
                        help="Export the project collection as CSV")
    parser.add_argument("--report", action="store_true", help="Write Markdown and JSON timeline reports")
    parser.add_argument("--reset", action="store_true", help="Clear the local store and reload from remote")
    parser.add_argument("--group", type=str, default=ALL_GROUPS,
                        help="Only show one work group; with --add/--edit, the project's group")
    parser.add_argument("--sort", choices=SORT_KEYS, default="start_month", help="Timeline sort order")
    parser.add_argument("--search", type=str, default="", help="Filter timeline rows by name")
    parser.add_argument("--today", type=str, metavar="YYYY-MM-DD",
                        help="Reference date for the current fiscal year (default: today)")
    parser.add_argument("--locale", choices=("th", "en"), help="Label locale (default: from config)")
    parser.add_argument("--config", type=Path, help="Path to tracker_config.json")
    parser.add_argument("--store", type=Path, help="Path to the local project store")
    parser.add_argument("--offline", action="store_true", help="Skip the remote sheet")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    fields = parser.add_argument_group("project fields (--add / --edit)")
    fields.add_argument("--name", help="Activity name")
    fields.add_argument("--budget", type=float, help="Budget amount")
    fields.add_argument("--month", type=int, metavar="MONTH",
                        help="Fiscal month (0 = October); locked while a meeting start date is set")
    fields.add_argument("--status", help="Lifecycle status")
    fields.add_argument("--color", help="Display color tag, e.g. bg-green-600")
    fields.add_argument("--meeting-start", metavar="YYYY-MM-DD",
                        help="First meeting day; sets the month. An empty value clears it")
    fields.add_argument("--meeting-end", metavar="YYYY-MM-DD", help="Last meeting day")
    fields.add_argument("--vehicle", help="Official vehicle and driver")
    fields.add_argument("--chairman", help="Activity chairperson")
    return parser.parse_args(argv)


def _fail(message: str) -> None:
    print(f"Error: {message}")
    sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = _parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    config = load_config(args.config)
    locale = args.locale or get_locale(config)
    targets = get_cumulative_targets(config)
    try:
        today = to_date(args.today) if args.today else date.today()
    except FiscalTrackerError as exc:
        _fail(str(exc))
    fiscal_year = current_fiscal_year(today)
    repo = build_repository(config, offline=args.offline, store_path=args.store)
    reports = ReportGenerator(locale=locale)

    if args.import_csv:
        try:
            projects = read_csv(args.import_csv)
        except OSError as exc:
            _fail(f"cannot read {args.import_csv}: {exc}")
        asyncio.run(repo.save(projects))
        print(f"Imported {len(projects)} projects from {args.import_csv}")
        return

    projects = asyncio.run(repo.reset() if args.reset else repo.load())

    if args.add:
        try:
            added = add_and_save(repo, projects, args)
        except (FiscalTrackerError, ValidationError) as exc:
            _fail(str(exc))
        print(f"Added '{added.name}' ({added.id}) to fiscal month {added.start_month}")
        return

    if args.edit:
        try:
            edited = edit_and_save(repo, projects, args.edit, args)
        except KeyError:
            _fail(f"unknown project id '{args.edit}'")
        except (FiscalTrackerError, ValidationError) as exc:
            _fail(str(exc))
        print(f"Updated '{edited.name}' ({edited.id}), fiscal month {edited.start_month}")
        return

    if args.delete:
        try:
            removed = delete_and_save(repo, projects, args.delete)
        except KeyError:
            _fail(f"unknown project id '{args.delete}'")
        print(f"Deleted '{removed.name}' ({removed.id})")
        return

    if args.move:
        project_id, raw_month = args.move
        try:
            target = validate_fiscal_index(int(raw_month))
            moved = move_and_save(repo, projects, project_id, target, today)
        except ValueError as exc:
            _fail(str(exc))
        except KeyError:
            _fail(f"unknown project id '{project_id}'")
        window = (
            f", meeting {moved.meeting_start_date} - {moved.meeting_end_date}"
            if moved.meeting_range else ""
        )
        print(f"Moved '{moved.name}' to fiscal month {moved.start_month}{window}")
        return

    if args.export_csv is not None:
        path = Path(args.export_csv) if args.export_csv else OUTPUTS_DIR / export_filename(today)
        write_csv(projects, path)
        print(f"Exported {len(projects)} projects to {path}")
        return

    if args.calendar is not None:
        try:
            print(reports.build_calendar(projects, args.calendar, fiscal_year))
        except FiscalTrackerError as exc:
            _fail(str(exc))
        return

    if args.report:
        paths = reports.generate(
            projects, fiscal_year, targets, today=today, group=args.group, sort_by=args.sort,
        )
        print(f"Reports written: {paths['markdown']}, {paths['json']}")
        return

    print(reports.build_markdown(
        projects, fiscal_year, targets, group=args.group, sort_by=args.sort, search=args.search,
    ))


if __name__ == "__main__":
    main()
