"""End-to-end tests for the command-line entry point (offline, temp store)."""

import json

import pytest

from fiscal_tracker.main import build_repository, main
from fiscal_tracker.schemas.models import PROJECT_GROUPS
from fiscal_tracker.storage.csv_io import CSV_COLUMNS
from fiscal_tracker.storage.local_store import LocalProjectStore

TODAY = "2024-11-01"  # fiscal year 2024/2025


@pytest.fixture
def store_path(tmp_path):
    path = tmp_path / "projects.json"
    path.write_text(json.dumps([
        {"id": "a", "name": "Kickoff", "budget": 100, "startMonth": 0,
         "meetingStartDate": "2024-10-05", "meetingEndDate": "2024-10-07"},
        {"id": "b", "name": "Review", "budget": 200, "startMonth": 2},
    ]), encoding="utf-8")
    return path


def _run(store_path, *args):
    main(["--offline", "--store", str(store_path), "--today", TODAY, "--locale", "en", *args])


class TestBuildRepository:

    def test_offline_has_no_client(self, tmp_path):
        repo = build_repository({}, offline=True, store_path=tmp_path / "p.json")
        assert repo.client is None

    def test_unconfigured_sync_runs_local_only(self, tmp_path, monkeypatch):
        monkeypatch.delenv("FISCAL_TRACKER_SHEETS_URL", raising=False)
        repo = build_repository({"sync": {"enabled": True}}, store_path=tmp_path / "p.json")
        assert repo.client is None

    def test_configured_sync(self, tmp_path):
        config = {"sync": {"enabled": True, "api_url": "https://example.test/exec"}}
        repo = build_repository(config, store_path=tmp_path / "p.json")
        assert repo.client is not None

    def test_sync_disabled(self, tmp_path):
        config = {"sync": {"enabled": False, "api_url": "https://example.test/exec"}}
        assert build_repository(config, store_path=tmp_path / "p.json").client is None


class TestCommands:

    def test_default_prints_timeline(self, store_path, capsys):
        _run(store_path)
        out = capsys.readouterr().out
        assert "# Project Timeline — FY2025" in out
        assert "**Kickoff**" in out

    def test_calendar(self, store_path, capsys):
        _run(store_path, "--calendar", "0")
        out = capsys.readouterr().out
        assert out.startswith("October 24")
        assert "2024-10-05: Kickoff" in out

    def test_calendar_invalid_month(self, store_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(store_path, "--calendar", "12")
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().out

    def test_move(self, store_path, capsys):
        _run(store_path, "--move", "a", "5")
        assert "Moved 'Kickoff' to fiscal month 5" in capsys.readouterr().out
        [moved] = [p for p in LocalProjectStore(store_path).load() if p.id == "a"]
        assert moved.start_month == 5
        assert moved.meeting_start_date == "2025-03-05"
        assert moved.meeting_end_date == "2025-03-07"

    def test_move_unknown_project(self, store_path, capsys):
        with pytest.raises(SystemExit):
            _run(store_path, "--move", "zzz", "5")
        assert "unknown project id 'zzz'" in capsys.readouterr().out

    @pytest.mark.parametrize("month", ["12", "abc"])
    def test_move_bad_month(self, store_path, month):
        with pytest.raises(SystemExit):
            _run(store_path, "--move", "a", month)

    def test_export_then_import(self, store_path, tmp_path, capsys):
        csv_path = tmp_path / "export.csv"
        _run(store_path, "--export-csv", str(csv_path))
        assert "Exported 2 projects" in capsys.readouterr().out
        assert csv_path.read_text(encoding="utf-8-sig").splitlines()[0] == ",".join(CSV_COLUMNS)

        other_store = tmp_path / "other.json"
        _run(other_store, "--import-csv", str(csv_path))
        assert "Imported 2 projects" in capsys.readouterr().out
        assert LocalProjectStore(other_store).load() == LocalProjectStore(store_path).load()

    def test_import_missing_file(self, store_path, tmp_path):
        with pytest.raises(SystemExit):
            _run(store_path, "--import-csv", str(tmp_path / "missing.csv"))

    def test_report(self, store_path, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr("fiscal_tracker.reports.generator.OUTPUTS_DIR", tmp_path / "outputs")
        _run(store_path, "--report")
        assert "Reports written" in capsys.readouterr().out
        assert (tmp_path / "outputs" / "LATEST-TIMELINE.md").is_file()
        assert (tmp_path / "outputs" / "archive" / f"timeline-{TODAY}.json").is_file()

    def test_reset_offline_clears_store(self, store_path, capsys):
        _run(store_path, "--reset")
        assert "_No activities_" in capsys.readouterr().out
        assert not store_path.exists()

    def test_bad_today(self, store_path):
        with pytest.raises(SystemExit):
            _run(store_path.parent / "x.json", "--today", "yesterday")


def _stored(store_path):
    return {p.id: p for p in LocalProjectStore(store_path).load()}


class TestProjectEditing:
    """--add / --edit / --delete write the collection back through the repository."""

    def test_add_generates_id_and_saves(self, store_path, capsys):
        _run(store_path, "--add", "--name", "Workshop", "--budget", "50000", "--month", "3",
             "--group", PROJECT_GROUPS[1])
        assert "Added 'Workshop'" in capsys.readouterr().out
        stored = _stored(store_path)
        [new_id] = set(stored) - {"a", "b"}
        added = stored[new_id]
        assert added.name == "Workshop"
        assert added.budget == 50000
        assert added.start_month == 3
        assert added.group == PROJECT_GROUPS[1]

    def test_add_with_meeting_start_derives_month(self, store_path):
        _run(store_path, "--add", "--name", "Seminar",
             "--meeting-start", "2025-03-05", "--meeting-end", "2025-03-06")
        [added] = [p for p in _stored(store_path).values() if p.name == "Seminar"]
        assert added.start_month == 5
        assert added.meeting_end_date == "2025-03-06"

    def test_add_month_with_meeting_start_is_locked(self, store_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(store_path, "--add", "--name", "Seminar",
                 "--meeting-start", "2025-03-05", "--month", "2")
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().out
        assert set(_stored(store_path)) == {"a", "b"}

    def test_add_without_name_fails(self, store_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(store_path, "--add", "--budget", "100")
        assert exc_info.value.code == 1
        assert set(_stored(store_path)) == {"a", "b"}

    @pytest.mark.parametrize("budget", ["-5", "inf"])
    def test_add_bad_budget_fails(self, store_path, budget):
        with pytest.raises(SystemExit):
            _run(store_path, "--add", "--name", "Workshop", "--budget", budget)

    def test_add_meeting_end_before_start_fails(self, store_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(store_path, "--add", "--name", "Seminar",
                 "--meeting-start", "2025-03-05", "--meeting-end", "2025-03-01")
        assert exc_info.value.code == 1
        assert set(_stored(store_path)) == {"a", "b"}

    def test_edit_updates_given_fields_only(self, store_path, capsys):
        _run(store_path, "--edit", "b", "--budget", "750", "--chairman", "Director")
        assert "Updated 'Review' (b)" in capsys.readouterr().out
        edited = _stored(store_path)["b"]
        assert edited.budget == 750
        assert edited.chairman == "Director"
        assert edited.name == "Review"
        assert edited.start_month == 2

    def test_edit_month_of_free_project(self, store_path):
        _run(store_path, "--edit", "b", "--month", "7")
        assert _stored(store_path)["b"].start_month == 7

    def test_edit_month_while_locked_fails(self, store_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(store_path, "--edit", "a", "--month", "7")
        assert exc_info.value.code == 1
        assert _stored(store_path)["a"].start_month == 0

    def test_edit_clearing_meeting_start_unlocks_month(self, store_path):
        _run(store_path, "--edit", "a", "--meeting-start", "", "--meeting-end", "", "--month", "7")
        edited = _stored(store_path)["a"]
        assert edited.start_month == 7
        assert edited.meeting_start_date is None
        assert edited.meeting_end_date is None

    def test_edit_new_meeting_start_moves_month(self, store_path):
        _run(store_path, "--edit", "a", "--meeting-start", "2024-12-01", "--meeting-end", "2024-12-02")
        assert _stored(store_path)["a"].start_month == 2

    def test_edit_unknown_project(self, store_path, capsys):
        with pytest.raises(SystemExit):
            _run(store_path, "--edit", "zzz", "--budget", "1")
        assert "unknown project id 'zzz'" in capsys.readouterr().out

    def test_delete(self, store_path, capsys):
        _run(store_path, "--delete", "a")
        assert "Deleted 'Kickoff' (a)" in capsys.readouterr().out
        assert set(_stored(store_path)) == {"b"}

    def test_delete_unknown_project(self, store_path, capsys):
        with pytest.raises(SystemExit):
            _run(store_path, "--delete", "zzz")
        assert "unknown project id 'zzz'" in capsys.readouterr().out
        assert set(_stored(store_path)) == {"a", "b"}
