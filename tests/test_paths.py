"""Tests for centralized path constants.

Verifies all path constants are importable, have correct types, and
point to expected locations relative to the project root.
"""

from pathlib import Path

from fiscal_tracker import paths


class TestPathConstants:

    def test_project_root_holds_package(self):
        assert (paths.PROJECT_ROOT / "fiscal_tracker").is_dir()

    def test_all_constants_are_absolute_paths(self):
        for name in (
            "PROJECT_ROOT", "CONFIG_DIR", "TRACKER_CONFIG_PATH", "DATA_DIR",
            "PROJECTS_STORE_PATH", "OUTPUTS_DIR", "LATEST_TIMELINE_MD_PATH",
            "LATEST_TIMELINE_JSON_PATH", "ARCHIVE_DIR",
        ):
            value = getattr(paths, name)
            assert isinstance(value, Path), name
            assert value.is_absolute(), name

    def test_config_path(self):
        assert paths.TRACKER_CONFIG_PATH.parent == paths.CONFIG_DIR
        assert paths.TRACKER_CONFIG_PATH.name == "tracker_config.json"

    def test_shipped_config_exists(self):
        assert paths.TRACKER_CONFIG_PATH.is_file()

    def test_store_under_data(self):
        assert paths.PROJECTS_STORE_PATH.parent == paths.DATA_DIR
        assert paths.PROJECTS_STORE_PATH.suffix == ".json"

    def test_outputs_layout(self):
        assert paths.LATEST_TIMELINE_MD_PATH.parent == paths.OUTPUTS_DIR
        assert paths.LATEST_TIMELINE_JSON_PATH.parent == paths.OUTPUTS_DIR
        assert paths.ARCHIVE_DIR.parent == paths.OUTPUTS_DIR
