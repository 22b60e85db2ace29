"""Centralized path constants for the Fiscal Budget Tracker.

Every file and directory path used by the tracker is defined here as a
module-level constant. Source files import from this module instead of
constructing ad-hoc ``Path(...)`` literals scattered throughout the codebase.

Design rules:
  1. This module imports ONLY ``pathlib.Path`` -- no project imports, no
     config imports, no runtime validation.  This prevents circular-import
     chains and keeps the module importable at any point.
  2. Constants are grouped by purpose (config, data, outputs).
  3. No path existence checks at import time.  Callers create directories
     as needed (``mkdir(parents=True, exist_ok=True)``).
"""

from pathlib import Path

# ---------------------------------------------------------------------------
# -- Project Root --
# ---------------------------------------------------------------------------

PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent
"""Absolute path to the project root directory (one level above ``fiscal_tracker/``)."""

# ---------------------------------------------------------------------------
# -- Config Paths --
# ---------------------------------------------------------------------------

CONFIG_DIR: Path = PROJECT_ROOT / "config"
"""Directory containing tracker configuration files."""

TRACKER_CONFIG_PATH: Path = CONFIG_DIR / "tracker_config.json"
"""Main tracker configuration (target curve, locale, sync, resilience)."""

# ---------------------------------------------------------------------------
# -- Data Paths --
# ---------------------------------------------------------------------------

DATA_DIR: Path = PROJECT_ROOT / "data"
"""Top-level data directory for the local project store."""

PROJECTS_STORE_PATH: Path = DATA_DIR / "projects.json"
"""Local backup of the project collection (camelCase JSON list)."""

# ---------------------------------------------------------------------------
# -- Output Paths --
# ---------------------------------------------------------------------------

OUTPUTS_DIR: Path = PROJECT_ROOT / "outputs"
"""Top-level output directory for generated timeline reports and exports."""

LATEST_TIMELINE_MD_PATH: Path = OUTPUTS_DIR / "LATEST-TIMELINE.md"
"""Most recent Markdown timeline report."""

LATEST_TIMELINE_JSON_PATH: Path = OUTPUTS_DIR / "LATEST-TIMELINE.json"
"""Most recent JSON timeline report."""

ARCHIVE_DIR: Path = OUTPUTS_DIR / "archive"
"""Archived timeline reports from previous runs."""
