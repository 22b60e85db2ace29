"""Tracker configuration for the Fiscal Budget Tracker.

The fiscal year runs October 1 through September 30 and is identified by
its (start_year, end_year) calendar pair:
    - October-December of calendar year N belong to fiscal year (N, N+1)
    - January-September of calendar year N belong to fiscal year (N-1, N)

Nothing here computes "today". The reference date is always supplied by the
caller (see ``fiscal_tracker.engine.fiscal_calendar.current_fiscal_year``),
so every consumer stays deterministic.

Example:
    October 15, 2025 -> fiscal year 2025/2026 (Thai FY2569)
    September 30, 2025 -> fiscal year 2024/2025 (Thai FY2568)
"""

import copy
import json
import logging
import os
from pathlib import Path

from fiscal_tracker.paths import TRACKER_CONFIG_PATH

logger = logging.getLogger(__name__)

CUMULATIVE_TARGETS: list[float] = [11, 23, 36, 47, 53, 61, 68, 75, 82, 90, 100, 100]
"""Expected cumulative spend (%) by the end of each fiscal month, Oct..Sep."""

BUDDHIST_ERA_OFFSET: int = 543
"""Years added to a Gregorian year to get the Thai Buddhist-era year."""

DEFAULT_LOCALE: str = "th"
"""Display locale for month labels ("th" or "en")."""

SUPPORTED_LOCALES = frozenset({"th", "en"})

DEFAULT_URL_ENV_VAR: str = "FISCAL_TRACKER_SHEETS_URL"
"""Environment variable consulted when ``sync.api_url`` is not set."""

DEFAULT_CONFIG: dict = {
    "cumulative_targets": CUMULATIVE_TARGETS,
    "locale": DEFAULT_LOCALE,
    "sync": {
        "enabled": True,
        "api_url": "",
        "url_env_var": DEFAULT_URL_ENV_VAR,
    },
    "resilience": {
        "max_retries": 3,
        "backoff_base": 2,
        "backoff_max": 300,
        "request_timeout": 30,
        "circuit_breaker": {
            "failure_threshold": 5,
            "recovery_timeout": 60,
        },
    },
}


def _merge(base: dict, override: dict) -> dict:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Path | None = None) -> dict:
    """Load tracker configuration, merged over ``DEFAULT_CONFIG``.

    A missing file is not an error: the defaults are returned and a warning
    is logged. Malformed JSON propagates, since it is an operator mistake
    that should be fixed rather than silently ignored.

    Args:
        path: Config file to read. Defaults to ``config/tracker_config.json``.

    Returns:
        Complete configuration dict.
    """
    path = path or TRACKER_CONFIG_PATH
    if not path.exists():
        logger.warning("Config file %s not found, using defaults", path)
        return copy.deepcopy(DEFAULT_CONFIG)
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    return _merge(DEFAULT_CONFIG, data)


def get_cumulative_targets(config: dict | None = None) -> list[float]:
    """Return the cumulative target curve from config (or the default)."""
    return list((config or {}).get("cumulative_targets", CUMULATIVE_TARGETS))


def get_locale(config: dict | None = None) -> str:
    """Return the configured display locale, validated."""
    locale = (config or {}).get("locale", DEFAULT_LOCALE)
    if locale not in SUPPORTED_LOCALES:
        raise ValueError(
            f"Unsupported locale '{locale}'. Must be one of: {sorted(SUPPORTED_LOCALES)}"
        )
    return locale


def get_sync_url(config: dict | None = None) -> str:
    """Resolve the remote sheets endpoint: config value first, then env var."""
    sync = (config or {}).get("sync", {})
    url = sync.get("api_url") or ""
    if url:
        return url
    env_var = sync.get("url_env_var", DEFAULT_URL_ENV_VAR)
    return os.environ.get(env_var, "")
