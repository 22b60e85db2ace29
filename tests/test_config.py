"""Tests for tracker configuration loading and accessors."""

import json

import pytest

from fiscal_tracker.config import (
    CUMULATIVE_TARGETS,
    DEFAULT_CONFIG,
    DEFAULT_URL_ENV_VAR,
    get_cumulative_targets,
    get_locale,
    get_sync_url,
    load_config,
)
from fiscal_tracker.engine.budget import validate_target_curve


class TestLoadConfig:

    def test_shipped_config_loads(self):
        config = load_config()
        validate_target_curve(config["cumulative_targets"])
        assert config["locale"] in ("th", "en")

    def test_missing_file_returns_defaults(self, tmp_path, caplog):
        config = load_config(tmp_path / "nope.json")
        assert config == DEFAULT_CONFIG
        assert "not found" in caplog.text

    def test_defaults_are_copied(self, tmp_path):
        config = load_config(tmp_path / "nope.json")
        config["sync"]["enabled"] = False
        assert DEFAULT_CONFIG["sync"]["enabled"] is True

    def test_partial_override_merges(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({
            "locale": "en",
            "resilience": {"circuit_breaker": {"failure_threshold": 2}},
        }), encoding="utf-8")
        config = load_config(path)
        assert config["locale"] == "en"
        assert config["resilience"]["circuit_breaker"]["failure_threshold"] == 2
        assert config["resilience"]["circuit_breaker"]["recovery_timeout"] == 60
        assert config["resilience"]["max_retries"] == 3

    def test_non_object_rejected(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError, match="JSON object"):
            load_config(path)

    def test_malformed_json_propagates(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            load_config(path)


class TestAccessors:

    def test_targets_default(self):
        assert get_cumulative_targets() == CUMULATIVE_TARGETS
        assert get_cumulative_targets() is not CUMULATIVE_TARGETS

    def test_targets_from_config(self):
        curve = [10 * i for i in range(1, 11)] + [100, 100]
        assert get_cumulative_targets({"cumulative_targets": curve}) == curve

    def test_locale_default(self):
        assert get_locale() == "th"

    def test_locale_unsupported(self):
        with pytest.raises(ValueError, match="Unsupported locale"):
            get_locale({"locale": "de"})


class TestSyncUrl:

    def test_config_value_wins(self, monkeypatch):
        monkeypatch.setenv(DEFAULT_URL_ENV_VAR, "https://env.example/exec")
        config = {"sync": {"api_url": "https://cfg.example/exec"}}
        assert get_sync_url(config) == "https://cfg.example/exec"

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv(DEFAULT_URL_ENV_VAR, "https://env.example/exec")
        assert get_sync_url({"sync": {"api_url": ""}}) == "https://env.example/exec"

    def test_custom_env_var(self, monkeypatch):
        monkeypatch.setenv("MY_SHEET", "https://custom.example/exec")
        assert get_sync_url({"sync": {"url_env_var": "MY_SHEET"}}) == "https://custom.example/exec"

    def test_unset_is_empty(self, monkeypatch):
        monkeypatch.delenv(DEFAULT_URL_ENV_VAR, raising=False)
        assert get_sync_url({}) == ""
