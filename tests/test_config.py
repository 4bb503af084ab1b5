"""Tests for persistent command line settings."""

import json
import logging

import pytest

from sat_autograder.config import (
    SETTINGS_ENV_VAR,
    AutograderSettings,
    default_settings_path,
    load_settings,
    save_settings,
)


class TestSettingsPath:
    def test_path_when_env_var_set_then_used(self, tmp_path, monkeypatch):
        target = tmp_path / "custom.json"
        monkeypatch.setenv(SETTINGS_ENV_VAR, str(target))
        assert default_settings_path() == target

    def test_path_when_env_var_unset_then_home_folder(self, monkeypatch):
        monkeypatch.delenv(SETTINGS_ENV_VAR, raising=False)
        assert default_settings_path().parts[-2:] == (".sat_autograder", "settings.json")


class TestLoadSettings:
    """Tests for load_settings() fallbacks."""

    def test_load_when_file_missing_then_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "none.json")

        assert settings == AutograderSettings()
        assert settings.skip_missing is True
        assert settings.key_dir is None

    def test_load_when_saved_then_round_trips(self, tmp_path):
        path = tmp_path / "nested" / "settings.json"
        original = AutograderSettings(key_dir="/srv/keys", skip_missing=False, log_level="DEBUG")

        assert save_settings(original, path) == path
        assert load_settings(path) == original

    def test_load_when_corrupt_json_then_defaults_with_warning(self, tmp_path, caplog):
        path = tmp_path / "settings.json"
        path.write_text("{oops", encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            settings = load_settings(path)

        assert settings == AutograderSettings()
        assert "corrupted" in caplog.text

    def test_load_when_not_an_object_then_defaults(self, tmp_path, caplog):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            assert load_settings(path) == AutograderSettings()
        assert "not a JSON object" in caplog.text

    @pytest.mark.parametrize(
        "raw, field",
        [
            ({"skip_missing": "no"}, "skip_missing"),
            ({"key_dir": 42}, "key_dir"),
            ({"log_level": "loud"}, "log_level"),
        ],
    )
    def test_load_when_bad_field_then_field_default(self, tmp_path, caplog, raw, field):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps(raw), encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            settings = load_settings(path)

        assert getattr(settings, field) == getattr(AutograderSettings(), field)
        assert f"invalid {field}" in caplog.text

    def test_load_when_lower_case_level_then_normalized(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"log_level": "warning"}), encoding="utf-8")

        assert load_settings(path).log_level == "WARNING"
