"""Tests for stamp.core.config module."""

import logging

import pytest
import yaml
from pydantic import ValidationError

import stamp.core.config as config
from stamp.core.config import ConfigError, StampConfig, load_config, save_config


class TestEnvHelpers:
    """Tests for environment variable helpers."""

    def test_get_env_returns_value(self, monkeypatch):
        """get_env returns environment variable value."""
        monkeypatch.setenv("STAMP_TEST_VAR", "test_value")

        assert config.get_env("STAMP_TEST_VAR") == "test_value"

    def test_get_env_returns_default(self, monkeypatch):
        """get_env returns default when var not set."""
        monkeypatch.delenv("STAMP_NONEXISTENT_VAR", raising=False)

        assert config.get_env("STAMP_NONEXISTENT_VAR", "default") == "default"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("42", 42),
            ("not_a_number", 99),
            (None, 123),
        ],
    )
    def test_get_env_int(self, monkeypatch, value, expected):
        """get_env_int parses or falls back to default."""
        if value is None:
            monkeypatch.delenv("STAMP_INT_VAR", raising=False)
        else:
            monkeypatch.setenv("STAMP_INT_VAR", value)

        assert config.get_env_int("STAMP_INT_VAR", expected) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("true", True),
            ("YES", True),
            ("1", True),
            ("false", False),
            ("No", False),
            ("0", False),
        ],
    )
    def test_get_env_bool_parses_known_values(self, monkeypatch, value, expected):
        """get_env_bool parses known values."""
        monkeypatch.setenv("STAMP_BOOL_VAR", value)

        assert config.get_env_bool("STAMP_BOOL_VAR") is expected

    @pytest.mark.parametrize("default", [True, False])
    def test_get_env_bool_default(self, monkeypatch, default):
        """get_env_bool returns default for unknown values."""
        monkeypatch.setenv("STAMP_BOOL_VAR", "maybe")

        assert config.get_env_bool("STAMP_BOOL_VAR", default) is default


class TestStampConfig:
    """Tests for the StampConfig model."""

    def test_defaults(self):
        """Defaults come from module constants."""
        cfg = StampConfig()

        assert cfg.timezone == config.TIMEZONE
        assert cfg.counter_file == config.DEFAULT_COUNTER_FILE
        assert cfg.project_start == config.DEFAULT_PROJECT_START

    def test_frozen(self):
        """Config objects are immutable."""
        cfg = StampConfig()

        with pytest.raises(ValidationError):
            cfg.timezone = "UTC"

    def test_extra_fields_forbidden(self):
        """Unknown keys are rejected."""
        with pytest.raises(ValidationError):
            StampConfig.model_validate({"timezon": "UTC"})

    def test_counter_file_expands_home(self, tmp_path, monkeypatch):
        """counter_file values starting with ~ are expanded."""
        monkeypatch.setenv("HOME", str(tmp_path))

        cfg = StampConfig.model_validate({"counter_file": "~/notes/counters.json"})

        assert cfg.counter_file == tmp_path / "notes" / "counters.json"

    def test_null_timezone_is_local(self):
        """A null timezone means local time."""
        cfg = StampConfig.model_validate({"timezone": None})

        assert cfg.timezone == ""

    def test_negative_project_start_rejected(self):
        """project_start must be non-negative."""
        with pytest.raises(ValidationError):
            StampConfig(project_start=-1)

    def test_project_start_describes_persisted_counter(self):
        """project_start is documented as seeding the persisted counter only."""
        description = StampConfig.model_fields["project_start"].description

        assert "persisted project counter" in description


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_file_returns_defaults(self, tmp_path):
        """A missing file is not an error."""
        assert load_config(tmp_path / "nope.yaml") == StampConfig()

    def test_empty_file_returns_defaults(self, tmp_path):
        """An empty file means all defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert load_config(path) == StampConfig()

    def test_partial_file_overlays_defaults(self, tmp_path):
        """Only the keys present are overridden."""
        path = tmp_path / "config.yaml"
        path.write_text("timezone: Europe/Berlin\nalways_extension: true\n")

        cfg = load_config(path)

        assert cfg.timezone == "Europe/Berlin"
        assert cfg.always_extension is True
        assert cfg.project_start == config.DEFAULT_PROJECT_START

    def test_full_file(self, tmp_path):
        """Every field can be set."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "timezone: UTC\n"
            "always_extension: false\n"
            f"counter_file: {tmp_path / 'c.json'}\n"
            "project_start: 10\n"
        )

        cfg = load_config(path)

        assert cfg == StampConfig(
            timezone="UTC",
            always_extension=False,
            counter_file=tmp_path / "c.json",
            project_start=10,
        )

    def test_invalid_yaml(self, tmp_path):
        """Malformed YAML raises ConfigError."""
        path = tmp_path / "config.yaml"
        path.write_text("timezone: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_non_mapping(self, tmp_path):
        """Top-level must be a mapping."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="must be a mapping, got list"):
            load_config(path)

    def test_invalid_values(self, tmp_path):
        """Validation errors are wrapped in ConfigError."""
        path = tmp_path / "config.yaml"
        path.write_text("project_start: lots\n")

        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)

    def test_unknown_key(self, tmp_path):
        """Typos in keys are reported."""
        path = tmp_path / "config.yaml"
        path.write_text("always_extention: true\n")

        with pytest.raises(ConfigError, match="always_extention"):
            load_config(path)

    def test_unreadable_path(self, tmp_path):
        """Read failures become ConfigError."""
        path = tmp_path / "config.yaml"
        path.mkdir()

        with pytest.raises(ConfigError, match="Failed to read"):
            load_config(path)


class TestSaveConfig:
    """Tests for save_config()."""

    def test_save_then_load(self, tmp_path):
        """Saved config loads back unchanged."""
        path = tmp_path / "nested" / "config.yaml"
        cfg = StampConfig(
            timezone="UTC", counter_file=tmp_path / "c.json", project_start=7
        )

        written = save_config(cfg, path)

        assert written == path
        assert load_config(path) == cfg

    def test_key_order_preserved(self, tmp_path):
        """Keys are written in field order."""
        path = tmp_path / "config.yaml"

        save_config(StampConfig(), path)

        keys = list(yaml.safe_load(path.read_text()))
        assert keys == ["timezone", "always_extension", "counter_file", "project_start"]


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_returns_logger(self):
        """setup_logging returns the config logger."""
        logger = config.setup_logging()

        assert logger.name == "stamp.core.config"

    def test_accepts_level(self, monkeypatch):
        """An explicit level is passed to basicConfig."""
        calls = {}
        monkeypatch.setattr(
            logging, "basicConfig", lambda **kwargs: calls.update(kwargs)
        )

        config.setup_logging("debug")

        assert calls["level"] == logging.DEBUG
        assert "%(levelname)s" in calls["format"]

    def test_unknown_level_falls_back(self, monkeypatch):
        """Unknown level names use WARNING."""
        calls = {}
        monkeypatch.setattr(
            logging, "basicConfig", lambda **kwargs: calls.update(kwargs)
        )

        config.setup_logging("chatty")

        assert calls["level"] == logging.WARNING
