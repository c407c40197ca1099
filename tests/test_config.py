"""Tests for validator configuration defaults, merging and YAML loading."""

from pathlib import Path

import pytest

from content_quality.config import (
    DEFAULT_CONFIGS,
    ConfigError,
    coerce_severity,
    get_default_config,
    load_config_file,
    merge_config,
)
from content_quality.models import Severity


class TestDefaults:
    """Tests for default validator configs."""

    def test_defaults_for_builtin_validators(self):
        """Every built-in validator has defaults."""
        assert set(DEFAULT_CONFIGS) == {"readability", "seo", "uniqueness"}
        assert get_default_config("seo").thresholds["titleLengthMin"] == 50
        assert get_default_config("uniqueness").thresholds["similarityThreshold"] == 70

    def test_default_is_a_copy(self):
        """Mutating a returned config does not change the defaults."""
        config = get_default_config("readability")
        config.thresholds["fleschReadingEaseMin"] = 0
        config.enabled = False

        fresh = get_default_config("readability")
        assert fresh.thresholds["fleschReadingEaseMin"] == 60
        assert fresh.enabled

    def test_unknown_validator_gets_empty_config(self):
        """Validators without defaults run with warning severity."""
        config = get_default_config("custom")
        assert config.enabled
        assert config.severity == Severity.WARNING
        assert config.thresholds == {}


class TestMergeConfig:
    """Tests for merging overrides into defaults."""

    def test_thresholds_merged_key_by_key(self):
        """A partial thresholds override keeps the other defaults."""
        config = merge_config("seo", {"thresholds": {"titleLengthMin": 40}})

        assert config.thresholds["titleLengthMin"] == 40
        assert config.thresholds["titleLengthMax"] == 60
        assert config.thresholds["keywordDensityMax"] == 3

    def test_no_override(self):
        """No override returns the defaults."""
        assert merge_config("seo", None).thresholds == DEFAULT_CONFIGS["seo"].thresholds
        assert merge_config("seo", {}).severity == Severity.WARNING

    def test_enabled_and_severity(self):
        """enabled and severity replace the defaults."""
        config = merge_config("readability", {"enabled": False, "severity": "error"})
        assert not config.enabled
        assert config.severity == Severity.ERROR

    def test_defaults_not_mutated(self):
        """Merging never changes the shared defaults."""
        merge_config("uniqueness", {"thresholds": {"similarityThreshold": 10}})
        assert DEFAULT_CONFIGS["uniqueness"].thresholds["similarityThreshold"] == 70

    def test_invalid_severity(self):
        """Unknown severity names are rejected."""
        with pytest.raises(ConfigError, match="Invalid severity 'fatal'"):
            merge_config("seo", {"severity": "fatal"})

    @pytest.mark.parametrize("value", ["sixty", True, None])
    def test_non_numeric_threshold(self, value):
        """Thresholds must be numbers."""
        with pytest.raises(ConfigError, match="must be a number"):
            merge_config("seo", {"thresholds": {"titleLengthMin": value}})

    @pytest.mark.parametrize("value", ["false", "no", 0, 1])
    def test_enabled_must_be_boolean(self, value):
        """Strings and numbers are not accepted for enabled."""
        with pytest.raises(ConfigError, match="'enabled' for 'seo' must be true or false"):
            merge_config("seo", {"enabled": value})

    def test_enabled_null_keeps_default(self):
        """An explicit null leaves the default in place."""
        assert merge_config("seo", {"enabled": None}).enabled

    def test_thresholds_must_be_mapping(self):
        """A thresholds list is rejected."""
        with pytest.raises(ConfigError, match="must be a mapping"):
            merge_config("seo", {"thresholds": [1, 2]})

    def test_coerce_severity_case_insensitive(self):
        """Severity names are case-insensitive."""
        assert coerce_severity("INFO") == Severity.INFO
        assert coerce_severity(Severity.ERROR) == Severity.ERROR


class TestLoadConfigFile:
    """Tests for YAML config files."""

    def test_load_overrides(self, tmp_path: Path):
        """Per-validator overrides are read from YAML."""
        path = tmp_path / "quality.yaml"
        path.write_text(
            "readability:\n"
            "  enabled: false\n"
            "seo:\n"
            "  severity: error\n"
            "  thresholds:\n"
            "    titleLengthMin: 40\n"
        )
        overrides = load_config_file(path, known_validators=["readability", "seo", "uniqueness"])

        assert overrides == {
            "readability": {"enabled": False},
            "seo": {"severity": "error", "thresholds": {"titleLengthMin": 40}},
        }

    def test_unknown_validator_skipped(self, tmp_path: Path, caplog):
        """Unknown validator names are logged and ignored."""
        path = tmp_path / "quality.yaml"
        path.write_text("spelling:\n  enabled: true\nseo:\n  enabled: false\n")

        with caplog.at_level("WARNING"):
            overrides = load_config_file(path, known_validators=["seo"])

        assert overrides == {"seo": {"enabled": False}}
        assert "spelling" in caplog.text

    def test_empty_file(self, tmp_path: Path):
        """An empty file means no overrides."""
        path = tmp_path / "quality.yaml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_missing_file(self, tmp_path: Path):
        """A missing config file is an error."""
        with pytest.raises(ConfigError, match="Config file not found"):
            load_config_file(tmp_path / "missing.yaml")

    def test_malformed_yaml(self, tmp_path: Path):
        """Malformed YAML is an error."""
        path = tmp_path / "quality.yaml"
        path.write_text("seo: [unclosed\n")
        with pytest.raises(ConfigError, match="Could not read config file"):
            load_config_file(path)

    def test_top_level_must_be_mapping(self, tmp_path: Path):
        """A YAML list is not a valid config file."""
        path = tmp_path / "quality.yaml"
        path.write_text("- seo\n- readability\n")
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_config_file(path)

    def test_invalid_values_fail_on_load(self, tmp_path: Path):
        """Bad values are reported when the file is loaded."""
        path = tmp_path / "quality.yaml"
        path.write_text("seo:\n  severity: fatal\n")
        with pytest.raises(ConfigError, match="Invalid severity"):
            load_config_file(path)

    def test_quoted_enabled_fails_on_load(self, tmp_path: Path):
        """A quoted "false" in YAML is rejected instead of read as true."""
        path = tmp_path / "quality.yaml"
        path.write_text('seo:\n  enabled: "false"\n')
        with pytest.raises(ConfigError, match="must be true or false"):
            load_config_file(path)
