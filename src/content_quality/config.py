# -*- coding: utf-8 -*-
"""
Centralized configuration for the Content Quality Validator.

This module holds the default configuration of every built-in validator
and the merge rules applied to caller-supplied overrides:

- Defaults are always filled in; overrides never replace them wholesale.
- The "thresholds" mapping is merged key by key.
- Overrides can also be loaded from a YAML file (see load_config_file).
"""

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from .models import Severity, ValidatorConfig

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a validator configuration is invalid."""
    pass


DEFAULT_CONFIGS: dict[str, ValidatorConfig] = {
    "readability": ValidatorConfig(
        enabled=True,
        severity=Severity.WARNING,
        thresholds={
            "fleschReadingEaseMin": 60,
            "fleschReadingEaseMax": 70,
            "fleschKincaidGradeMin": 8,
            "fleschKincaidGradeMax": 12,
            "avgSentenceLengthMin": 15,
            "avgSentenceLengthMax": 20,
            "complexWordPercentMax": 10,
        },
    ),
    "seo": ValidatorConfig(
        enabled=True,
        severity=Severity.WARNING,
        thresholds={
            "titleLengthMin": 50,
            "titleLengthMax": 60,
            "descriptionLengthMin": 150,
            "descriptionLengthMax": 160,
            "keywordDensityMin": 1,
            "keywordDensityMax": 3,
            "keywordsCountMin": 3,
            "keywordsCountMax": 10,
        },
    ),
    "uniqueness": ValidatorConfig(
        enabled=True,
        severity=Severity.WARNING,
        thresholds={
            "similarityThreshold": 70,
            "boilerplateMinOccurrences": 3,
            "boilerplateMinPhraseLength": 5,
        },
    ),
}


def get_default_config(name: str) -> ValidatorConfig:
    """
    Get a copy of the default config for a validator.

    Validators without registered defaults are enabled with warning
    severity and no thresholds.
    """
    default = DEFAULT_CONFIGS.get(name)
    if default is None:
        return ValidatorConfig()
    return ValidatorConfig(
        enabled=default.enabled,
        severity=default.severity,
        thresholds=dict(default.thresholds),
    )


def coerce_severity(value: Union[str, Severity]) -> Severity:
    """Convert a severity name to a Severity."""
    if isinstance(value, Severity):
        return value
    try:
        return Severity(str(value).lower())
    except ValueError:
        valid = ", ".join(s.value for s in Severity)
        raise ConfigError(f"Invalid severity '{value}' (expected one of: {valid})")


def merge_config(
    name: str,
    override: Optional[Mapping[str, Any]] = None,
) -> ValidatorConfig:
    """
    Merge a partial override into the default config for a validator.

    Args:
        name: Validator name.
        override: Partial config with any of "enabled", "severity",
            "thresholds". Threshold keys are merged one by one.

    Returns:
        A new ValidatorConfig. The defaults are never mutated.

    Raises:
        ConfigError: If the override contains invalid values.
    """
    config = get_default_config(name)
    if not override:
        return config

    enabled = override.get("enabled")
    if enabled is not None:
        if not isinstance(enabled, bool):
            raise ConfigError(f"'enabled' for '{name}' must be true or false, got {enabled!r}")
        config.enabled = enabled

    if override.get("severity") is not None:
        config.severity = coerce_severity(override["severity"])

    thresholds = override.get("thresholds")
    if thresholds:
        if not isinstance(thresholds, Mapping):
            raise ConfigError(f"Thresholds for '{name}' must be a mapping")
        for key, value in thresholds.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(
                    f"Threshold '{key}' for '{name}' must be a number, got {value!r}"
                )
            config.thresholds[key] = value

    return config


def load_config_file(
    file_path: Union[str, Path],
    known_validators: Optional[list[str]] = None,
) -> dict[str, dict[str, Any]]:
    """
    Load per-validator overrides from a YAML file.

    Expected shape::

        readability:
          enabled: false
        seo:
          severity: error
          thresholds:
            titleLengthMin: 40

    Args:
        file_path: Path to the YAML file.
        known_validators: Names accepted as top-level keys. Unknown keys
            are logged and skipped. None accepts every key.

    Returns:
        Mapping of validator name to partial config override.

    Raises:
        ConfigError: If the file cannot be read or has the wrong shape.
    """
    path = Path(file_path)

    if not path.exists():
        raise ConfigError(f"Config file not found: {file_path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not read config file {file_path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {file_path} must contain a mapping of validator names")

    overrides: dict[str, dict[str, Any]] = {}
    for name, override in data.items():
        if known_validators is not None and name not in known_validators:
            logger.warning(f"Ignoring config for unknown validator '{name}'")
            continue
        if override is None:
            continue
        if not isinstance(override, dict):
            raise ConfigError(f"Config for '{name}' must be a mapping")

        # Validate eagerly so bad files fail before any content is read
        merge_config(name, override)
        overrides[name] = override

    return overrides
