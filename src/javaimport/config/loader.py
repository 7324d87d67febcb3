"""Configuration loading utilities."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import SettingsError

from javaimport.config.models import Config
from javaimport.errors import ConfigurationError


def _read_yaml(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        with config_path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"YAML root must be a mapping, not {type(data).__name__}")
    return data


def load_config(config_path: Path | None) -> Config:
    """
    Load configuration from YAML file and JAVAIMPORT_ environment variables.

    Args:
        config_path: Path to YAML config file, or None for defaults.

    Returns:
        Validated Config object.

    Raises:
        ConfigurationError: If the file is missing, not valid YAML,
            or the file or environment values do not validate.
    """
    data = _read_yaml(config_path) if config_path is not None else {}
    source = config_path or "environment"

    try:
        return Config(**data)
    except (ValidationError, SettingsError) as e:
        raise ConfigurationError(f"Invalid configuration in {source}: {e}") from e
