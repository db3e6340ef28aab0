"""Configuration loader for cohortstats.

Configuration is resolved with a two-level priority hierarchy:
    override file > packaged defaults

The packaged ``defaults.yaml`` is required; the override file is optional
and only needs the keys it changes.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import CohortStatsConfig, ConfigurationError, LoggingConfig

DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"


def _overlay(defaults: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Lay an override mapping over the defaults without mutating either.

    Sections present on both sides are merged key by key. A null in the
    override keeps the default; any other value replaces it outright.
    """
    merged = dict(defaults)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _overlay(current, value)
        elif value is not None:
            merged[key] = value
    return merged


def _read_mapping(path: Path) -> dict[str, Any]:
    """Read a YAML file whose top level is a mapping.

    An empty file reads as an empty mapping.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid YAML
            or holds anything other than a mapping

    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {path}")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}")

    try:
        content = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}")

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(
            f"Expected a mapping at the top of {path}, got {type(content).__name__}"
        )
    return content


def load_config(path: str | Path | None = None) -> CohortStatsConfig:
    """Load configuration, merging an optional override file over the defaults.

    Args:
        path: Optional YAML file whose keys override the packaged defaults.

    Returns:
        Validated CohortStatsConfig

    Raises:
        ConfigurationError: If a file is missing, unparsable or fails validation

    """
    data = _read_mapping(DEFAULTS_PATH)
    source = DEFAULTS_PATH
    if path is not None:
        source = Path(path)
        data = _overlay(data, _read_mapping(source))

    try:
        return CohortStatsConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {source}: {e}")


@lru_cache(maxsize=1)
def get_config() -> CohortStatsConfig:
    """Return the packaged default configuration, loaded once per process."""
    return load_config()


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Apply a logging configuration to the root logger.

    Args:
        config: Logging settings (defaults to the packaged configuration)

    """
    if config is None:
        config = get_config().logging
    logging.basicConfig(level=config.level, format=config.format)
