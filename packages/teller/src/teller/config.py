"""
Teller Configuration

Configuration utilities for the teller register. All configuration models are
defined in teller-types; this module loads them from defaults, environment
variables and YAML files.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from dotenv import load_dotenv
from loguru import logger
from pydantic import ValidationError

from teller_types.schemas.models import DEFAULT_DENOMINATIONS, RegisterConfig, TellerSettings

from .errors import ConfigurationError

load_dotenv()  # Load environment variables from .env if present

_TRUTHY = {"1", "true", "yes", "on"}


def _parse_denominations(raw: str) -> List[int]:
    try:
        return [int(part) for part in raw.split(",") if part.strip()]
    except ValueError as e:
        raise ConfigurationError(f"TELLER_DENOMINATIONS must be integers: {raw!r}") from e


def get_default_config() -> TellerSettings:
    """Get default teller configuration with environment variable overrides.

    Environment variables:
        TELLER_DENOMINATIONS: comma separated, e.g. "1,5,10,20"
        TELLER_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR
        TELLER_JSON_LOGS: emit JSON log lines when truthy

    Returns:
        TellerSettings: Default configuration

    Raises:
        ConfigurationError: If an override does not validate
    """
    raw_denoms = os.getenv("TELLER_DENOMINATIONS")
    denominations = (
        _parse_denominations(raw_denoms) if raw_denoms else list(DEFAULT_DENOMINATIONS)
    )
    log_level = os.getenv("TELLER_LOG_LEVEL", "INFO").upper()
    json_logs = os.getenv("TELLER_JSON_LOGS", "").strip().lower() in _TRUTHY

    try:
        return TellerSettings(
            register_config=RegisterConfig(denominations=denominations),
            log_level=log_level,
            json_logs=json_logs,
        )
    except ValidationError as e:
        logger.error(f"Error loading configuration: {e}")
        raise ConfigurationError(f"Invalid teller configuration: {e}") from e


def get_development_config() -> TellerSettings:
    """Get configuration with verbose logging for local work."""
    config = get_default_config()
    config.log_level = "DEBUG"
    return config


def load_config(path: Optional[Union[str, Path]] = None) -> TellerSettings:
    """
    Load configuration from a YAML file layered over the defaults.

    The file may contain ``log_level``, ``json_logs`` and a ``register`` block
    with ``denominations`` and ``initial_counts``. Without a path the defaults
    are returned.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    config = get_default_config()
    if path is None:
        return config

    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")

    merged: Dict[str, Any] = config.model_dump()
    register_data = data.pop("register", None)
    if register_data:
        if not isinstance(register_data, dict):
            raise ConfigurationError(f"'register' in {path} must be a mapping")
        merged["register_config"].update(register_data)
    merged.update(data)

    try:
        settings = TellerSettings(**merged)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e

    logger.debug(f"Loaded configuration from {path}")
    return settings
