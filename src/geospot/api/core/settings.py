"""
Settings Management

Loads geospot configuration from a JSON file and environment variables.

Sources are applied in order, later ones winning:
    1. Built-in defaults
    2. ~/.config/geospot/config.json (or the file named by GEOSPOT_CONFIG)
    3. GEOSPOT_* environment variables
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from geospot.api.core.constants import DEFAULT_STORAGE_PRECISION, MAX_PRECISION, MIN_PRECISION
from geospot.api.core.exceptions import InvalidConfigurationError


logger = logging.getLogger(__name__)


__all__ = [
    "ENV_VARS",
    "Settings",
    "get_config_path",
    "get_settings",
    "load_settings",
    "reset_settings",
]


# Environment variable -> settings field
ENV_VARS: dict[str, str] = {
    "GEOSPOT_STORAGE_PRECISION": "storage_precision",
    "GEOSPOT_DEFAULT_RADIUS_KM": "default_radius_km",
    "GEOSPOT_NOMINATIM_URL": "nominatim_url",
    "GEOSPOT_USER_AGENT": "user_agent",
    "GEOSPOT_REQUEST_TIMEOUT": "request_timeout",
    "GEOSPOT_LOG_LEVEL": "log_level",
}

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseModel):
    """Validated geospot configuration."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    storage_precision: int = Field(default=DEFAULT_STORAGE_PRECISION, ge=MIN_PRECISION, le=MAX_PRECISION)
    default_radius_km: float = Field(default=5.0, gt=0, allow_inf_nan=False)
    nominatim_url: str = "https://nominatim.openstreetmap.org"
    user_agent: str = Field(default="geospot-cli", min_length=1)
    request_timeout: float = Field(default=10.0, gt=0, allow_inf_nan=False)
    log_level: str = "WARNING"

    @field_validator("nominatim_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"nominatim_url must be an http(s) URL, got {value!r}")
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}")
        return level


# Global current settings
_current_settings: Settings | None = None


def get_config_path() -> Path:
    """Get path to the geospot config file."""
    override = os.environ.get("GEOSPOT_CONFIG")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "geospot" / "config.json"


def _read_config_file(path: Path) -> dict[str, object]:
    if not path.exists():
        logger.debug(f"No config file found at {path}")
        return {}

    try:
        with path.open("r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidConfigurationError(f"Config file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfigurationError(f"Config file {path} must contain a JSON object")

    logger.debug(f"Loaded config file {path}")
    return data


def load_settings(config_path: Path | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build settings from defaults, the config file and the environment.

    Args:
        config_path: Config file to read (default: get_config_path())
        environ: Environment mapping (default: os.environ)

    Returns:
        Validated settings

    Raises:
        InvalidConfigurationError: If the file or any value is invalid
    """
    env = os.environ if environ is None else environ
    path = config_path if config_path is not None else get_config_path()

    data = _read_config_file(path)
    for var, field_name in ENV_VARS.items():
        value = env.get(var)
        if value is not None and value != "":
            data[field_name] = value

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise InvalidConfigurationError(f"Invalid configuration: {e}") from e


def get_settings() -> Settings:
    """
    Get current settings.

    Returns cached settings if loaded, otherwise loads them.
    """
    global _current_settings

    if _current_settings is None:
        _current_settings = load_settings()

    return _current_settings


def reset_settings() -> None:
    """Clear cached settings (will reload on next access)."""
    global _current_settings
    _current_settings = None
