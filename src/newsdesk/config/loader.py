"""Configuration loading from TOML files and environment variables."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import SecretStr, ValidationError

from newsdesk.config.models import ConfigError, NewsdeskConfig
from newsdesk.config.paths import get_config_path

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "NEWSDESK_API_KEY"
BASE_URL_ENV_VAR = "NEWSDESK_API_BASE_URL"


def _get_default_config_paths() -> list[Path]:
    """Get ordered list of default config file locations."""
    return [
        Path("config.toml"),  # Current directory
        get_config_path(),  # ~/.newsdesk/config.toml (or NEWSDESK_HOME)
        Path("/etc/newsdesk/config.toml"),  # System-wide
    ]


def _resolve_env(config: dict[str, Any]) -> dict[str, Any]:
    """Fill API settings from the environment where not set in config."""
    api = config.setdefault("api", {})
    if not isinstance(api, dict):
        return config

    if api.get("api_key") is None:
        if value := os.environ.get(API_KEY_ENV_VAR):
            api["api_key"] = SecretStr(value)
    if api.get("base_url") is None:
        if value := os.environ.get(BASE_URL_ENV_VAR):
            api["base_url"] = value

    return config


def find_config_path(path: Path | None = None) -> Path | None:
    """Resolve the config file to load, or None when none exists.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
    """
    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return config_path

    for default_path in _get_default_config_paths():
        expanded = default_path.expanduser()
        if expanded.exists():
            return expanded
    return None


def load_config(path: Path | None = None) -> NewsdeskConfig:
    """Load configuration from TOML file.

    Unlike an explicit path, a missing default file is not an error: the
    built-in defaults (plus environment) are used instead.

    Raises:
        FileNotFoundError: If an explicit config path does not exist.
        ConfigError: If the file is not valid TOML or fails validation.
    """
    config_path = find_config_path(path)

    raw_config: dict[str, Any] = {}
    if config_path is not None:
        try:
            with config_path.open("rb") as f:
                raw_config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e
        logger.debug("config_loaded", extra={"file.path": str(config_path)})

    raw_config = _resolve_env(raw_config)

    try:
        return NewsdeskConfig.model_validate(raw_config)
    except ValidationError as e:
        raise ConfigError(str(e)) from e


def get_default_config() -> NewsdeskConfig:
    """Get a default configuration for development/testing."""
    return NewsdeskConfig()
