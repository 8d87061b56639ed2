"""Centralized path management for newsdesk.

All local state (config, recipient slot, logs) lives under a single base
directory. The base directory can be overridden with the NEWSDESK_HOME
environment variable.

Default location: ~/.newsdesk
"""

import os
from functools import lru_cache
from pathlib import Path

ENV_VAR = "NEWSDESK_HOME"


@lru_cache(maxsize=1)
def get_newsdesk_home() -> Path:
    """Get the base directory for all newsdesk data.

    Resolution order:
    1. NEWSDESK_HOME environment variable (if set)
    2. Platform default (~/.newsdesk)
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()

    return Path.home() / ".newsdesk"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_newsdesk_home() / "config.toml"


def get_logs_path() -> Path:
    """Get the default logs directory path."""
    return get_newsdesk_home() / "logs"


def get_recipient_path() -> Path:
    """Get the file backing the persisted recipient slot."""
    return get_newsdesk_home() / "recipient.json"


def get_all_paths() -> dict[str, Path]:
    """Get all standard paths for debugging/display."""
    return {
        "home": get_newsdesk_home(),
        "config": get_config_path(),
        "logs": get_logs_path(),
        "recipient": get_recipient_path(),
    }
