"""Configuration module."""

from newsdesk.config.loader import get_default_config, load_config
from newsdesk.config.models import (
    AgentsConfig,
    ApiConfig,
    ConfigError,
    FeedbackConfig,
    NewsdeskConfig,
    PollingConfig,
    ScheduleConfig,
)
from newsdesk.config.paths import (
    get_config_path,
    get_logs_path,
    get_newsdesk_home,
    get_recipient_path,
)

__all__ = [
    "AgentsConfig",
    "ApiConfig",
    "ConfigError",
    "FeedbackConfig",
    "NewsdeskConfig",
    "PollingConfig",
    "ScheduleConfig",
    "get_config_path",
    "get_default_config",
    "get_logs_path",
    "get_newsdesk_home",
    "get_recipient_path",
    "load_config",
]
