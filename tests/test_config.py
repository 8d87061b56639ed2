"""Tests for configuration loading and models."""

import pytest
from pydantic import SecretStr, ValidationError

from newsdesk.config.loader import _resolve_env, find_config_path, get_default_config, load_config
from newsdesk.config.models import (
    DEFAULT_API_BASE_URL,
    SCHEDULE_ID,
    ApiConfig,
    ConfigError,
    NewsdeskConfig,
    PollingConfig,
)


class TestModels:
    """Tests for config model defaults and validation."""

    def test_defaults(self):
        config = NewsdeskConfig()
        assert config.api.base_url == DEFAULT_API_BASE_URL
        assert config.api.api_key is None
        assert config.schedule.schedule_id == SCHEDULE_ID
        assert config.schedule.fallback_to_first is True
        assert config.polling.interval_seconds == 60
        assert config.polling.history_limit == 50
        assert config.feedback.saved_confirmation_seconds == 3
        assert config.feedback.send_message_seconds == 5

    def test_base_url_trailing_slash_stripped(self):
        assert ApiConfig(base_url="https://api.test/").base_url == "https://api.test"

    def test_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            PollingConfig(interval_seconds=0)

    def test_history_limit_at_least_one(self):
        with pytest.raises(ValidationError):
            PollingConfig(history_limit=0)

    def test_api_key_is_secret(self):
        config = ApiConfig(api_key="sk-abc")
        assert isinstance(config.api_key, SecretStr)
        assert "sk-abc" not in repr(config)


class TestResolveEnv:
    """Tests for environment fallbacks."""

    def test_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv("NEWSDESK_API_KEY", "from-env")
        resolved = _resolve_env({})
        assert resolved["api"]["api_key"].get_secret_value() == "from-env"

    def test_file_value_wins_over_env(self, monkeypatch):
        monkeypatch.setenv("NEWSDESK_API_KEY", "from-env")
        resolved = _resolve_env({"api": {"api_key": "from-file"}})
        assert resolved["api"]["api_key"] == "from-file"

    def test_base_url_from_env(self, monkeypatch):
        monkeypatch.setenv("NEWSDESK_API_BASE_URL", "https://staging.test")
        assert _resolve_env({})["api"]["base_url"] == "https://staging.test"


class TestLoadConfig:
    """Tests for load_config()."""

    def test_load_from_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("NEWSDESK_API_KEY", raising=False)
        path = tmp_path / "config.toml"
        path.write_text(
            """
[api]
base_url = "https://api.test/"
api_key = "sk-file"

[agents]
manager = "mgr-1"

[schedule]
schedule_id = "sched-9"
fallback_to_first = false

[polling]
interval_seconds = 30
"""
        )

        config = load_config(path)

        assert config.api.base_url == "https://api.test"
        assert config.api.api_key.get_secret_value() == "sk-file"
        assert config.agents.manager == "mgr-1"
        assert config.schedule.schedule_id == "sched-9"
        assert config.schedule.fallback_to_first is False
        assert config.polling.interval_seconds == 30

    def test_env_fills_missing_key(self, tmp_path, monkeypatch):
        monkeypatch.setenv("NEWSDESK_API_KEY", "sk-env")
        path = tmp_path / "config.toml"
        path.write_text("[polling]\ninterval_seconds = 10\n")

        assert load_config(path).api.api_key.get_secret_value() == "sk-env"

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_no_file_uses_defaults(self, newsdesk_home):
        config = load_config()
        assert config == NewsdeskConfig()
        assert find_config_path() is None

    def test_default_search_finds_home_config(self, newsdesk_home):
        newsdesk_home.mkdir(parents=True)
        (newsdesk_home / "config.toml").write_text('[agents]\nmanager = "from-home"\n')

        assert load_config().agents.manager == "from-home"

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("not valid toml [[[")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[polling]\ninterval_seconds = -5\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_get_default_config(self):
        assert get_default_config().polling.interval_seconds == 60
