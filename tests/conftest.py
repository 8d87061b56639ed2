"""Shared test fixtures."""

from pathlib import Path

import pytest
from fakes import AGENT_ID, SCHEDULE_ID, FakeAgentClient, FakeSchedulerClient

from newsdesk.config.models import FeedbackConfig, NewsdeskConfig, PollingConfig
from newsdesk.scheduling.types import ScheduleState


@pytest.fixture
def active_schedule() -> ScheduleState:
    return ScheduleState(
        id=SCHEDULE_ID,
        cron_expression="*/10 * * * *",
        is_active=True,
        next_run_time="2026-02-23T08:10:00Z",
    )


@pytest.fixture
def scheduler(active_schedule: ScheduleState) -> FakeSchedulerClient:
    return FakeSchedulerClient([active_schedule])


@pytest.fixture
def agent() -> FakeAgentClient:
    return FakeAgentClient()


@pytest.fixture
def config() -> NewsdeskConfig:
    """Config pointing at the fake ids, with a poll interval that never ticks."""
    cfg = NewsdeskConfig(
        polling=PollingConfig(interval_seconds=3600),
        feedback=FeedbackConfig(
            saved_confirmation_seconds=0.05, send_message_seconds=0.05
        ),
    )
    cfg.agents.manager = AGENT_ID
    cfg.schedule.schedule_id = SCHEDULE_ID
    return cfg


@pytest.fixture
def newsdesk_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point NEWSDESK_HOME at a temp dir for the duration of a test."""
    from newsdesk.config.paths import ENV_VAR, get_newsdesk_home

    home = tmp_path / "home"
    monkeypatch.setenv(ENV_VAR, str(home))
    monkeypatch.delenv("NEWSDESK_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)
    get_newsdesk_home.cache_clear()
    yield home
    get_newsdesk_home.cache_clear()


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner with colors disabled."""
    from typer.testing import CliRunner

    return CliRunner(env={"NO_COLOR": "1", "COLUMNS": "200"})
