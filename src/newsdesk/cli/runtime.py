"""Shared runtime bootstrap helpers for CLI entrypoints."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import typer

from newsdesk.cli.console import error
from newsdesk.client.http import AgentApiClient
from newsdesk.config import ConfigError, NewsdeskConfig, load_config
from newsdesk.config.paths import get_recipient_path
from newsdesk.dashboard import DigestDashboard
from newsdesk.recipients.slots import JsonFileSlot


def load_config_or_exit(path: Path | None) -> NewsdeskConfig:
    """Load config, turning config problems into a clean CLI exit."""
    try:
        return load_config(path)
    except FileNotFoundError as e:
        error(str(e))
        raise typer.Exit(1) from None
    except ConfigError as e:
        error(f"Invalid configuration: {e}")
        raise typer.Exit(1) from None


def recipient_slot() -> JsonFileSlot:
    return JsonFileSlot(get_recipient_path())


@asynccontextmanager
async def open_dashboard(
    config: NewsdeskConfig, *, poll: bool = True
) -> AsyncIterator[DigestDashboard]:
    """Run a dashboard for the duration of the block, then tear it down."""
    async with AgentApiClient(config.api) as client:
        dashboard = DigestDashboard(config, client, client, recipient_slot())
        await dashboard.start(poll=poll)
        try:
            yield dashboard
        finally:
            await dashboard.stop()
