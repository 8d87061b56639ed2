"""Live digest feed."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from newsdesk.cli.console import console, dim, error


def register(app: typer.Typer) -> None:
    """Register the watch command."""

    @app.command()
    def watch(
        interval: Annotated[
            float | None,
            typer.Option("--interval", "-i", help="Poll interval in seconds"),
        ] = None,
        samples: Annotated[
            bool,
            typer.Option("--samples", help="Show built-in sample digests"),
        ] = False,
        config_path: Annotated[
            Path | None,
            typer.Option("--config", "-c", help="Path to configuration file"),
        ] = None,
        verbose: Annotated[
            bool,
            typer.Option("--verbose", "-v", help="Log to the console at INFO"),
        ] = False,
    ) -> None:
        """Follow the digest feed, refreshing on the poll interval."""
        from newsdesk.cli.runtime import load_config_or_exit
        from newsdesk.logging import configure_logging

        configure_logging(
            level="INFO" if verbose else None, use_rich=True, log_to_file=True
        )
        config = load_config_or_exit(config_path)
        if interval is not None:
            if interval <= 0:
                error("--interval must be greater than zero")
                raise typer.Exit(1)
            config.polling.interval_seconds = interval

        try:
            asyncio.run(_run(config, samples=samples))
        except KeyboardInterrupt:
            dim("Stopped")


def render(dashboard):
    from rich.console import Group
    from rich.text import Text

    from newsdesk.cli.formatting import describe_schedule, digest_table

    parts = [
        Text.from_markup(
            "[bold]Schedule:[/bold] "
            + describe_schedule(dashboard.schedule, dashboard.schedule_status)
        ),
        Text(f"Recipient: {dashboard.recipient or '--'}"),
    ]
    if dashboard.history_error and not dashboard.show_sample_data:
        parts.append(Text(dashboard.history_error, style="red"))
    if dashboard.is_loading_history and not dashboard.digests:
        parts.append(Text("Loading digest history...", style="dim"))

    digests = dashboard.digests
    if digests:
        parts.append(digest_table(digests, title="Digest History"))
    elif not dashboard.is_loading_history:
        parts.append(Text("No digests yet", style="dim"))
    return Group(*parts)


async def _run(config, *, samples: bool) -> None:
    from rich.live import Live

    from newsdesk.cli.runtime import open_dashboard

    async with open_dashboard(config) as dashboard:
        dashboard.show_sample_data = samples
        changed = asyncio.Event()
        dashboard.add_listener(changed.set)

        with Live(render(dashboard), console=console, auto_refresh=False) as live:
            while True:
                await changed.wait()
                changed.clear()
                live.update(render(dashboard), refresh=True)
