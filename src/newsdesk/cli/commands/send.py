"""Manual send command."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from newsdesk.cli.console import console, dim, error, success


def register(app: typer.Typer) -> None:
    """Register the send command."""

    @app.command()
    def send(
        config_path: Annotated[
            Path | None,
            typer.Option("--config", "-c", help="Path to configuration file"),
        ] = None,
    ) -> None:
        """Generate and email a digest now."""
        from newsdesk.cli.runtime import load_config_or_exit

        config = load_config_or_exit(config_path)
        asyncio.run(_run(config))


async def _run(config) -> None:
    from newsdesk.cli.formatting import digest_table
    from newsdesk.cli.runtime import open_dashboard

    async with open_dashboard(config, poll=False) as dashboard:
        if not dashboard.recipient:
            error("Configure a recipient email first")
            dim("Run 'newsdesk email set <address>'")
            raise typer.Exit(1)

        with console.status("Generating digest..."):
            entry = await dashboard.send_now()

        if entry is None:
            error(dashboard.send_error or "Failed to send digest")
            raise typer.Exit(1)

        success(dashboard.send_success or "Digest sent successfully")
        console.print(digest_table([entry]))
