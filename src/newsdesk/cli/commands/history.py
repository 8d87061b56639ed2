"""Digest history command."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from newsdesk.cli.console import console, dim, error, warning


def register(app: typer.Typer) -> None:
    """Register the history command."""

    @app.command()
    def history(
        as_json: Annotated[
            bool,
            typer.Option("--json", help="Print digests as JSON lines"),
        ] = False,
        samples: Annotated[
            bool,
            typer.Option("--samples", help="Show built-in sample digests"),
        ] = False,
        config_path: Annotated[
            Path | None,
            typer.Option("--config", "-c", help="Path to configuration file"),
        ] = None,
    ) -> None:
        """Fetch the execution log once and print the digest feed."""
        from newsdesk.cli.runtime import load_config_or_exit

        config = load_config_or_exit(config_path)
        asyncio.run(_run(config, as_json=as_json, samples=samples))


async def _run(config, *, as_json: bool, samples: bool) -> None:
    from newsdesk.cli.formatting import digest_table
    from newsdesk.cli.runtime import open_dashboard

    async with open_dashboard(config, poll=False) as dashboard:
        if samples:
            dashboard.show_sample_data = True
        else:
            await dashboard.refresh()
            if dashboard.history_error:
                error(dashboard.history_error)
                raise typer.Exit(1)

        digests = dashboard.digests
        if as_json:
            for digest in digests:
                console.print(
                    digest.to_json(),
                    markup=False,
                    highlight=False,
                    soft_wrap=True,
                )
            return

        if not digests:
            warning("No digests yet")
            dim(
                "Your first AI news summary will arrive shortly! Configure your "
                "email and activate the schedule, or send one manually."
            )
            return

        console.print(digest_table(digests, title="Digest History"))
        dim(f"Total: {len(digests)} digest(s)")
