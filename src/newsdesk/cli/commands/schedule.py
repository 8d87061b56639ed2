"""Schedule status and toggle commands."""

import asyncio
from pathlib import Path
from typing import Annotated

import click
import typer

from newsdesk.cli.console import console, error, success, warning


def register(app: typer.Typer) -> None:
    """Register the schedule command."""

    @app.command()
    def schedule(
        action: Annotated[
            str | None,
            typer.Argument(help="Action: status, pause, resume, toggle"),
        ] = None,
        config_path: Annotated[
            Path | None,
            typer.Option("--config", "-c", help="Path to configuration file"),
        ] = None,
    ) -> None:
        """Show or change the digest schedule.

        Examples:
            newsdesk schedule status
            newsdesk schedule pause
            newsdesk schedule resume
        """
        if action is None:
            ctx = click.get_current_context()
            click.echo(ctx.get_help())
            raise typer.Exit(0)

        if action not in ("status", "pause", "resume", "toggle"):
            error(f"Unknown action: {action}")
            console.print("Valid actions: status, pause, resume, toggle")
            raise typer.Exit(1)

        from newsdesk.cli.runtime import load_config_or_exit

        config = load_config_or_exit(config_path)
        asyncio.run(_run(config, action))


async def _run(config, action: str) -> None:
    from newsdesk.cli.formatting import describe_schedule
    from newsdesk.cli.runtime import open_dashboard
    from newsdesk.scheduling import ScheduleStatus

    async with open_dashboard(config, poll=False) as dashboard:
        controller = dashboard.schedule_controller
        status = await controller.refresh()

        if status is ScheduleStatus.UNKNOWN:
            error("Schedule not found or unavailable")
            raise typer.Exit(1)
        if controller.using_fallback:
            warning(
                f"Schedule {config.schedule.schedule_id} not listed; "
                f"using {controller.state.id}"
            )

        wanted = {
            "pause": ScheduleStatus.PAUSED,
            "resume": ScheduleStatus.ACTIVE,
        }.get(action)

        if action != "status":
            if wanted is not None and status is wanted:
                warning(f"Schedule is already {status.value}")
            else:
                await controller.toggle()
                if controller.status is status:
                    error("Schedule state did not change")
                    console.print(describe_schedule(controller.state, controller.status))
                    raise typer.Exit(1)
                success(f"Schedule {controller.status.value}")

        console.print(describe_schedule(controller.state, controller.status))
