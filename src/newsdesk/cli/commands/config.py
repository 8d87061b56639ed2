"""Configuration management commands."""

from pathlib import Path
from typing import Annotated

import click
import typer

from newsdesk.cli.console import console, error, success


def register(app: typer.Typer) -> None:
    """Register the config command."""

    @app.command()
    def config(
        action: Annotated[
            str | None,
            typer.Argument(help="Action: show, validate"),
        ] = None,
        path: Annotated[
            Path | None,
            typer.Option(
                "--path",
                "-p",
                help="Path to config file (default: $NEWSDESK_HOME/config.toml)",
            ),
        ] = None,
    ) -> None:
        """Manage configuration."""
        if action is None:
            ctx = click.get_current_context()
            click.echo(ctx.get_help())
            raise typer.Exit(0)

        from rich.syntax import Syntax
        from rich.table import Table

        from newsdesk.config import ConfigError, load_config
        from newsdesk.config.paths import get_config_path

        expanded_path = path.expanduser() if path else get_config_path()

        if action == "show":
            if not expanded_path.exists():
                error(f"Config file not found: {expanded_path}")
                console.print("Built-in defaults are in use")
                raise typer.Exit(1)

            content = expanded_path.read_text()
            syntax = Syntax(content, "toml", theme="monokai", line_numbers=True)
            console.print(f"[bold]Config file: {expanded_path}[/bold]\n")
            console.print(syntax)

        elif action == "validate":
            if not expanded_path.exists():
                error(f"Config file not found: {expanded_path}")
                raise typer.Exit(1)

            try:
                config_obj = load_config(expanded_path)
            except ConfigError as e:
                error("Configuration validation failed:")
                console.print(str(e), markup=False)
                raise typer.Exit(1) from None

            table = Table(title="Configuration Summary")
            table.add_column("Setting", style="cyan")
            table.add_column("Value", style="green")
            table.add_row("API", config_obj.api.base_url)
            table.add_row(
                "API key",
                "configured"
                if config_obj.api.api_key
                else "[dim]not configured[/dim]",
            )
            table.add_row("Manager agent", config_obj.agents.manager)
            table.add_row("Research agent", config_obj.agents.research)
            table.add_row("Email agent", config_obj.agents.email)
            table.add_row("Schedule", config_obj.schedule.schedule_id)
            table.add_row(
                "Poll interval", f"{config_obj.polling.interval_seconds:g}s"
            )

            success("Configuration is valid!")
            console.print()
            console.print(table)

        else:
            error(f"Unknown action: {action}")
            console.print("Valid actions: show, validate")
            raise typer.Exit(1)
