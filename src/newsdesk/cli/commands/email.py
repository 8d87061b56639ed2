"""Recipient email commands."""

from typing import Annotated

import click
import typer

from newsdesk.cli.console import console, dim, error, success, warning


def register(app: typer.Typer) -> None:
    """Register the email command."""

    @app.command()
    def email(
        action: Annotated[
            str | None,
            typer.Argument(help="Action: show, set, clear"),
        ] = None,
        address: Annotated[
            str | None,
            typer.Argument(help="Recipient address for set"),
        ] = None,
    ) -> None:
        """Manage the digest recipient address.

        Examples:
            newsdesk email show
            newsdesk email set you@example.com
            newsdesk email clear
        """
        if action is None:
            ctx = click.get_current_context()
            click.echo(ctx.get_help())
            raise typer.Exit(0)

        from newsdesk.cli.runtime import recipient_slot
        from newsdesk.recipients import EmailConfigStore

        store = EmailConfigStore(recipient_slot())
        current = store.load()

        if action == "show":
            if current:
                console.print(f"Current: {current}")
            else:
                warning("No recipient configured")
                dim("Run 'newsdesk email set <address>' to configure one")
            if not store.is_persistent:
                warning("Recipient storage is unavailable")

        elif action == "set":
            if not address:
                error("An address is required for set")
                raise typer.Exit(1)
            if not store.save(address):
                error(f"Not a valid email address: {address}")
                raise typer.Exit(1)
            success("Email saved")
            if not store.is_persistent:
                warning("Recipient storage is unavailable; saved for this run only")

        elif action == "clear":
            store.clear()
            success("Recipient cleared")

        else:
            error(f"Unknown action: {action}")
            console.print("Valid actions: show, set, clear")
            raise typer.Exit(1)
