"""Main CLI application."""

import typer

from newsdesk.cli.commands import config, email, history, schedule, send, watch

app = typer.Typer(
    name="newsdesk",
    help="newsdesk - AI news digest feed and schedule control",
    no_args_is_help=True,
)

for command in (watch, history, send, schedule, email, config):
    command.register(app)


def main() -> None:
    from newsdesk.logging import configure_logging

    configure_logging()
    app()


if __name__ == "__main__":
    main()
