"""CLI command modules."""

from newsdesk.cli.commands import config, email, history, schedule, send, watch

__all__ = [
    "config",
    "email",
    "history",
    "schedule",
    "send",
    "watch",
]
