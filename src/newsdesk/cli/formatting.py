"""Rendering helpers for digests and schedule state."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from rich.table import Table

from newsdesk.cli.console import create_table
from newsdesk.digests.types import DigestEntry
from newsdesk.scheduling.types import ScheduleState, ScheduleStatus

DEFAULT_CADENCE = "Every 10 minutes"


def _parse(ts: str) -> datetime | None:
    try:
        return datetime.fromisoformat(ts)
    except ValueError:
        return None


def format_timestamp(ts: str | None) -> str:
    """Short form, e.g. 'Feb 23, 08:00 AM'. Unparsable input is echoed."""
    if not ts:
        return "--"
    parsed = _parse(ts)
    if parsed is None:
        return ts
    return parsed.strftime("%b %d, %I:%M %p")


def format_full_timestamp(ts: str | None) -> str:
    """Long form, e.g. 'Mon, Feb 23, 2026, 08:00:00 AM'."""
    if not ts:
        return "--"
    parsed = _parse(ts)
    if parsed is None:
        return ts
    return parsed.strftime("%a, %b %d, %Y, %I:%M:%S %p")


def describe_schedule(state: ScheduleState | None, status: ScheduleStatus) -> str:
    """One-line schedule summary with cadence, status and next run."""
    cadence = state.cron_expression if state and state.cron_expression else DEFAULT_CADENCE
    if status is ScheduleStatus.UNKNOWN:
        return f"{cadence} | [dim]Unknown[/dim]"
    if status is ScheduleStatus.ACTIVE:
        line = f"{cadence} | [green]Active[/green]"
        if state and state.next_run_time:
            line += f" | next run {format_timestamp(state.next_run_time)}"
        return line
    return f"{cadence} | [yellow]Paused[/yellow]"


def digest_table(digests: Iterable[DigestEntry], title: str | None = None) -> Table:
    table = create_table(
        title,
        [
            ("Time", "dim"),
            ("Subject", {"overflow": "fold"}),
            ("Recipient", ""),
            ("Stories", {"justify": "right"}),
            ("Status", ""),
            ("Source", "dim"),
        ],
    )
    for digest in digests:
        sent = "[green]Sent[/green]" if digest.email_sent else "[dim]Pending[/dim]"
        table.add_row(
            format_timestamp(digest.timestamp),
            digest.subject or "Untitled Digest",
            digest.recipient or "--",
            str(digest.stories_count),
            sent,
            "Manual" if digest.is_manual else "",
        )
    return table
