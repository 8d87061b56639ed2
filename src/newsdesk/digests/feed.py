"""Digest feed reconciliation.

The feed holds two kinds of entries. Manual entries are inserted one at a
time and are never touched again. Scheduled entries are owned by the remote
execution log: every poll delivers a bounded snapshot of recent executions
and that snapshot replaces the previous one wholesale. Full replacement keeps
merges idempotent and makes the result independent of which poll response
arrives last, without sequence numbers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from datetime import UTC, datetime

from newsdesk.digests.normalizer import normalize_execution
from newsdesk.digests.types import DigestEntry, ExecutionLog

logger = logging.getLogger(__name__)


def timestamp_sort_key(timestamp: str) -> tuple[int, float, str]:
    """Sort key for ISO-8601 timestamps.

    Parsable timestamps order by instant (naive values are taken as UTC).
    Unparsable ones order by their raw string, below every parsable one.
    """
    try:
        parsed = datetime.fromisoformat(timestamp)
    except (TypeError, ValueError):
        return (0, 0.0, timestamp or "")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return (1, parsed.timestamp(), "")


def sort_entries(entries: Iterable[DigestEntry]) -> list[DigestEntry]:
    """Newest first; entries with equal keys keep their relative order."""
    return sorted(entries, key=lambda e: timestamp_sort_key(e.timestamp), reverse=True)


class FeedReconciler:
    """Owns the canonical, sorted list of digest entries.

    Example:
        feed = FeedReconciler()
        feed.insert_manual(entry)
        feed.merge_executions(logs)
        for digest in feed:
            ...
    """

    def __init__(self) -> None:
        self._entries: list[DigestEntry] = []

    def __iter__(self) -> Iterator[DigestEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[DigestEntry, ...]:
        return tuple(self._entries)

    @property
    def manual_entries(self) -> tuple[DigestEntry, ...]:
        return tuple(e for e in self._entries if e.is_manual)

    @property
    def scheduled_entries(self) -> tuple[DigestEntry, ...]:
        return tuple(e for e in self._entries if e.is_scheduled)

    def get(self, entry_id: str) -> DigestEntry | None:
        return next((e for e in self._entries if e.id == entry_id), None)

    def insert_manual(self, entry: DigestEntry) -> None:
        """Prepend a manual entry and re-sort.

        Raises:
            ValueError: If the entry is not manual-origin or its id is
                already held by another manual entry.
        """
        if not entry.is_manual:
            raise ValueError(f"Expected a manual entry, got {entry.source}")
        if any(e.id == entry.id and e.is_manual for e in self._entries):
            raise ValueError(f"Duplicate digest id: {entry.id}")

        # A scheduled entry can only share the id by accident; the manual one wins
        rest = [e for e in self._entries if e.id != entry.id]
        self._entries = sort_entries([entry, *rest])
        logger.debug(
            "manual_digest_inserted",
            extra={"digest.id": entry.id, "feed.size": len(self._entries)},
        )

    def merge_scheduled(self, entries: Iterable[DigestEntry]) -> None:
        """Replace all scheduled entries with a fresh snapshot.

        Manual entries are retained untouched. Within the snapshot the first
        occurrence of an id wins, and ids already held by a manual entry are
        dropped.
        """
        manual = [e for e in self._entries if e.is_manual]
        seen = {e.id for e in manual}

        scheduled: list[DigestEntry] = []
        for entry in entries:
            if entry.is_manual:
                raise ValueError(f"Expected a scheduled entry, got {entry.source}")
            if entry.id in seen:
                logger.debug("scheduled_digest_duplicate", extra={"digest.id": entry.id})
                continue
            seen.add(entry.id)
            scheduled.append(entry)

        self._entries = sort_entries([*manual, *scheduled])
        logger.debug(
            "scheduled_digests_merged",
            extra={
                "feed.manual": len(manual),
                "feed.scheduled": len(scheduled),
            },
        )

    def merge_executions(self, executions: Iterable[ExecutionLog]) -> None:
        """Merge a log snapshot, admitting only successful executions."""
        admitted = [normalize_execution(log) for log in executions if log.success]
        self.merge_scheduled(admitted)
