"""Digest feed types.

Public types:
- DigestSource: Provenance of a feed entry (manual or scheduled)
- DigestEntry: One item in the digest feed
- ExecutionLog: One entry of the remote schedule execution log
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class DigestSource(StrEnum):
    """Where a digest entry came from."""

    MANUAL = "manual"
    SCHEDULED = "scheduled"


@dataclass(frozen=True)
class DigestEntry:
    """A single digest in the feed.

    Entries are immutable: the feed replaces scheduled entries wholesale on
    every poll and never edits manual ones.
    """

    id: str
    timestamp: str
    subject: str
    recipient: str
    source: DigestSource
    stories_count: int = 0
    workflow_status: str = "unknown"
    email_sent: bool = False
    raw_response: Any = None

    @property
    def is_manual(self) -> bool:
        return self.source == DigestSource.MANUAL

    @property
    def is_scheduled(self) -> bool:
        return self.source == DigestSource.SCHEDULED

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "subject": self.subject,
            "recipient": self.recipient,
            "stories_count": self.stories_count,
            "workflow_status": self.workflow_status,
            "email_sent": self.email_sent,
            "source": self.source.value,
            "raw_response": self.raw_response,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


@dataclass(frozen=True)
class ExecutionLog:
    """One execution of a remote schedule, as reported by the log endpoint."""

    id: str
    executed_at: str
    success: bool
    response_output: Any = None

    @property
    def entry_id(self) -> str:
        """Stable feed id: the log's own id, else derived from its timestamp."""
        return self.id or f"log-{self.executed_at}"

    @classmethod
    def from_dict(cls, data: Any) -> ExecutionLog | None:
        """Build from a raw log listing item; None for non-mapping items."""
        if not isinstance(data, dict):
            return None

        raw_id = data.get("id") or data.get("_id") or ""
        executed_at = data.get("executed_at") or data.get("executedAt") or ""
        return cls(
            id=str(raw_id),
            executed_at=executed_at if isinstance(executed_at, str) else "",
            success=data.get("success") is True,
            response_output=data.get("response_output", data.get("responseOutput")),
        )
