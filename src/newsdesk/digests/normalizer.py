"""Normalize agent payloads into digest entries.

This is the only module that looks at the shape of agent output. Every
digest field is resolved by an ordered list of lookup paths: the first path
whose value survives coercion wins, otherwise the source-specific default
applies. Nothing here raises on missing or wrong-typed input.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from newsdesk.digests.parsing import parse_payload
from newsdesk.digests.types import DigestEntry, DigestSource, ExecutionLog

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT = "AI News Digest"

# Sentinel for "this path produced nothing usable"
_MISSING = object()

Coercer = Callable[[Any], Any]


def _text(value: Any) -> Any:
    if isinstance(value, str) and value:
        return value
    return _MISSING


def _count(value: Any) -> Any:
    if isinstance(value, bool):
        return _MISSING
    if isinstance(value, int):
        return value if value >= 0 else _MISSING
    if isinstance(value, float) and value.is_integer() and value >= 0:
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return _MISSING


def _flag(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    return _MISSING


@dataclass(frozen=True)
class FieldRule:
    """Ordered lookup paths for one digest field."""

    field: str
    paths: tuple[tuple[str, ...], ...]
    coerce: Coercer

    def resolve(self, payload: Any, default: Any) -> Any:
        for path in self.paths:
            value = _lookup(payload, path)
            if value is _MISSING:
                continue
            coerced = self.coerce(value)
            if coerced is not _MISSING:
                return coerced
        return default


def _lookup(payload: Any, path: tuple[str, ...]) -> Any:
    node = payload
    for key in path:
        if not isinstance(node, Mapping) or key not in node:
            return _MISSING
        node = node[key]
    if node is None:
        return _MISSING
    return node


def _rule(field: str, key: str, coerce: Coercer) -> FieldRule:
    return FieldRule(field=field, paths=((key,), ("result", key)), coerce=coerce)


FIELD_RULES: tuple[FieldRule, ...] = (
    _rule("subject", "subject", _text),
    _rule("recipient", "recipient", _text),
    _rule("stories_count", "stories_count", _count),
    _rule("workflow_status", "workflow_status", _text),
    _rule("email_sent", "email_sent", _flag),
    _rule("timestamp", "timestamp", _text),
)

SCHEDULED_DEFAULTS: dict[str, Any] = {
    "subject": DEFAULT_SUBJECT,
    "recipient": "",
    "stories_count": 0,
    "workflow_status": "unknown",
    "email_sent": False,
    "timestamp": "",
}

MANUAL_DEFAULTS: dict[str, Any] = {
    "subject": DEFAULT_SUBJECT,
    "recipient": "",
    "stories_count": 0,
    "workflow_status": "completed",
    "email_sent": True,
    "timestamp": "",
}


def normalize_fields(
    payload: Any,
    defaults: Mapping[str, Any],
    rules: tuple[FieldRule, ...] = FIELD_RULES,
) -> dict[str, Any]:
    """Resolve every rule against payload, falling back to defaults."""
    return {rule.field: rule.resolve(payload, defaults[rule.field]) for rule in rules}


def normalize_execution(log: ExecutionLog) -> DigestEntry:
    """Build a scheduled-origin entry from one execution log item.

    The entry's id and timestamp come from the log itself, never from the
    agent's output.
    """
    parsed = parse_payload(log.response_output)
    fields = normalize_fields(parsed, SCHEDULED_DEFAULTS)
    return DigestEntry(
        id=log.entry_id,
        timestamp=log.executed_at,
        subject=fields["subject"],
        recipient=fields["recipient"],
        stories_count=fields["stories_count"],
        workflow_status=fields["workflow_status"],
        email_sent=fields["email_sent"],
        source=DigestSource.SCHEDULED,
        raw_response=parsed,
    )


def new_manual_id() -> str:
    return f"manual-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


def normalize_manual(
    response: Any,
    recipient: str,
    now: datetime | None = None,
    entry_id: str | None = None,
) -> DigestEntry:
    """Build a manual-origin entry from an agent invocation response.

    Args:
        response: Raw agent response (text or decoded JSON).
        recipient: Configured recipient, used when the agent does not echo one.
        now: Fallback timestamp when the payload carries none.
        entry_id: Explicit id, generated when omitted.
    """
    parsed = parse_payload(response)
    defaults = dict(MANUAL_DEFAULTS)
    defaults["recipient"] = recipient
    defaults["timestamp"] = (now or datetime.now(UTC)).isoformat()

    fields = normalize_fields(parsed, defaults)
    if parsed is None:
        logger.debug("manual_response_defaulted")

    return DigestEntry(
        id=entry_id or new_manual_id(),
        timestamp=fields["timestamp"],
        subject=fields["subject"],
        recipient=fields["recipient"],
        stories_count=fields["stories_count"],
        workflow_status=fields["workflow_status"],
        email_sent=fields["email_sent"],
        source=DigestSource.MANUAL,
        raw_response=parsed,
    )
