"""Digest feed subsystem.

Public API:
- FeedReconciler: Canonical ordered feed of manual and scheduled digests
- PollingLoop: Timer that refreshes scheduled digests from the execution log
- normalize_execution / normalize_manual: Payload to DigestEntry
- parse_payload: Lenient JSON extraction from agent output

Types:
- DigestEntry, DigestSource, ExecutionLog
"""

from newsdesk.digests.feed import FeedReconciler, sort_entries
from newsdesk.digests.normalizer import normalize_execution, normalize_manual
from newsdesk.digests.parsing import parse_payload
from newsdesk.digests.poller import PollingLoop
from newsdesk.digests.samples import SAMPLE_DIGESTS
from newsdesk.digests.types import DigestEntry, DigestSource, ExecutionLog

__all__ = [
    "SAMPLE_DIGESTS",
    "DigestEntry",
    "DigestSource",
    "ExecutionLog",
    "FeedReconciler",
    "PollingLoop",
    "normalize_execution",
    "normalize_manual",
    "parse_payload",
    "sort_entries",
]
