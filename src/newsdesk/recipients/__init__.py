"""Recipient configuration.

Public API:
- EmailConfigStore: Validated, persisted recipient with save confirmation
- validate_email: Shape check used to enable saving
- JsonFileSlot / MemorySlot: Single-value storage backends
"""

from newsdesk.recipients.slots import (
    RECIPIENT_KEY,
    JsonFileSlot,
    KeyValueSlot,
    MemorySlot,
    SlotUnavailableError,
)
from newsdesk.recipients.store import EmailConfigStore, validate_email

__all__ = [
    "RECIPIENT_KEY",
    "EmailConfigStore",
    "JsonFileSlot",
    "KeyValueSlot",
    "MemorySlot",
    "SlotUnavailableError",
    "validate_email",
]
