"""Recipient email configuration."""

from __future__ import annotations

import asyncio
import logging
import re
import time
from collections.abc import Callable

from newsdesk.recipients.slots import KeyValueSlot, SlotUnavailableError

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

SAVED_CONFIRMATION_SECONDS = 3.0


def validate_email(candidate: str) -> bool:
    """Loose local@domain.tld check; not RFC 5322."""
    return isinstance(candidate, str) and EMAIL_RE.fullmatch(candidate) is not None


class EmailConfigStore:
    """Holds the digest recipient and persists it to a key-value slot.

    A slot that cannot be read or written is treated as empty and the store
    keeps working in memory. After a successful save the ``saved`` flag is
    raised for a fixed delay, then drops on its own.
    """

    def __init__(
        self,
        slot: KeyValueSlot,
        confirmation_seconds: float = SAVED_CONFIRMATION_SECONDS,
    ) -> None:
        self._slot = slot
        self._confirmation_seconds = confirmation_seconds
        self._recipient: str | None = None
        self._persisted = True
        self._saved_until: float | None = None
        self._timer: asyncio.TimerHandle | None = None
        self._closed = False
        self._listeners: list[Callable[[], None]] = []

    @property
    def recipient(self) -> str | None:
        return self._recipient

    @property
    def is_persistent(self) -> bool:
        """False once the slot has failed and values live only in memory."""
        return self._persisted

    @property
    def saved(self) -> bool:
        """Save confirmation, visible for a short time after save()."""
        if self._saved_until is None:
            return False
        if time.monotonic() >= self._saved_until:
            self._saved_until = None
            return False
        return True

    def add_listener(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    @staticmethod
    def validate(candidate: str) -> bool:
        return validate_email(candidate)

    def load(self) -> str | None:
        """Read the persisted recipient; unavailable storage means absent."""
        try:
            value = self._slot.get()
        except SlotUnavailableError as e:
            logger.warning("recipient_store_unavailable", extra={"error.message": str(e)})
            self._persisted = False
            return None

        if value is None:
            return None
        if not validate_email(value):
            logger.warning("recipient_store_invalid_value")
            return None

        self._recipient = value
        self._notify()
        return value

    def save(self, candidate: str) -> bool:
        """Validate and persist a new recipient. Invalid input is a no-op."""
        candidate = candidate.strip() if isinstance(candidate, str) else candidate
        if not validate_email(candidate):
            logger.debug("recipient_rejected")
            return False

        try:
            self._slot.set(candidate)
        except SlotUnavailableError as e:
            logger.warning("recipient_store_unavailable", extra={"error.message": str(e)})
            self._persisted = False

        self._recipient = candidate
        logger.info("recipient_saved", extra={"recipient.persisted": self._persisted})
        self._show_confirmation()
        self._notify()
        return True

    def clear(self) -> None:
        """Forget the recipient, in memory and in the slot."""
        try:
            self._slot.delete()
        except SlotUnavailableError as e:
            logger.warning("recipient_store_unavailable", extra={"error.message": str(e)})
            self._persisted = False
        self._recipient = None
        self._cancel_timer()
        self._saved_until = None
        logger.info("recipient_cleared")
        self._notify()

    def close(self) -> None:
        """Cancel the pending confirmation reset and schedule no new ones."""
        self._closed = True
        self._cancel_timer()

    def _show_confirmation(self) -> None:
        self._cancel_timer()
        self._saved_until = time.monotonic() + self._confirmation_seconds
        if self._closed:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop to drive a callback; the saved property still expires
            return
        self._timer = loop.call_later(self._confirmation_seconds, self._expire)

    def _expire(self) -> None:
        self._timer = None
        self._saved_until = None
        self._notify()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()
