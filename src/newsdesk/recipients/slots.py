"""Single-value persistent slots for the recipient address."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Protocol

from filelock import FileLock, Timeout

logger = logging.getLogger(__name__)

RECIPIENT_KEY = "digest_recipient_email"


class SlotUnavailableError(Exception):
    """The backing store cannot be read or written."""


class KeyValueSlot(Protocol):
    def get(self) -> str | None: ...

    def set(self, value: str) -> None: ...

    def delete(self) -> None: ...


class MemorySlot:
    """Process-local slot, also the degraded mode when no store is usable."""

    def __init__(self, value: str | None = None) -> None:
        self._value = value

    def get(self) -> str | None:
        return self._value

    def set(self, value: str) -> None:
        self._value = value

    def delete(self) -> None:
        self._value = None


class JsonFileSlot:
    """One key inside a small JSON object file.

    Other keys in the file are preserved on write. Access is serialized with
    a sidecar lock file so concurrent CLI invocations do not interleave.
    """

    def __init__(
        self, path: Path, key: str = RECIPIENT_KEY, lock_timeout: float = 5.0
    ) -> None:
        self._path = path
        self._key = key
        self._lock = FileLock(str(path) + ".lock", timeout=lock_timeout)

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> str | None:
        with self._locked():
            value = self._read().get(self._key)
        return value if isinstance(value, str) else None

    def set(self, value: str) -> None:
        with self._locked():
            data = self._read()
            data[self._key] = value
            self._write(data)

    def delete(self) -> None:
        with self._locked():
            data = self._read()
            if self._key in data:
                del data[self._key]
                self._write(data)

    @contextmanager
    def _locked(self) -> Iterator[None]:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._lock.acquire()
        except (OSError, Timeout) as e:
            raise SlotUnavailableError(str(e)) from e
        try:
            yield
        finally:
            self._lock.release()

    def _read(self) -> dict[str, object]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise SlotUnavailableError(str(e)) from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            logger.warning("recipient_slot_corrupt", extra={"file.path": str(self._path)})
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, object]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
            tmp.replace(self._path)
        except OSError as e:
            raise SlotUnavailableError(str(e)) from e
