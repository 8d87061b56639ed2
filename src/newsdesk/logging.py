"""Centralized logging configuration for newsdesk.

All entry points (the CLI commands) should call configure_logging() early.

Logging Levels:
- DEBUG: Poll ticks, payload normalization fallbacks, HTTP round trips
- INFO: Operator actions (send, save, toggle) and their outcomes
- WARNING: Degraded operation (store unavailable, schedule fallback, failed fetch)
- ERROR: Unexpected exceptions absorbed by a component

Modules log snake_case event names and pass details through ``extra`` with
dotted keys (``schedule.id``, ``error.message``).
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TextIO

DEFAULT_LOG_RETENTION_DAYS = 7

DEFAULT_REDACT_PATTERNS: list[str] = [
    # Platform API keys
    r"\b(sk-[A-Za-z0-9_-]{20,})\b",
    # Header / ENV-style assignments: x-api-key: secret, API_KEY=secret
    r"\b(?:x-api-key|[A-Z0-9_]+(?:KEY|TOKEN|SECRET))\s*[=:]\s*([^\s\"']{8,})",
    r"\bBearer\s+([A-Za-z0-9._\-+=]{20,})\b",
]

# Recipient addresses are masked down to the first character of the local part
EMAIL_PATTERN = re.compile(r"\b([A-Za-z0-9._%+-])[A-Za-z0-9._%+-]*@([A-Za-z0-9.-]+)")


@dataclass
class SecretRedactor:
    """Redacts API keys and recipient addresses from log messages."""

    patterns: list[re.Pattern[str]] = field(default_factory=list)
    redact_emails: bool = True
    enabled: bool = True

    def __post_init__(self) -> None:
        if not self.patterns:
            self.patterns = [
                re.compile(p, re.IGNORECASE) for p in DEFAULT_REDACT_PATTERNS
            ]

    def redact(self, text: str) -> str:
        if not self.enabled or not text:
            return text
        result = text
        for pattern in self.patterns:
            result = pattern.sub(self._mask_match, result)
        if self.redact_emails:
            result = EMAIL_PATTERN.sub(r"\1***@\2", result)
        return result

    def _mask_match(self, match: re.Match[str]) -> str:
        full = match.group(0)
        token = match.group(1) if match.lastindex else full

        if "..." in token:
            return full

        if len(token) < 12:
            return full.replace(token, "***") if token != full else "***"

        masked = f"{token[:4]}...{token[-4:]}"
        return full.replace(token, masked) if token != full else masked


_redactor = SecretRedactor()


def configure_redaction(
    enabled: bool = True,
    redact_emails: bool = True,
    extra_patterns: list[str] | None = None,
) -> None:
    """Configure redaction for log messages."""
    global _redactor
    patterns = [re.compile(p, re.IGNORECASE) for p in DEFAULT_REDACT_PATTERNS]
    if extra_patterns:
        patterns.extend(re.compile(p, re.IGNORECASE) for p in extra_patterns)
    _redactor = SecretRedactor(
        patterns=patterns, redact_emails=redact_emails, enabled=enabled
    )


def prune_old_logs(
    logs_dir: Path,
    retention_days: int = DEFAULT_LOG_RETENTION_DAYS,
    suffix: str = ".jsonl",
) -> int:
    """Delete log files older than retention period.

    Returns:
        Number of files deleted.
    """
    if not logs_dir.exists():
        return 0

    cutoff = datetime.now(UTC) - timedelta(days=retention_days)
    deleted = 0

    for entry in logs_dir.iterdir():
        if not entry.is_file() or not entry.name.endswith(suffix):
            continue
        try:
            mtime = datetime.fromtimestamp(entry.stat().st_mtime, UTC)
            if mtime < cutoff:
                entry.unlink()
                deleted += 1
        except OSError:
            pass  # Ignore errors on individual files

    return deleted


def _component(logger_name: str) -> str:
    parts = logger_name.split(".")
    if len(parts) >= 2 and parts[0] == "newsdesk":
        return parts[1]
    return parts[0]


_RESERVED_RECORD_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "component"}


def _record_extra(record: logging.LogRecord) -> dict[str, object]:
    """Collect the fields passed through ``extra=`` on a log call."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_RECORD_KEYS and not key.startswith("_")
    }


class JSONLHandler(logging.Handler):
    """Handler that writes structured log entries to a JSONL file.

    Logs are written to ~/.newsdesk/logs/YYYY-MM-DD.jsonl, one JSON object
    per line, rotated daily and pruned after the retention period.
    """

    def __init__(
        self,
        logs_dir: Path,
        retention_days: int = DEFAULT_LOG_RETENTION_DAYS,
    ):
        super().__init__()
        self._logs_dir = logs_dir
        self._logs_dir.mkdir(parents=True, exist_ok=True)
        self._retention_days = retention_days
        self._current_date: str | None = None
        self._file: TextIO | None = None

    def _get_log_file(self) -> TextIO:
        today = datetime.now(UTC).strftime("%Y-%m-%d")
        if self._current_date != today or self._file is None:
            if self._file:
                self._file.close()
            self._current_date = today
            log_path = self._logs_dir / f"{today}.jsonl"
            self._file = log_path.open("a", encoding="utf-8")

            # Prune old logs on rotation (once per day)
            prune_old_logs(self._logs_dir, self._retention_days)

        return self._file

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry: dict[str, object] = {
                "ts": datetime.now(UTC).isoformat(),
                "level": record.levelname,
                "component": _component(record.name),
                "logger": record.name,
                "message": _redactor.redact(record.getMessage()),
            }

            if record.exc_info:
                formatter = self.formatter or logging.Formatter()
                exception_text = formatter.formatException(record.exc_info)
                entry["exception"] = _redactor.redact(exception_text)

            if extra := _record_extra(record):
                redacted_str = _redactor.redact(json.dumps(extra, default=str))
                try:
                    entry["extra"] = json.loads(redacted_str)
                except json.JSONDecodeError:
                    entry["extra"] = {"_redacted_raw": redacted_str}

            log_file = self._get_log_file()
            log_file.write(json.dumps(entry) + "\n")
            log_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        if self._file:
            self._file.close()
            self._file = None
        super().close()


class ComponentFormatter(logging.Formatter):
    """Formatter that shortens logger paths to component names.

    - newsdesk.digests.poller -> digests
    - newsdesk.scheduling.controller -> scheduling
    """

    def format(self, record: logging.LogRecord) -> str:
        record.component = _component(record.name)
        return _redactor.redact(super().format(record))


# Third-party loggers that are too noisy at INFO level
NOISY_LOGGERS = [
    "httpx",
    "httpcore",
]


def configure_logging(
    level: str | None = None,
    use_rich: bool = False,
    log_to_file: bool = False,
) -> None:
    """Configure logging for newsdesk.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses NEWSDESK_LOG_LEVEL env var or WARNING.
        use_rich: Use Rich handler for colorful output (watch mode).
        log_to_file: Also write logs to JSONL files in ~/.newsdesk/logs/.
    """
    from newsdesk.config.paths import get_logs_path

    if level is None:
        level = os.environ.get("NEWSDESK_LOG_LEVEL", "WARNING").upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        level = "WARNING"

    log_level = getattr(logging, level)

    handlers: list[logging.Handler] = []

    if use_rich:
        from rich.logging import RichHandler

        console_handler: logging.Handler = RichHandler(
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
            markup=False,
        )
        console_handler.setFormatter(ComponentFormatter("%(component)s | %(message)s"))
    else:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            ComponentFormatter(
                "%(asctime)s | %(levelname)-8s | %(component)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )
    handlers.append(console_handler)

    if log_to_file:
        file_handler = JSONLHandler(get_logs_path())
        file_handler.setLevel(logging.DEBUG if level == "DEBUG" else logging.INFO)
        handlers.append(file_handler)

    logging.basicConfig(
        level=min(log_level, logging.INFO) if log_to_file else log_level,
        handlers=handlers,
        force=True,
    )
    console_handler.setLevel(log_level)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
