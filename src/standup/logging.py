"""Logging setup for the standup bot.

``configure_logging()`` is called once by the ``serve`` command. Modules log
snake_case event names and put details in dotted ``extra`` keys:

    logger.info("standup_fired", extra={"standup.room": room})

DEBUG covers per-tick evaluation, INFO standup changes and deliveries,
WARNING skipped trigger lines, ERROR failed deliveries.
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any, TextIO

LOG_RETENTION_DAYS = 7
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Group 1 of each pattern is the part that gets masked
SECRET_PATTERNS: list[str] = [
    r"\b(\d{8,}:[A-Za-z0-9_-]{30,})\b",  # telegram bot token
    r"https?://([0-9a-f]{16,})@",  # sentry dsn public key
    r"\b[A-Z0-9_]+(?:KEY|TOKEN|SECRET|PASSWORD|DSN)\s*[=:]\s*([^\s\"']{8,})",
    r"\bBearer\s+([A-Za-z0-9._\-+=]{20,})\b",
]

NOISY_LOGGERS = ["aiohttp", "aiogram", "aiogram.event"]

_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "component"}


@dataclass
class SecretRedactor:
    """Masks bot tokens, DSN keys and similar secrets in log text.

    Long secrets keep their first and last four characters.
    """

    patterns: list[re.Pattern[str]] = field(default_factory=list)
    enabled: bool = True

    def __post_init__(self) -> None:
        if not self.patterns:
            self.patterns = [re.compile(p, re.IGNORECASE) for p in SECRET_PATTERNS]

    def redact(self, text: str) -> str:
        if not self.enabled or not text:
            return text
        for pattern in self.patterns:
            text = pattern.sub(self._mask, text)
        return text

    @staticmethod
    def _mask(match: re.Match[str]) -> str:
        whole = match.group(0)
        secret = match.group(1)
        if "..." in secret:
            return whole
        masked = "***" if len(secret) < 12 else f"{secret[:4]}...{secret[-4:]}"
        return whole.replace(secret, masked)


_redactor = SecretRedactor()


def prune_old_logs(
    logs_dir: Path,
    retention_days: int = LOG_RETENTION_DAYS,
    suffix: str = ".jsonl",
) -> int:
    """Remove ``*.jsonl`` files last modified before the retention window.

    Returns:
        How many files were removed.
    """
    if not logs_dir.exists():
        return 0

    cutoff = datetime.now(UTC) - timedelta(days=retention_days)
    removed = 0
    for path in logs_dir.glob(f"*{suffix}"):
        try:
            if datetime.fromtimestamp(path.stat().st_mtime, UTC) < cutoff:
                path.unlink()
                removed += 1
        except OSError:
            continue
    return removed


def _component(name: str) -> str:
    # standup.scheduling.watcher -> scheduling
    parts = name.split(".")
    if len(parts) >= 2 and parts[0] == "standup":
        return parts[1]
    return parts[0]


def record_extra(record: logging.LogRecord) -> dict[str, Any]:
    """Return the fields passed via ``extra=`` on a log call."""
    return {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}


class JSONLHandler(logging.Handler):
    """Appends one redacted JSON object per record to ``logs/YYYY-MM-DD.jsonl``.

    A new file is opened when the UTC date changes, and old files are
    pruned at that point.
    """

    def __init__(self, logs_dir: Path, retention_days: int = LOG_RETENTION_DAYS):
        super().__init__()
        logs_dir.mkdir(parents=True, exist_ok=True)
        self._logs_dir = logs_dir
        self._retention_days = retention_days
        self._date: str | None = None
        self._file: TextIO | None = None

    def _stream(self) -> TextIO:
        today = datetime.now(UTC).strftime("%Y-%m-%d")
        if self._file is None or self._date != today:
            if self._file is not None:
                self._file.close()
            self._date = today
            self._file = (self._logs_dir / f"{today}.jsonl").open("a", encoding="utf-8")
            prune_old_logs(self._logs_dir, self._retention_days)
        return self._file

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry: dict[str, Any] = {
                "ts": datetime.now(UTC).isoformat(),
                "level": record.levelname,
                "component": _component(record.name),
                "logger": record.name,
                "message": _redactor.redact(record.getMessage()),
            }
            if record.exc_info:
                formatter = self.formatter or logging.Formatter()
                entry["exception"] = _redactor.redact(
                    formatter.formatException(record.exc_info)
                )
            extra = record_extra(record)
            if extra:
                redacted = _redactor.redact(json.dumps(extra, default=str))
                try:
                    entry["extra"] = json.loads(redacted)
                except json.JSONDecodeError:
                    entry["extra"] = {"_redacted_raw": redacted}

            stream = self._stream()
            stream.write(json.dumps(entry) + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
        super().close()


class ComponentFormatter(logging.Formatter):
    """Adds ``%(component)s`` and appends extras as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        record.component = _component(record.name)
        text = super().format(record)
        extra = record_extra(record)
        if extra:
            text += " " + " ".join(f"{k}={v}" for k, v in extra.items())
        return _redactor.redact(text)


def configure_logging(
    level: str | None = None,
    use_rich: bool = False,
    log_to_file: bool = False,
) -> None:
    """Install the root handlers.

    Args:
        level: DEBUG, INFO, WARNING or ERROR. Defaults to ``STANDUP_LOG_LEVEL``
            and falls back to INFO for anything unrecognised.
        use_rich: Log to the console through rich (server mode).
        log_to_file: Also write JSONL files under ``$STANDUP_HOME/logs``.
    """
    from standup.config.paths import get_logs_path

    level = (level or os.environ.get("STANDUP_LOG_LEVEL", "INFO")).upper()
    if level not in LEVELS:
        level = "INFO"
    log_level = getattr(logging, level)

    if use_rich:
        from rich.logging import RichHandler

        console: logging.Handler = RichHandler(
            rich_tracebacks=False, show_path=False, show_time=True, markup=False
        )
        console.setFormatter(ComponentFormatter("%(component)s | %(message)s"))
    else:
        console = logging.StreamHandler()
        console.setFormatter(
            ComponentFormatter(
                "%(asctime)s | %(levelname)-8s | %(component)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )
    handlers = [console]

    if log_to_file:
        file_handler = JSONLHandler(get_logs_path())
        file_handler.setLevel(log_level)
        handlers.append(file_handler)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
