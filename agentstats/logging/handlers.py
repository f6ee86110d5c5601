"""
Hook log handler.

Every record becomes one line of hook.jsonl. Records whose message is
already a serialized HookLogEntry are written unchanged; anything else
(warnings from the logging package itself, ad hoc messages) is wrapped.
"""

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path


class HookLogHandler(RotatingFileHandler):
    """Size-rotated JSONL file handler. The file is opened on first write."""

    def __init__(self, path: str | Path, max_bytes: int, backup_count: int):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
            delay=True,
        )

    def _as_line(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        try:
            payload = json.loads(message)
        except json.JSONDecodeError:
            payload = None
        if not isinstance(payload, dict):
            payload = {
                "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "message": message,
            }
        return json.dumps(payload, default=str)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self._as_line(record)
            # Rollover closes the stream; with delay=True it is reopened here
            if self.shouldRollover(record):
                self.doRollover()
            if self.stream is None:
                self.stream = self._open()
            self.stream.write(line + "\n")
            self.flush()
        except Exception:
            self.handleError(record)


def create_hook_logger(
    name: str,
    path: Path,
    level: str = "INFO",
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Build (or rebuild) the named logger so that it writes only to path.

    Handlers left over from an earlier build are closed first, so pointing
    the log at a new directory does not leak file descriptors.

    Raises:
        OSError: If the log directory cannot be created
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    logger.addHandler(HookLogHandler(path, max_bytes=max_bytes, backup_count=backup_count))
    logger.propagate = False
    return logger
