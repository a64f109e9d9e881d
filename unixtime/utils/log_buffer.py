"""Ring buffer of recent log records, served by the /api/logs route."""
from __future__ import annotations

import logging
from collections import deque
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Deque, List


class LogBufferHandler(logging.Handler):
    """Keep the last ``capacity`` formatted records in memory."""

    def __init__(self, capacity: int = 1000) -> None:
        super().__init__()
        self.capacity = capacity
        self._records: Deque[tuple[int, dict[str, Any]]] = deque(maxlen=capacity)
        self._lock = Lock()

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - thin wrapper
        formatter = self.formatter or logging.Formatter("%(message)s")
        try:
            message = formatter.format(record)
        except Exception:  # pragma: no cover - formatting errors fall back to the raw message
            message = record.getMessage()

        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": message,
        }
        if record.exc_info:
            entry["exception"] = formatter.formatException(record.exc_info)  # type: ignore[arg-type]

        with self._lock:
            self._records.append((record.levelno, entry))

    def get_entries(self, limit: int, min_level: int = logging.NOTSET) -> List[dict[str, Any]]:
        """Return up to ``limit`` newest entries at or above ``min_level``, oldest first."""
        if limit <= 0:
            limit = self.capacity
        with self._lock:
            entries = [entry for levelno, entry in self._records if levelno >= min_level]
        return entries[-limit:]

    def size(self) -> int:
        with self._lock:
            return len(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


_log_buffer_handler: LogBufferHandler | None = None


def get_log_buffer_handler(capacity: int = 1000) -> LogBufferHandler:
    """Return the process-wide buffer handler; ``capacity`` applies on first call."""
    global _log_buffer_handler
    if _log_buffer_handler is None:
        _log_buffer_handler = LogBufferHandler(capacity=capacity)
    return _log_buffer_handler
