"""Logging service.

Captures recent ``editorkit`` log records into a ring buffer and emits
``EditorEvent.LOG_RECORD_ADDED`` on the session bus so a debug panel can show
registry anomalies (duplicate registrations, missing instances) live.

Design goals:
 - Headless testability (no Qt dependency here)
 - Filtering by level name or logger name substring
 - Capacity-bound ring buffer with O(1) append
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional

from .event_bus import EditorEvent, EventBus

__all__ = [
    "LogEntry",
    "LoggingService",
]


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float
    pathname: str
    lineno: int


class _RingBufferHandler(logging.Handler):
    def __init__(self, svc: "LoggingService") -> None:
        super().__init__()
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        self._svc._ingest_record(record)


class LoggingService:
    def __init__(
        self,
        event_bus: Optional[EventBus] = None,
        capacity: int = 500,
        logger_name: str = "editorkit",
    ) -> None:
        self._capacity = capacity
        self._event_bus = event_bus
        self._logger_name = logger_name
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._handler = _RingBufferHandler(self)
        self._handler.setLevel(logging.DEBUG)
        self._attached = False
        self._publishing = False
        self._level_counts: Dict[str, int] = {}

    # Lifecycle --------------------------------------------------------
    def attach(self) -> None:
        if self._attached:
            return
        logging.getLogger(self._logger_name).addHandler(self._handler)
        self._attached = True

    def detach(self) -> None:
        if not self._attached:
            return
        logging.getLogger(self._logger_name).removeHandler(self._handler)
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    # Internal ingestion -----------------------------------------------
    def _ingest_record(self, record: logging.LogRecord) -> None:
        entry = LogEntry(
            level=record.levelname,
            name=record.name,
            message=record.getMessage(),
            created=record.created,
            pathname=record.pathname,
            lineno=record.lineno,
        )
        self._entries.append(entry)
        self._level_counts[entry.level] = self._level_counts.get(entry.level, 0) + 1
        # Records logged by log_record_added subscribers are kept but not re-announced.
        if self._event_bus is None or self._publishing:
            return
        self._publishing = True
        try:
            self._event_bus.publish(
                EditorEvent.LOG_RECORD_ADDED,
                {
                    "level": entry.level,
                    "name": entry.name,
                    "message": entry.message[:120],
                    "created": entry.created,
                },
            )
        finally:
            self._publishing = False

    # Query ------------------------------------------------------------
    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        data = list(self._entries)
        return data[-limit:] if limit is not None else data

    def filter(
        self, *, level: str | None = None, name_contains: str | None = None
    ) -> List[LogEntry]:
        out: List[LogEntry] = []
        for e in self.recent():
            if level and e.level != level:
                continue
            if name_contains and name_contains not in e.name:
                continue
            out.append(e)
        return out

    def level_counts(self) -> Dict[str, int]:
        """Records seen per level since the last ``clear``, evicted ones included."""
        return dict(self._level_counts)

    def clear(self) -> None:
        self._entries.clear()
        self._level_counts.clear()
