"""Message center used as the ``message`` component.

Keeps a short history of user-facing notifications and broadcasts each one as
``EditorEvent.MESSAGE_SHOWN`` so a toast host or status bar can render it.
Rendering itself is left to those widgets.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from editorkit.services.event_bus import EditorEvent, EventBus

__all__ = ["MessageEntry", "MessageCenter"]

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "success": logging.INFO,
}


@dataclass(frozen=True)
class MessageEntry:
    level: str  # 'error', 'warning', 'info', 'success'
    text: str
    timestamp: float


class MessageCenter:
    def __init__(self, event_bus: Optional[EventBus] = None, capacity: int = 50) -> None:
        self._event_bus = event_bus
        self._history: Deque[MessageEntry] = deque(maxlen=max(1, capacity))

    def error(self, text: str) -> None:
        self._show("error", text)

    def warning(self, text: str) -> None:
        self._show("warning", text)

    def info(self, text: str) -> None:
        self._show("info", text)

    def success(self, text: str) -> None:
        self._show("success", text)

    def _show(self, level: str, text: str) -> None:
        entry = MessageEntry(level=level, text=text, timestamp=time.time())
        self._history.append(entry)
        logger.log(_LOG_LEVELS[level], text)
        if self._event_bus is not None:
            self._event_bus.publish(
                EditorEvent.MESSAGE_SHOWN, {"level": level, "text": text}
            )

    def history(self, level: Optional[str] = None) -> List[MessageEntry]:
        if level is None:
            return list(self._history)
        return [e for e in self._history if e.level == level]

    def last(self) -> Optional[MessageEntry]:
        return self._history[-1] if self._history else None
