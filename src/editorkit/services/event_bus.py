"""EventBus core.

Synchronous publish/subscribe channel shared by every component of an editor
session. Components never hold references to each other just to broadcast a
state change; they publish a named event with a payload instead.

Goals:
 - Pure fan-out: no queuing, no priority, no cancellation
 - Safe error isolation: one failing handler doesn't break the publish cycle
 - Allow one-shot (once) subscriptions
 - Subscriptions double as listener keys that can be released in bulk
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = [
    "EditorEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]


class EditorEvent(str, Enum):
    LOG_RECORD_ADDED = "log_record_added"
    MESSAGE_SHOWN = "message_shown"
    FEATURES_DETECTED = "features_detected"


@dataclass
class Event:
    type: str  # matches EditorEvent value or custom string
    data: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401 - protocol signature docs implicit
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass(eq=False)
class Subscription:
    """Listener key handed back to the subscriber."""

    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _event_key(name: str | EditorEvent) -> str:
    return name.value if isinstance(name, EditorEvent) else name


class EventBus:
    """Synchronous event dispatcher.

    Handlers run on the publishing thread in subscription order. The
    subscriber list is snapshotted before dispatch so handlers can subscribe
    or unsubscribe recursively.
    """

    def __init__(self) -> None:
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    # ------------------------------------------------------------------
    # Subscription management
    # ------------------------------------------------------------------
    def subscribe(
        self, name: str | EditorEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        key = _event_key(name)
        sub = Subscription(event=key, handler=handler, once=once)
        self._subs.setdefault(key, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        self.unlisten_by_key(sub)

    def unlisten_by_key(self, sub: Subscription) -> bool:
        """Release a listener key.

        Returns True when the key was live, False when it had already been
        released (or never belonged to this bus).
        """
        released = False
        bucket = self._subs.get(sub.event)
        if bucket:
            for i, existing in enumerate(bucket):
                if existing is sub:
                    bucket.pop(i)
                    released = True
                    break
            if not bucket:
                self._subs.pop(sub.event, None)
        if released:
            sub.active = False
        return released

    def clear(self) -> None:
        for bucket in self._subs.values():
            for sub in bucket:
                sub.active = False
        self._subs.clear()
        self._errors.clear()

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------
    def publish(self, name: str | EditorEvent, data: Any = None) -> Event:
        key = _event_key(name)
        evt = Event(type=key, data=data, timestamp=perf_counter())
        # Snapshot subscribers first
        subs = list(self._subs.get(key, ()))
        for sub in subs:
            if not sub.active:
                continue
            if sub.once:
                self.unlisten_by_key(sub)
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - capture any handler failure
                self._errors.append((evt, exc))
        return evt

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def subscriber_count(self, name: str | EditorEvent) -> int:
        return len(self._subs.get(_event_key(name), ()))

    def list_events(self) -> list[str]:
        return list(self._subs.keys())

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        return list(self._errors)
