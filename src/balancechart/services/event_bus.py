"""Chart signal bus.

Lightweight synchronous publish/subscribe used by the scrub controller and
the reveal timeline to announce discrete side effects (scrub started/ended,
selection ticks for haptics, reveal completion). The core only signals; the
consumer performs the effect.

Goals:
 - No Qt dependency (widgets bridge events to Qt signals)
 - Error isolation: a failing handler is recorded and logged, the publish
   cycle continues
 - One-shot subscriptions and cancellable handles
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = [
    "ChartEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]

log = logging.getLogger(__name__)


class ChartEvent(str, Enum):
    SCRUB_STARTED = "scrub_started"
    SCRUB_CHANGED = "scrub_changed"
    SCRUB_SELECTION_CHANGED = "scrub_selection_changed"
    SCRUB_ENDED = "scrub_ended"
    REVEAL_COMPLETED = "reveal_completed"


@dataclass
class Event:
    name: str
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class EventBus:
    """Synchronous dispatcher.

    Handlers run outside the lock (snapshot first) so they may subscribe or
    unsubscribe re-entrantly.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    def subscribe(
        self, name: str | ChartEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        key = name.value if isinstance(name, ChartEvent) else name
        sub = Subscription(event=key, handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(key, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket:
                self._subs[sub.event] = [s for s in bucket if s is not sub]
                if not self._subs[sub.event]:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    def publish(self, name: str | ChartEvent, payload: Any = None) -> Event:
        key = name.value if isinstance(name, ChartEvent) else name
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
        spent: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                log.warning("handler for %s failed: %s", key, exc)
                with self._lock:
                    self._errors.append((evt, exc))
            if sub.once:
                spent.append(sub)
        for sub in spent:
            self.unsubscribe(sub)
        return evt

    def subscriber_count(self, name: str | ChartEvent) -> int:
        key = name.value if isinstance(name, ChartEvent) else name
        with self._lock:
            return len(self._subs.get(key, ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
