"""Synchronous publish/subscribe for grid state changes.

The table view model announces sort, selection, data and loading changes
here; the logging and error services announce captured log records and
uncaught exceptions. Handlers run on the publishing thread in subscription
order. A failing handler is recorded in ``EventBus.errors`` and the
remaining handlers still run.

Each published event except ``LOG_RECORD_ADDED`` is also logged at DEBUG as
a one-line description (see `describe_event`), so the logging service keeps
a readable trace of what the grid did.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .service_locator import EVENT_BUS, services

__all__ = [
    "GridEvent",
    "Event",
    "EventBus",
    "Subscription",
    "describe_event",
    "resolve_event_bus",
]

logger = logging.getLogger(__name__)


class GridEvent(str, Enum):
    SORT_CHANGED = "sort_changed"  # {"column", "field", "direction"}
    SELECTION_CHANGED = "selection_changed"  # {"count"}
    DATA_REPLACED = "data_replaced"  # {"rows"}
    LOADING_CHANGED = "loading_changed"  # {"loading"}
    LOG_RECORD_ADDED = "log_record_added"  # {"level", "component", "message"}
    UNCAUGHT_EXCEPTION = "uncaught_exception"  # {"type", "message", "thread", "iso_time"}


def describe_event(name: GridEvent, payload: Mapping[str, Any]) -> str:
    """Render a grid event as a short human readable line."""
    if name is GridEvent.SORT_CHANGED:
        return f"{name.value}: {payload.get('column')} {payload.get('direction')}"
    if name is GridEvent.SELECTION_CHANGED:
        count = payload.get("count", 0)
        return f"{name.value}: {count} row{'' if count == 1 else 's'} selected"
    if name is GridEvent.DATA_REPLACED:
        return f"{name.value}: {payload.get('rows', 0)} rows"
    if name is GridEvent.LOADING_CHANGED:
        return f"{name.value}: {'on' if payload.get('loading') else 'off'}"
    if name is GridEvent.UNCAUGHT_EXCEPTION:
        return f"{name.value}: {payload.get('type')}: {payload.get('message')}"
    if name is GridEvent.LOG_RECORD_ADDED:
        return f"{name.value}: {payload.get('level')} {payload.get('component')}"
    return name.value


@dataclass(frozen=True)
class Event:
    name: GridEvent
    payload: Mapping[str, Any] = field(default_factory=dict)
    timestamp: float = 0.0

    def describe(self) -> str:
        return describe_event(self.name, self.payload)


Handler = Callable[[Event], None]


@dataclass
class Subscription:
    event: GridEvent
    handler: Handler
    active: bool = True


class EventBus:
    """Dispatcher keyed by `GridEvent`.

    The registry lock is released before handlers run, so a handler may
    subscribe or unsubscribe while an event is being delivered.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[GridEvent, List[Subscription]] = {}
        self._errors: List[Tuple[Event, Exception]] = []

    def subscribe(self, name: GridEvent, handler: Handler) -> Subscription:
        sub = Subscription(GridEvent(name), handler)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        sub.active = False
        with self._lock:
            bucket = self._subs.get(sub.event, [])
            remaining = [s for s in bucket if s is not sub]
            if remaining:
                self._subs[sub.event] = remaining
            else:
                self._subs.pop(sub.event, None)

    def publish(self, name: GridEvent, payload: Optional[Mapping[str, Any]] = None) -> Event:
        evt = Event(GridEvent(name), dict(payload or {}), perf_counter())
        if evt.name is not GridEvent.LOG_RECORD_ADDED and logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s", evt.describe())
        with self._lock:
            subs = list(self._subs.get(evt.name, ()))
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - one handler must not starve the rest
                with self._lock:
                    self._errors.append((evt, exc))
        return evt

    @property
    def errors(self) -> List[Tuple[Event, Exception]]:
        with self._lock:
            return list(self._errors)

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()


def resolve_event_bus(explicit: Optional[EventBus] = None) -> Optional[EventBus]:
    """Return ``explicit`` if given, else the bus registered with `services`."""
    if explicit is not None:
        return explicit
    candidate = services.try_get(EVENT_BUS)
    return candidate if isinstance(candidate, EventBus) else None
