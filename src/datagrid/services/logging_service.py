"""Logging service.

Keeps the most recent records logged under the ``datagrid`` package logger
in a ring buffer, for a diagnostics panel next to the table, and announces
each one as ``GridEvent.LOG_RECORD_ADDED``.

Entries are tagged with the component that logged them, i.e. the last
segment of the logger name: ``sort_engine``, ``selection_tracker``,
``data_table_viewmodel``, ``event_bus``, ``errors``...

Headless: no Qt dependency.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from threading import RLock
from typing import Deque, List, Optional

from datagrid.config import settings

from .event_bus import EventBus, GridEvent, resolve_event_bus

__all__ = ["PACKAGE_LOGGER", "LogEntry", "LoggingService", "component_of"]

PACKAGE_LOGGER = "datagrid"


def component_of(logger_name: str) -> str:
    return logger_name.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class LogEntry:
    levelno: int
    level: str
    component: str
    logger: str
    message: str
    created: float


class _BufferHandler(logging.Handler):
    def __init__(self, service: "LoggingService") -> None:
        super().__init__(logging.DEBUG)
        self._service = service

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._service._append(record)
        except Exception:  # noqa: BLE001 - logging handlers report, never raise
            self.handleError(record)


class LoggingService:
    def __init__(self, capacity: int = settings.LOG_CAPACITY, event_bus: EventBus | None = None):
        self._lock = RLock()
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._handler = _BufferHandler(self)
        self._event_bus = event_bus
        self._saved_level: Optional[int] = None

    # Lifecycle --------------------------------------------------------
    def attach(self, level: int = logging.DEBUG) -> None:
        """Start capturing ``datagrid`` records at ``level`` and above."""
        if self.attached:
            return
        package = logging.getLogger(PACKAGE_LOGGER)
        self._saved_level = package.level
        package.setLevel(level)
        package.addHandler(self._handler)

    def detach(self) -> None:
        if not self.attached:
            return
        package = logging.getLogger(PACKAGE_LOGGER)
        package.removeHandler(self._handler)
        package.setLevel(self._saved_level or logging.NOTSET)
        self._saved_level = None

    @property
    def attached(self) -> bool:
        return self._saved_level is not None

    def _append(self, record: logging.LogRecord) -> None:
        entry = LogEntry(
            levelno=record.levelno,
            level=record.levelname,
            component=component_of(record.name),
            logger=record.name,
            message=record.getMessage(),
            created=record.created,
        )
        with self._lock:
            self._entries.append(entry)
        bus = resolve_event_bus(self._event_bus)
        if bus is not None:
            bus.publish(
                GridEvent.LOG_RECORD_ADDED,
                {"level": entry.level, "component": entry.component, "message": entry.message[:120]},
            )

    # Query ------------------------------------------------------------
    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        with self._lock:
            data = list(self._entries)
        return data[-limit:] if limit is not None else data

    def filter(self, *, min_level: int = logging.NOTSET, component: str | None = None) -> List[LogEntry]:
        """Entries at ``min_level`` or above, optionally from one component."""
        return [
            e
            for e in self.recent()
            if e.levelno >= min_level and (component is None or e.component == component)
        ]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
