"""Capture of exceptions that escape Qt slots.

PyQt6 aborts the process when a slot raises, for example an
``on_row_select`` callback failing inside the row checkbox handler, unless
``sys.excepthook`` has been replaced. `ErrorHandlingService.install` swaps in
hooks for the main thread and for worker threads. Each captured exception is
kept in a small ring buffer, logged on ``datagrid.errors`` and published as
``GridEvent.UNCAUGHT_EXCEPTION``; the previous hook then still runs.
"""

from __future__ import annotations

import logging
import sys
import threading
import traceback
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional, Tuple

from datagrid.config import settings

from .event_bus import EventBus, GridEvent, resolve_event_bus

__all__ = ["ErrorRecord", "ErrorHandlingService"]


@dataclass(frozen=True)
class ErrorRecord:
    exc_type: type
    exc_value: BaseException
    traceback_text: str
    iso_time: str
    thread_name: str

    def summary(self, max_len: int = 120) -> str:
        text = f"{self.exc_type.__name__}: {self.exc_value}"
        return text if len(text) <= max_len else text[: max_len - 3] + "..."

    def payload(self) -> Dict[str, Any]:
        return {
            "type": self.exc_type.__name__,
            "message": str(self.exc_value),
            "thread": self.thread_name,
            "iso_time": self.iso_time,
        }


class ErrorHandlingService:
    """Installable ``sys.excepthook`` / ``threading.excepthook`` pair.

    Usage:
        svc = ErrorHandlingService()
        svc.install()
        ... run the Qt event loop ...
        svc.uninstall()
    """

    def __init__(
        self,
        *,
        capacity: int = settings.ERROR_CAPACITY,
        logger: logging.Logger | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self._records: Deque[ErrorRecord] = deque(maxlen=max(1, capacity))
        self._logger = logger or logging.getLogger("datagrid.errors")
        self._event_bus = event_bus
        self._saved_hooks: Optional[Tuple[Any, Any]] = None

    @property
    def installed(self) -> bool:
        return self._saved_hooks is not None

    def install(self) -> None:
        if self._saved_hooks is not None:
            return
        self._saved_hooks = (sys.excepthook, threading.excepthook)
        sys.excepthook = self._on_uncaught
        threading.excepthook = self._on_thread_uncaught

    def uninstall(self) -> None:
        if self._saved_hooks is None:
            return
        sys.excepthook, threading.excepthook = self._saved_hooks
        self._saved_hooks = None

    def _on_uncaught(self, exc_type, exc_value, tb):  # pragma: no cover - interpreter hook
        previous = self._saved_hooks[0] if self._saved_hooks else sys.__excepthook__
        self.handle_exception(exc_type, exc_value, tb)
        previous(exc_type, exc_value, tb)

    def _on_thread_uncaught(self, args):  # pragma: no cover - interpreter hook
        previous = self._saved_hooks[1] if self._saved_hooks else threading.__excepthook__
        self.handle_exception(args.exc_type, args.exc_value, args.exc_traceback, thread=args.thread)
        previous(args)

    def handle_exception(
        self, exc_type, exc_value, tb, *, thread: Optional[threading.Thread] = None
    ) -> ErrorRecord:
        """Record, log and publish one exception; callable without installed hooks."""
        record = ErrorRecord(
            exc_type=exc_type,
            exc_value=exc_value,
            traceback_text="".join(traceback.format_exception(exc_type, exc_value, tb)),
            iso_time=datetime.now(timezone.utc).isoformat(),
            thread_name=(thread or threading.current_thread()).name,
        )
        self._records.append(record)
        self._logger.error("Uncaught exception (%s) %s", record.thread_name, record.summary())
        bus = resolve_event_bus(self._event_bus)
        if bus is not None:
            bus.publish(GridEvent.UNCAUGHT_EXCEPTION, record.payload())
        return record

    def recent_errors(self) -> List[ErrorRecord]:
        return list(self._records)
