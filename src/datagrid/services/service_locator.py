"""Process-wide registry of the services shared by grid components.

`create_app` registers the event bus, the logging service and the error
service under the well-known keys below. View models and services built
without an explicit event bus publish to whichever bus is registered here.
"""

from __future__ import annotations

from threading import RLock
from typing import Any, Dict

__all__ = [
    "EVENT_BUS",
    "LOGGING_SERVICE",
    "ERROR_SERVICE",
    "ServiceLocator",
    "ServiceAlreadyRegisteredError",
    "ServiceNotFoundError",
    "services",
]

EVENT_BUS = "event_bus"
LOGGING_SERVICE = "logging_service"
ERROR_SERVICE = "error_service"


class ServiceAlreadyRegisteredError(RuntimeError):
    """Raised when a key is registered twice without ``replace=True``."""


class ServiceNotFoundError(KeyError):
    """Raised by `ServiceLocator.get` for an unknown key."""


class ServiceLocator:
    """Thread-safe key -> service mapping."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._entries: Dict[str, Any] = {}

    def register(self, key: str, service: Any, *, replace: bool = False) -> None:
        with self._lock:
            if key in self._entries and not replace:
                raise ServiceAlreadyRegisteredError(f"Service '{key}' already registered")
            self._entries[key] = service

    def get(self, key: str) -> Any:
        with self._lock:
            try:
                return self._entries[key]
            except KeyError:
                raise ServiceNotFoundError(key) from None

    def try_get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._entries.get(key, default)

    def unregister(self, key: str, service: Any = None) -> bool:
        """Remove ``key``; with ``service`` given, only if it is still the one registered."""
        with self._lock:
            if key not in self._entries:
                return False
            if service is not None and self._entries[key] is not service:
                return False
            del self._entries[key]
            return True

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


services = ServiceLocator()
